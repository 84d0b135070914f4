"""Database infrastructure: engine and session lifecycle."""

from holdings_service.infra.database.session import (
    close_database,
    get_async_session,
    get_engine,
    get_sessionmaker,
)

__all__ = [
    "close_database",
    "get_async_session",
    "get_engine",
    "get_sessionmaker",
]
