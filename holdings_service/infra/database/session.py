"""Database session management for the async SQLAlchemy engine.

The engine is created on first use from ``DatabaseSettings`` so importing
this module never opens a connection. PostgreSQL runs on psycopg 3;
SQLite URLs (aiosqlite) are accepted for local runs.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from holdings_service.core.settings import get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Get the process-wide async engine."""
    db_settings = get_db_settings()
    engine = create_async_engine(
        db_settings.database_url,
        **db_settings.sqlalchemy_engine_kwargs(),
    )
    logger.info(
        "Database engine created",
        extra={"dialect": engine.dialect.name, "pooled": not db_settings.is_sqlite},
    )
    return engine


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the session factory bound to the process-wide engine."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            page = await HoldingsService(session).list_holdings(owner)
    """
    async with get_sessionmaker()() as session:
        try:
            yield session
        finally:
            await session.close()


async def close_database() -> None:
    """Dispose of the engine's connection pool."""
    if get_engine.cache_info().currsize == 0:
        return
    await get_engine().dispose()
    get_sessionmaker.cache_clear()
    get_engine.cache_clear()
    logger.info("Database connections closed")


__all__ = [
    "close_database",
    "get_async_session",
    "get_engine",
    "get_sessionmaker",
]
