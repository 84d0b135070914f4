"""FastAPI dependencies shared across routers."""

from holdings_service.core.dependencies.database import get_db_session
from holdings_service.core.dependencies.pagination import (
    CursorPagination,
    CursorParams,
    get_cursor_params,
)

__all__ = [
    "CursorPagination",
    "CursorParams",
    "get_cursor_params",
    "get_db_session",
]
