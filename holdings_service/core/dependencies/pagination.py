"""Cursor pagination parameters for FastAPI routes.

Page size is range-checked by the service against ``PaginationSettings``
so that out-of-range values surface as ``InvalidArgumentException``
problem details, like malformed cursors do.

Usage:
    @router.get("/tokens")
    async def list_tokens(pagination: CursorPagination) -> CursorPage[TokenListItem]:
        return await service.list_tokens(pagination.cursor, pagination.page_size)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query
from pydantic import BaseModel


class CursorParams(BaseModel):
    """Cursor pagination parameters.

    Attributes:
        cursor: Opaque cursor from a previous page, None for the first page.
        page_size: Requested page size, None for the configured default.
    """

    cursor: str | None = None
    page_size: int | None = None

    model_config = {"frozen": True}


def get_cursor_params(
    cursor: Annotated[
        str | None,
        Query(description="Opaque cursor from the previous page's next_cursor"),
    ] = None,
    page_size: Annotated[
        int | None,
        Query(description="Maximum number of items to return"),
    ] = None,
) -> CursorParams:
    """Collect cursor pagination query parameters."""
    return CursorParams(cursor=cursor or None, page_size=page_size)


CursorPagination = Annotated[CursorParams, Depends(get_cursor_params)]

__all__ = [
    "CursorPagination",
    "CursorParams",
    "get_cursor_params",
]
