"""Database dependencies for FastAPI route handlers.

``get_db_session()`` ties the session lifecycle to the HTTP request. Use
``get_async_session()`` from ``holdings_service.infra.database`` in scripts
and other non-FastAPI code.

Usage:
    @router.get("/tokens")
    async def list_tokens(session: Annotated[AsyncSession, Depends(get_db_session)]):
        ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from holdings_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session


__all__ = ["get_db_session"]
