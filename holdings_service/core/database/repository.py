"""Minimal generic repository for SQLAlchemy models.

Feature repositories build their statements and hand them to ``execute``
or ``paginate_keyset`` so storage failures are reported consistently.

Example:
    class TokenRepository(BaseRepository[Token]):
        async def by_symbol(self, session: AsyncSession, symbol: str) -> Sequence[Token]:
            result = await self.execute(session, select(Token).where(Token.symbol == symbol))
            return result.scalars().all()
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError

from holdings_service.core.exceptions import StorageUnavailableException
from holdings_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence

    from sqlalchemy import Result, Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from holdings_service.core.pagination import KeysetFilter, KeysetPage


class BaseRepository[T]:
    """Minimal generic repository.

    Provides:
        - list(session, limit, offset) -> Sequence[T]
        - execute(session, statement, operation) -> Result
        - paginate_keyset(session, statement, keyset, operation) -> KeysetPage

    Reads raise StorageUnavailableException when the driver fails; the
    original error is chained. Nothing is retried here.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Token)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    @asynccontextmanager
    async def _storage_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except DBAPIError as e:
            self._logger.error(
                "Storage read failed",
                exc_info=True,
                extra={"entity": self.model.__name__, "operation": operation},
            )
            raise StorageUnavailableException(
                extra={"operation": operation},
            ) from e

    async def execute(
        self,
        session: AsyncSession,
        statement: Select[Any],
        *,
        operation: str = "db.execute",
    ) -> Result[Any]:
        """Execute a read statement, translating driver failures.

        Raises:
            StorageUnavailableException: If the database cannot serve the read.
        """
        async with self._storage_errors(operation):
            return await session.execute(statement)

    async def list(
        self,
        session: AsyncSession,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> Sequence[T]:
        """List entities in primary-key order with offset pagination.

        Args:
            session: Database session
            limit: Maximum results to return
            offset: Number of results to skip

        Returns:
            Sequence of entities
        """
        pk_columns = self.model.__mapper__.primary_key  # type: ignore[attr-defined]
        stmt = select(self.model).order_by(*pk_columns).limit(limit).offset(offset)
        result = await self.execute(session, stmt, operation="db.list")
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list: {self.model.__name__}(limit={limit}, offset={offset}) -> {len(items)} items"
        )
        return items

    async def paginate_keyset(
        self,
        session: AsyncSession,
        statement: Select[Any],
        keyset: KeysetFilter,
        *,
        operation: str = "db.paginate_keyset",
    ) -> KeysetPage[Any]:
        """Execute a keyset-paginated query.

        The keyset filter adds the seek condition, canonical ordering and a
        ``page_size + 1`` limit; the extra row is trimmed off the result.

        Args:
            session: Database session
            statement: Select statement without ordering or limit
            keyset: Keyset filter for the requested page
            operation: Operation name for logs and errors

        Returns:
            KeysetPage of result rows

        Example:
            keyset = KeysetFilter(order, columns, after=None, page_size=50)
            page = await repo.paginate_keyset(session, select(holdings), keyset)
            if page.has_more:
                next_values = order.key_of(page.last)
        """
        result = await self.execute(session, keyset.apply(statement), operation=operation)
        page = keyset.to_page(result.all())

        self._lazy.debug(
            lambda: f"{operation}: {self.model.__name__}(page_size={keyset.page_size}, "
            f"after={'set' if keyset.after is not None else 'start'}) -> "
            f"{len(page.items)} rows, has_more={page.has_more}"
        )
        return page


__all__ = ["BaseRepository"]
