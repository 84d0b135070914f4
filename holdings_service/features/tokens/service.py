"""Service layer for token holdings and token listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from holdings_service.core.pagination import CursorPage, paginate, validate_page_size
from holdings_service.core.services import BaseService
from holdings_service.core.settings import get_pagination_settings
from holdings_service.core.validators import parse_address_hash
from holdings_service.features.tokens.ordering import (
    TYPE_NAME_ORDER,
    MarketRankCursor,
    TypeNameCursor,
    decode_cursor,
)
from holdings_service.features.tokens.repository import TokenRepository, get_token_repository
from holdings_service.features.tokens.schemas import TokenHolding, TokenListItem

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy.ext.asyncio import AsyncSession

    from holdings_service.core.settings import PaginationSettings


def resolve_page_size(page_size: int | None, settings: PaginationSettings | None = None) -> int:
    """Apply the configured default and maximum to a requested page size.

    Raises:
        InvalidArgumentException: If ``page_size`` is not positive or is
            above the configured maximum.
    """
    settings = settings or get_pagination_settings()
    if page_size is None:
        return settings.default_page_size
    return validate_page_size(page_size, settings.max_page_size)


def paginate_holdings(
    holdings: Iterable[TokenHolding],
    cursor: str | None = None,
    page_size: int | None = None,
) -> CursorPage[TokenHolding]:
    """Page through already-resolved holdings in type-then-name order.

    In-memory counterpart of ``HoldingsService.list_holdings``: given the
    same holdings both emit the same cursors. Names fold with ``str.lower``
    here and with the database's ``lower()`` there; the two agree on ASCII.
    """
    size = resolve_page_size(page_size)
    after = decode_cursor(cursor, TypeNameCursor).values() if cursor else None
    page = paginate(TYPE_NAME_ORDER.sort_items(list(holdings)), TYPE_NAME_ORDER, after, size)
    next_cursor = TypeNameCursor.from_item(page.last).encode() if page.has_more else None
    return CursorPage[TokenHolding](
        items=list(page.items),
        next_cursor=next_cursor,
        has_more=page.has_more,
    )


class HoldingsService(BaseService):
    """Lists owner holdings and ranked tokens with cursor pagination."""

    def __init__(
        self,
        session: AsyncSession,
        repository: TokenRepository | None = None,
        pagination_settings: PaginationSettings | None = None,
    ) -> None:
        super().__init__()
        self._session = session
        self._repository = repository or get_token_repository()
        self._pagination = pagination_settings or get_pagination_settings()

    async def list_holdings(
        self,
        owner: str,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> CursorPage[TokenHolding]:
        """One page of ``owner``'s positive holdings, ordered by type then name.

        Args:
            owner: Owner address hash (0x + 40 hex digits, any case).
            cursor: ``next_cursor`` from the previous page, None to start.
            page_size: Items per page, None for the configured default.

        Returns:
            CursorPage whose ``next_cursor`` is set only when ``has_more``.

        Raises:
            InvalidArgumentException: Bad owner, page size or cursor.
            StorageUnavailableException: The storage read failed.
            IntegrityViolationException: Balance snapshots tie at a token's
                latest block.
        """
        owner = parse_address_hash(owner)
        size = resolve_page_size(page_size, self._pagination)
        after = decode_cursor(cursor, TypeNameCursor).values() if cursor else None

        page = await self._repository.page_holdings(
            self._session, owner, after=after, page_size=size
        )
        items = [TokenHolding.model_validate(row) for row in page.items]
        next_cursor = TypeNameCursor.from_item(items[-1]).encode() if page.has_more else None

        self._lazy.debug(
            lambda: f"service.list_holdings({owner}, page_size={size}) -> {len(items)} items, has_more={page.has_more}"
        )
        return CursorPage[TokenHolding](items=items, next_cursor=next_cursor, has_more=page.has_more)

    async def list_tokens(
        self,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> CursorPage[TokenListItem]:
        """One page of all tokens ranked by market cap, then holder count.

        Raises:
            InvalidArgumentException: Bad page size or cursor.
            StorageUnavailableException: The storage read failed.
        """
        size = resolve_page_size(page_size, self._pagination)
        after = decode_cursor(cursor, MarketRankCursor).values() if cursor else None

        page = await self._repository.page_tokens(self._session, after=after, page_size=size)
        items = [TokenListItem.model_validate(token) for token in page.items]
        next_cursor = MarketRankCursor.from_item(items[-1]).encode() if page.has_more else None

        self._lazy.debug(
            lambda: f"service.list_tokens(page_size={size}) -> {len(items)} items, has_more={page.has_more}"
        )
        return CursorPage[TokenListItem](items=items, next_cursor=next_cursor, has_more=page.has_more)

    async def resolve(self, owner: str) -> list[TokenHolding]:
        """All of ``owner``'s current positive holdings, unpaginated.

        Raises:
            InvalidArgumentException: Bad owner.
            StorageUnavailableException: The storage read failed.
            IntegrityViolationException: Balance snapshots tie at a token's
                latest block.
        """
        owner = parse_address_hash(owner)
        rows = await self._repository.resolve_holdings(self._session, owner)
        holdings = [TokenHolding.model_validate(row) for row in rows]

        self._lazy.debug(lambda: f"service.resolve({owner}) -> {len(holdings)} holdings")
        return holdings


__all__ = ["HoldingsService", "paginate_holdings", "resolve_page_size"]
