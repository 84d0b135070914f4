"""Repository for tokens and the address holdings derived from balances.

Owner holdings are resolved in storage: a window over the owner's balance
snapshots marks each token's highest block number, only rows at that block
with a positive value are kept, and the token row supplies the display
fields. Listings are keyset-paginated with the orders from ``ordering``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from holdings_service.core.database import BaseRepository
from holdings_service.core.exceptions import IntegrityViolationException
from holdings_service.core.pagination import KeysetFilter, KeysetPage
from holdings_service.features.tokens.models import Token, TokenBalance
from holdings_service.features.tokens.ordering import MARKET_RANK_ORDER, TYPE_NAME_ORDER

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Row, Select, Subquery
    from sqlalchemy.ext.asyncio import AsyncSession


class TokenRepository(BaseRepository[Token]):
    """Repository for Token with holdings queries.

    Inherits from BaseRepository:
        - list(session, limit, offset) -> Sequence[Token]
        - execute(session, statement, operation) -> Result
        - paginate_keyset(session, statement, keyset, operation) -> KeysetPage

    Feature-specific methods below.
    """

    def __init__(self) -> None:
        """Initialize with Token model."""
        super().__init__(Token)

    @staticmethod
    def latest_balances(owner: str) -> Subquery:
        """Owner's snapshots annotated with their group's highest block.

        Columns: contract_address_hash, value, block_number,
        max_block_number, and block_count (snapshots sharing this block
        within the group, above one only for corrupt data).
        """
        group = (TokenBalance.token_contract_address_hash, TokenBalance.address_hash)
        return (
            select(
                TokenBalance.token_contract_address_hash.label("contract_address_hash"),
                TokenBalance.value,
                TokenBalance.block_number,
                func.max(TokenBalance.block_number).over(partition_by=group).label("max_block_number"),
                func.count()
                .over(partition_by=(*group, TokenBalance.block_number))
                .label("block_count"),
            )
            .where(TokenBalance.address_hash == owner)
            .subquery("latest_balances")
        )

    def holdings_statement(self, owner: str) -> Select[Any]:
        """Select the owner's current holdings, one row per token.

        Rows carry the TokenHolding fields plus ``block_number`` and
        ``block_count``.
        """
        latest = self.latest_balances(owner)
        return (
            select(
                Token.contract_address_hash,
                Token.name,
                Token.symbol,
                Token.type,
                Token.decimals,
                latest.c.value.label("balance"),
                Token.inserted_at,
                Token.circulating_market_cap,
                Token.holder_count,
                latest.c.block_number,
                latest.c.block_count,
            )
            .join_from(latest, Token, Token.contract_address_hash == latest.c.contract_address_hash)
            .where(
                latest.c.block_number == latest.c.max_block_number,
                latest.c.value > 0,
            )
        )

    async def resolve_holdings(self, session: AsyncSession, owner: str) -> Sequence[Row[Any]]:
        """All current holdings of ``owner``, ordered by contract address.

        Raises:
            IntegrityViolationException: If two snapshots tie at a token's
                highest block.
            StorageUnavailableException: If the read fails.
        """
        stmt = self.holdings_statement(owner).order_by(Token.contract_address_hash)
        result = await self.execute(session, stmt, operation="db.resolve_holdings")
        rows = result.all()
        self._check_single_valued(owner, rows)

        self._lazy.debug(lambda: f"db.resolve_holdings({owner}) -> {len(rows)} holdings")
        return rows

    async def page_holdings(
        self,
        session: AsyncSession,
        owner: str,
        *,
        after: Sequence[Any] | None,
        page_size: int,
    ) -> KeysetPage[Row[Any]]:
        """One page of ``owner``'s holdings in type-then-name order.

        Args:
            session: Database session
            owner: Normalized owner address hash
            after: Cursor values (type, name, inserted_at) or None
            page_size: Maximum rows to return

        Raises:
            IntegrityViolationException: If a returned holding comes from
                snapshots tied at the highest block.
        """
        keyset = KeysetFilter(
            TYPE_NAME_ORDER,
            columns={"type": Token.type, "name": Token.name, "inserted_at": Token.inserted_at},
            after=after,
            page_size=page_size,
        )
        page = await self.paginate_keyset(
            session,
            self.holdings_statement(owner),
            keyset,
            operation="db.page_holdings",
        )
        self._check_single_valued(owner, page.items)
        return page

    async def page_tokens(
        self,
        session: AsyncSession,
        *,
        after: Sequence[Any] | None,
        page_size: int,
    ) -> KeysetPage[Token]:
        """One page of all tokens in market-rank order."""
        keyset = KeysetFilter(
            MARKET_RANK_ORDER,
            columns={
                "circulating_market_cap": Token.circulating_market_cap,
                "holder_count": Token.holder_count,
                "name": Token.name,
                "contract_address_hash": Token.contract_address_hash,
            },
            after=after,
            page_size=page_size,
        )
        page = await self.paginate_keyset(
            session,
            select(Token),
            keyset,
            operation="db.page_tokens",
        )
        return KeysetPage(items=[row[0] for row in page.items], has_more=page.has_more)

    def _check_single_valued(self, owner: str, rows: Sequence[Row[Any]]) -> None:
        for row in rows:
            if row.block_count > 1:
                self._logger.error(
                    "Balance snapshots tie at the latest block",
                    extra={
                        "owner": owner,
                        "contract_address_hash": row.contract_address_hash,
                        "block_number": row.block_number,
                        "count": row.block_count,
                        "operation": "db.check_single_valued",
                    },
                )
                raise IntegrityViolationException(
                    detail=f"{row.block_count} balance snapshots share block {row.block_number}",
                    extra={
                        "contract_address_hash": row.contract_address_hash,
                        "block_number": row.block_number,
                    },
                )


_token_repository: TokenRepository | None = None


def get_token_repository() -> TokenRepository:
    """Get the shared TokenRepository instance."""
    global _token_repository
    if _token_repository is None:
        _token_repository = TokenRepository()
    return _token_repository


__all__ = ["TokenRepository", "get_token_repository"]
