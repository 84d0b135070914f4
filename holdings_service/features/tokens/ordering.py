"""Sort modes for token listings and the cursors they emit.

Each mode is a ``KeysetOrder`` plus a cursor model holding the values of
that order's sort fields for the last item on a page:

- ``type_name`` (owner holdings): type DESC, lower(name) ASC NULLS LAST,
  inserted_at DESC.
- ``market_rank`` (token listing): circulating_market_cap DESC NULLS LAST,
  holder_count DESC NULLS LAST, name ASC NULLS LAST,
  contract_address_hash ASC.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from holdings_service.core.exceptions import InvalidArgumentException
from holdings_service.core.pagination import CursorCodec, KeysetOrder, SortField
from holdings_service.features.tokens.models import TokenType

TYPE_NAME_ORDER = KeysetOrder(
    SortField("type", "desc"),
    SortField("name", "asc", nullable=True, case_insensitive=True),
    SortField("inserted_at", "desc"),
)

MARKET_RANK_ORDER = KeysetOrder(
    SortField("circulating_market_cap", "desc", nullable=True),
    SortField("holder_count", "desc", nullable=True),
    SortField("name", "asc", nullable=True),
    SortField("contract_address_hash", "asc"),
)


class _ListingCursor(BaseModel):
    order: ClassVar[KeysetOrder]

    model_config = ConfigDict(frozen=True, extra="forbid")

    @classmethod
    def from_item(cls, item: Any) -> _ListingCursor:
        """Build the cursor pointing just past ``item``."""
        return cls(**dict(zip(cls.order.names, cls.order.key_of(item), strict=True)))

    def values(self) -> tuple[Any, ...]:
        """Sort-key tuple in the order's field order."""
        return self.order.key_of(self)

    def encode(self) -> str:
        return CursorCodec.encode(self)


class TypeNameCursor(_ListingCursor):
    """Continuation point for the ``type_name`` order."""

    order: ClassVar[KeysetOrder] = TYPE_NAME_ORDER

    mode: Literal["type_name"] = "type_name"
    name: str | None
    type: TokenType
    inserted_at: datetime


class MarketRankCursor(_ListingCursor):
    """Continuation point for the ``market_rank`` order."""

    order: ClassVar[KeysetOrder] = MARKET_RANK_ORDER

    mode: Literal["market_rank"] = "market_rank"
    circulating_market_cap: Decimal | None
    holder_count: int | None
    name: str | None
    contract_address_hash: str


ListingCursor = Annotated[TypeNameCursor | MarketRankCursor, Field(discriminator="mode")]

_CURSOR_ADAPTER: TypeAdapter[TypeNameCursor | MarketRankCursor] = TypeAdapter(ListingCursor)


def decode_cursor[C: _ListingCursor](token: str, expected: type[C]) -> C:
    """Decode a cursor token issued for the ``expected`` sort mode.

    Raises:
        InvalidArgumentException: If the token is corrupt or belongs to
            another sort mode.
    """
    cursor = CursorCodec.decode(token, _CURSOR_ADAPTER)
    if not isinstance(cursor, expected):
        raise InvalidArgumentException(
            detail="Cursor was issued for a different listing",
            type="invalid-cursor",
            extra={"mode": cursor.mode},
        )
    return cursor


__all__ = [
    "MARKET_RANK_ORDER",
    "TYPE_NAME_ORDER",
    "ListingCursor",
    "MarketRankCursor",
    "TypeNameCursor",
    "decode_cursor",
]
