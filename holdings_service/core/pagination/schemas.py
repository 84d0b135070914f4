"""Pagination result containers.

KeysetPage is the internal result of one paginated read: the items and a
has_more flag. CursorPage is the caller-facing shape, with the opaque
cursor of the last item present only when more items exist.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(slots=True, frozen=True)
class KeysetPage[T]:
    """One page of a keyset-paginated listing.

    Attributes:
        items: Items on this page, in canonical order.
        has_more: Whether at least one item follows the last one.
    """

    items: Sequence[T]
    has_more: bool

    @property
    def last(self) -> T | None:
        """Last item on the page, the source of the next cursor."""
        return self.items[-1] if self.items else None


class CursorPage[T](BaseModel):
    """REST-style cursor pagination response.

    Usage:
        GET /addresses/0xabc.../tokens?page_size=50
        GET /addresses/0xabc.../tokens?page_size=50&cursor=eyJtIjoidHlwZV9uYW1lIi...

    Attributes:
        items: List of data items
        next_cursor: Cursor for the next page (None at end of data)
        has_more: Whether more items exist after this page
    """

    items: list[T] = Field(
        default_factory=list,
        description="List of items",
    )
    next_cursor: str | None = Field(
        default=None,
        description="Cursor to fetch next page, omitted at end of data",
    )
    has_more: bool = Field(
        default=False,
        description="Whether more items exist",
    )


__all__ = [
    "CursorPage",
    "KeysetPage",
]
