"""Keyset paginator.

``paginate`` pages through an in-memory source already in canonical order;
``KeysetFilter`` applies the same boundary, ordering and limit to a
SQLAlchemy statement so storage does the work. Both fetch one row past the
page to learn whether more items exist.
"""

from __future__ import annotations

from itertools import islice
from typing import TYPE_CHECKING, Any

from holdings_service.core.exceptions import InvalidArgumentException
from holdings_service.core.pagination.schemas import KeysetPage

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sqlalchemy import Select
    from sqlalchemy.sql.elements import ColumnElement

    from holdings_service.core.pagination.cascade import KeysetOrder


def validate_page_size(page_size: int, max_page_size: int | None = None) -> int:
    """Check a requested page size.

    Raises:
        InvalidArgumentException: If ``page_size`` is not a positive integer
            or exceeds ``max_page_size``.
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise InvalidArgumentException(
            detail="page_size must be a positive integer",
            type="invalid-page-size",
            extra={"page_size": page_size},
        )
    if max_page_size is not None and page_size > max_page_size:
        raise InvalidArgumentException(
            detail=f"page_size cannot exceed {max_page_size}",
            type="invalid-page-size",
            extra={"page_size": page_size, "max_page_size": max_page_size},
        )
    return page_size


def paginate[T](
    ordered_source: Iterable[T],
    order: KeysetOrder,
    after: Sequence[Any] | None,
    page_size: int,
) -> KeysetPage[T]:
    """Return the page of ``ordered_source`` that follows ``after``.

    Args:
        ordered_source: Items already in ``order``'s canonical order.
        order: The keyset order the source is sorted by.
        after: Sort-key values of the last item seen, or None for the start.
        page_size: Maximum number of items to return.

    Returns:
        KeysetPage with up to ``page_size`` items.

    Example:
        page = paginate(holdings, TYPE_NAME_ORDER, None, 2)
        page = paginate(holdings, TYPE_NAME_ORDER, TYPE_NAME_ORDER.key_of(page.last), 2)
    """
    validate_page_size(page_size)

    candidates: Iterable[T] = ordered_source
    if after is not None:
        candidates = filter(order.boundary_predicate(after), ordered_source)

    rows = list(islice(candidates, page_size + 1))
    has_more = len(rows) > page_size
    return KeysetPage(items=rows[:page_size], has_more=has_more)


class KeysetFilter:
    """Apply keyset pagination to a SQLAlchemy query.

    Adds:
    1. WHERE clause to seek past the cursor (if one is given)
    2. ORDER BY clause for the canonical order
    3. LIMIT page_size + 1 to detect has_more

    Example:
        stmt = KeysetFilter(
            order=TYPE_NAME_ORDER,
            columns={"type": holdings.c.type, "name": holdings.c.name, ...},
            after=("ERC-20", "Tether", inserted_at),
            page_size=50,
        ).apply(select(holdings))
    """

    def __init__(
        self,
        order: KeysetOrder,
        columns: Mapping[str, ColumnElement[Any]],
        after: Sequence[Any] | None,
        page_size: int,
    ) -> None:
        self.order = order
        self.columns = columns
        self.after = after
        self.page_size = validate_page_size(page_size)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply seek condition, ordering and limit to ``statement``."""
        if self.after is not None:
            statement = statement.where(self.order.boundary_clause(self.columns, self.after))
        statement = statement.order_by(*self.order.order_by(self.columns))
        return statement.limit(self.page_size + 1)

    def to_page[T](self, rows: Sequence[T]) -> KeysetPage[T]:
        """Trim the extra probe row and report whether it existed."""
        has_more = len(rows) > self.page_size
        return KeysetPage(items=list(rows[: self.page_size]), has_more=has_more)


__all__ = ["KeysetFilter", "paginate", "validate_page_size"]
