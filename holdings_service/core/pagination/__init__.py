"""Cursor-based keyset pagination over composite, nullable sort keys.

Pages are selected with a "strictly after the last-seen sort key" predicate
instead of OFFSET, so they stay correct while rows are inserted or deleted
between requests:

    order = KeysetOrder(
        SortField("type", "desc"),
        SortField("name", "asc", nullable=True, case_insensitive=True),
        SortField("inserted_at", "desc"),
    )

    # storage push-down
    keyset = KeysetFilter(order, columns, after=cursor_values, page_size=50)
    rows = (await session.execute(keyset.apply(stmt))).all()
    page = keyset.to_page(rows)

    # in-memory source
    page = paginate(ordered_items, order, cursor_values, 50)

Cursors are opaque base64 strings that clients pass back unchanged.
"""

from holdings_service.core.pagination.cascade import (
    KeysetOrder,
    PythonPredicateBuilder,
    SortField,
    SqlPredicateBuilder,
    build_boundary,
)
from holdings_service.core.pagination.cursor import CursorCodec
from holdings_service.core.pagination.keyset import KeysetFilter, paginate, validate_page_size
from holdings_service.core.pagination.schemas import CursorPage, KeysetPage

__all__ = [
    "CursorCodec",
    "CursorPage",
    "KeysetFilter",
    "KeysetOrder",
    "KeysetPage",
    "PythonPredicateBuilder",
    "SortField",
    "SqlPredicateBuilder",
    "build_boundary",
    "paginate",
    "validate_page_size",
]
