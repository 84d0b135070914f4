"""Boundary predicates for keyset pagination over nullable sort keys.

A keyset order is an ordered list of SortField descriptors. From that one
description we derive:

1. the ORDER BY clause list,
2. an in-memory comparator consistent with it,
3. the "strictly after cursor" boundary predicate, both as a SQLAlchemy
   clause (pushed down to storage) and as a Python callable.

The boundary predicate is built innermost-first. For fields f1..fN and
cursor values v1..vN:

    level N:            fN past vN
    level k, vk null:   fk IS NULL AND level(k+1)
    level k, vk set:    fk IS NULL OR fk past vk OR (fk = vk AND level(k+1))

"past" is ``<`` for descending fields and ``>`` for ascending ones. NULLs
always sort last, whatever the direction. The ``fk IS NULL`` disjunct is
dropped for fields declared non-nullable, and the innermost field must be
non-nullable so that the order is total.

Example:
    ORDER BY type DESC, lower(name) ASC NULLS LAST, inserted_at DESC
    with cursor (type=t, name=n, inserted_at=i) gives:

    type < t OR (type = t AND (
        name IS NULL
        OR lower(name) > lower(n)
        OR (lower(name) = lower(n) AND inserted_at < i)))
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, Literal, Protocol

from sqlalchemy import String, and_, func, literal, or_

from holdings_service.core.exceptions import InvalidArgumentException

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

SortDirection = Literal["asc", "desc"]
ItemPredicate = Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class SortField:
    """One level of a composite sort key.

    Attributes:
        name: Attribute name on rows, items and cursors.
        direction: "asc" or "desc".
        nullable: Whether the field may hold NULL (sorted last).
        case_insensitive: Compare ``lower(value)`` instead of the raw value.
    """

    name: str
    direction: SortDirection = "asc"
    nullable: bool = False
    case_insensitive: bool = False

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


class PredicateBuilder[E](Protocol):
    """Primitive operations the cascade is assembled from."""

    def is_null(self, field: SortField) -> E: ...

    def past(self, field: SortField, value: Any) -> E: ...

    def equal(self, field: SortField, value: Any) -> E: ...

    def all_of(self, *parts: E) -> E: ...

    def any_of(self, *parts: E) -> E: ...


class SqlPredicateBuilder:
    """Build SQLAlchemy boolean clauses against a column mapping."""

    def __init__(self, columns: Mapping[str, ColumnElement[Any]]) -> None:
        self._columns = columns

    def column(self, field: SortField) -> ColumnElement[Any]:
        try:
            column = self._columns[field.name]
        except KeyError as e:
            msg = f"No column mapped for sort field {field.name!r}"
            raise KeyError(msg) from e
        return func.lower(column) if field.case_insensitive else column

    def is_null(self, field: SortField) -> ColumnElement[bool]:
        return self._columns[field.name].is_(None)

    def bound(self, field: SortField, value: Any) -> Any:
        """Cursor value as compared against ``column(field)``.

        Case-insensitive values are lowered by the database, so both sides
        of the comparison go through the same ``lower()``.
        """
        if field.case_insensitive and isinstance(value, str):
            return func.lower(literal(value, String()))
        return value

    def past(self, field: SortField, value: Any) -> ColumnElement[bool]:
        column = self.column(field)
        value = self.bound(field, value)
        return column < value if field.descending else column > value

    def equal(self, field: SortField, value: Any) -> ColumnElement[bool]:
        return self.column(field) == self.bound(field, value)

    def all_of(self, *parts: ColumnElement[bool]) -> ColumnElement[bool]:
        return and_(*parts)

    def any_of(self, *parts: ColumnElement[bool]) -> ColumnElement[bool]:
        return or_(*parts)


class PythonPredicateBuilder:
    """Build plain callables evaluated against in-memory items.

    Comparisons against a missing value are false, as with SQL NULL
    comparisons in a WHERE clause.
    """

    def is_null(self, field: SortField) -> ItemPredicate:
        name = field.name
        return lambda item: getattr(item, name) is None

    def past(self, field: SortField, value: Any) -> ItemPredicate:
        op = operator.lt if field.descending else operator.gt
        return self._compare(field, value, op)

    def equal(self, field: SortField, value: Any) -> ItemPredicate:
        return self._compare(field, value, operator.eq)

    def all_of(self, *parts: ItemPredicate) -> ItemPredicate:
        return lambda item: all(part(item) for part in parts)

    def any_of(self, *parts: ItemPredicate) -> ItemPredicate:
        return lambda item: any(part(item) for part in parts)

    @staticmethod
    def _compare(
        field: SortField,
        value: Any,
        op: Callable[[Any, Any], bool],
    ) -> ItemPredicate:
        name = field.name
        target = _fold(field, value)

        def predicate(item: Any) -> bool:
            current = getattr(item, name)
            if current is None:
                return False
            return op(_fold(field, current), target)

        return predicate


def _fold(field: SortField, value: Any) -> Any:
    if field.case_insensitive and isinstance(value, str):
        return value.lower()
    return value


def build_boundary[E](
    fields: Sequence[SortField],
    values: Sequence[Any],
    builder: PredicateBuilder[E],
) -> E:
    """Build the "strictly after cursor" predicate for a composite order.

    Args:
        fields: Sort fields, outermost first.
        values: Cursor values aligned with ``fields``.
        builder: Back end producing the predicate primitives.

    Returns:
        The boundary predicate in the builder's representation.

    Raises:
        InvalidArgumentException: If the value count does not match the
            fields, or a non-nullable field has a null cursor value.
    """
    if not fields:
        msg = "A keyset order needs at least one sort field"
        raise ValueError(msg)
    if len(fields) != len(values):
        raise InvalidArgumentException(
            detail=f"Cursor has {len(values)} values, expected {len(fields)}",
            type="invalid-cursor",
        )

    for field, value in zip(fields, values, strict=True):
        if value is None and not field.nullable:
            raise InvalidArgumentException(
                detail=f"Cursor value for {field.name!r} cannot be null",
                type="invalid-cursor",
                extra={"field": field.name},
            )

    *outer, innermost = zip(fields, values, strict=True)
    predicate = builder.past(*innermost)

    for field, value in reversed(outer):
        if value is None:
            predicate = builder.all_of(builder.is_null(field), predicate)
            continue

        branches = [
            builder.past(field, value),
            builder.all_of(builder.equal(field, value), predicate),
        ]
        if field.nullable:
            branches.insert(0, builder.is_null(field))
        predicate = builder.any_of(*branches)

    return predicate


@dataclass(frozen=True, slots=True, init=False)
class KeysetOrder:
    """A total order over rows, described by its sort fields.

    Example:
        order = KeysetOrder(
            SortField("type", "desc"),
            SortField("name", "asc", nullable=True, case_insensitive=True),
            SortField("inserted_at", "desc"),
        )
        stmt = stmt.where(order.boundary_clause(columns, cursor_values))
        stmt = stmt.order_by(*order.order_by(columns))
    """

    fields: tuple[SortField, ...]

    def __init__(self, *fields: SortField) -> None:
        if not fields:
            msg = "A keyset order needs at least one sort field"
            raise ValueError(msg)
        if fields[-1].nullable:
            msg = f"Innermost sort field {fields[-1].name!r} must be non-nullable"
            raise ValueError(msg)
        object.__setattr__(self, "fields", tuple(fields))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def key_of(self, item: Any) -> tuple[Any, ...]:
        """Extract this order's sort-key tuple from a row, item or cursor."""
        return tuple(getattr(item, name) for name in self.names)

    def order_by(self, columns: Mapping[str, ColumnElement[Any]]) -> list[ColumnElement[Any]]:
        """ORDER BY clauses matching the boundary predicate."""
        builder = SqlPredicateBuilder(columns)
        clauses = []
        for field in self.fields:
            column = builder.column(field)
            clause = column.desc() if field.descending else column.asc()
            if field.nullable:
                clause = clause.nulls_last()
            clauses.append(clause)
        return clauses

    def boundary_clause(
        self,
        columns: Mapping[str, ColumnElement[Any]],
        values: Sequence[Any],
    ) -> ColumnElement[bool]:
        """SQL WHERE clause selecting rows strictly after ``values``."""
        return build_boundary(self.fields, values, SqlPredicateBuilder(columns))

    def boundary_predicate(self, values: Sequence[Any]) -> ItemPredicate:
        """Python predicate selecting items strictly after ``values``."""
        return build_boundary(self.fields, values, PythonPredicateBuilder())

    def compare(self, left: Any, right: Any) -> int:
        """Three-way comparison of two items under this order."""
        for field in self.fields:
            a = _fold(field, getattr(left, field.name))
            b = _fold(field, getattr(right, field.name))
            if a == b:
                continue
            if a is None:
                return 1
            if b is None:
                return -1
            result = -1 if a < b else 1
            return -result if field.descending else result
        return 0

    def sort_items(self, items: Sequence[Any]) -> list[Any]:
        """Return ``items`` in canonical order."""
        return sorted(items, key=cmp_to_key(self.compare))


__all__ = [
    "KeysetOrder",
    "PredicateBuilder",
    "PythonPredicateBuilder",
    "SortDirection",
    "SortField",
    "SqlPredicateBuilder",
    "build_boundary",
]
