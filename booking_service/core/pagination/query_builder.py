"""Translate pagination params into SQL clauses, enforcing the config allow-lists.

Both paginators share this builder, so offset and cursor pages accept exactly
the same filters, search, sorting and projection rules.

Filter values use the ``$op:value`` grammar:

    $eq:admin            column = 'admin'
    $in:pending,paid     column IN ('pending', 'paid')
    $ilike:smith         column ILIKE '%smith%'
    $smith               legacy form of $ilike:smith
    admin                bare value, same as $eq:admin

Values are coerced to the column's Python type before they are bound.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import String, and_, cast, or_

from booking_service.core.pagination.contracts import (
    SQL_INT_MAX,
    SQL_INT_MIN,
    FilterOperator,
    SortDirection,
)
from booking_service.core.pagination.exceptions import PaginationValidationError
from booking_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sqlalchemy import Column, ColumnElement, UnaryExpression

    from booking_service.core.pagination.config import PaginationConfig
    from booking_service.core.pagination.params import PaginationOptions, PaginationParams

lazy_logger = get_lazy_logger(__name__)

SortKey = list[tuple[str, SortDirection]]

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def column_python_type(column: Column[Any]) -> type[Any] | None:
    try:
        return column.type.python_type
    except NotImplementedError:
        return None


def _int_in_range(value: int) -> int:
    if not SQL_INT_MIN <= value <= SQL_INT_MAX:
        msg = f"{value} is outside the 64-bit integer range"
        raise ValueError(msg)
    return value


def coerce_value(column: Column[Any], raw: Any) -> Any:
    """Convert a query-string or cursor value to the column's Python type.

    Raises:
        ValueError: The value cannot represent a value of that type.
    """
    if raw is None:
        return None
    python_type = column_python_type(column)
    if python_type is None:
        return raw
    if isinstance(raw, python_type):
        return _int_in_range(raw) if python_type is int else raw
    if not isinstance(raw, str):
        raw = str(raw)

    if python_type is bool:
        lowered = raw.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        msg = f"{raw!r} is not a boolean"
        raise ValueError(msg)
    if python_type is int:
        return _int_in_range(int(raw))
    if python_type is float:
        return float(raw)
    if python_type is Decimal:
        try:
            return Decimal(raw)
        except InvalidOperation as e:
            msg = f"{raw!r} is not a decimal"
            raise ValueError(msg) from e
    if python_type is uuid.UUID:
        return uuid.UUID(raw)
    if python_type is datetime:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if python_type is date:
        return date.fromisoformat(raw)
    if issubclass(python_type, Enum):
        return python_type(raw)
    return raw


class QueryBuilder:
    """Clause factory bound to one ``PaginationConfig``."""

    __slots__ = ("config",)

    def __init__(self, config: PaginationConfig[Any]) -> None:
        self.config = config

    # ──────────────────────────────────────────────────────────────
    # WHERE
    # ──────────────────────────────────────────────────────────────

    def where_clauses(
        self, params: PaginationParams, options: PaginationOptions
    ) -> list[ColumnElement[bool]]:
        """Caller predicates, then filters, then search."""
        clauses: list[ColumnElement[bool]] = list(options.where)
        clauses.extend(self.filter_clauses(params.filters))
        search = self.search_clause(params.search)
        if search is not None:
            clauses.append(search)
        return clauses

    def filter_clauses(
        self, filters: Mapping[str, str | Sequence[str]]
    ) -> list[ColumnElement[bool]]:
        clauses: list[ColumnElement[bool]] = []
        for name, raw in filters.items():
            allowed = self.config.operators.get(name)
            if allowed is None:
                raise PaginationValidationError(
                    f'Column "{name}" is not filterable',
                    extra={"column": name, "filterable": sorted(self.config.operators)},
                )
            values = [raw] if isinstance(raw, str) else list(raw)
            conditions = [self._condition(name, value, allowed) for value in values]
            if conditions:
                clauses.append(conditions[0] if len(conditions) == 1 else or_(*conditions))
        return clauses

    def _condition(
        self, name: str, raw: str, allowed: frozenset[FilterOperator]
    ) -> ColumnElement[bool]:
        operator, value = self.parse_filter_value(raw)
        if operator not in allowed:
            raise PaginationValidationError(
                f'Operator "{operator.value}" is not allowed on column "{name}"',
                extra={
                    "column": name,
                    "operator": operator.value,
                    "allowed": sorted(op.value for op in allowed),
                },
            )

        column = self.config.columns[name]
        if operator is FilterOperator.ILIKE:
            return cast(column, String).ilike(f"%{escape_like(value)}%", escape="\\")

        if operator.is_multi_value:
            items = [self._coerce(name, item.strip()) for item in value.split(",") if item.strip()]
            if operator is FilterOperator.IN:
                return column.in_(items)
            return column.not_in(items)

        bound = self._coerce(name, value)
        match operator:
            case FilterOperator.EQ:
                return column == bound
            case FilterOperator.GT:
                return column > bound
            case FilterOperator.GTE:
                return column >= bound
            case FilterOperator.LT:
                return column < bound
            case _:
                return column <= bound

    @staticmethod
    def parse_filter_value(raw: str) -> tuple[FilterOperator, str]:
        """Split ``$op:value`` into operator and value.

        Raises:
            PaginationValidationError: Unknown operator.
        """
        if not raw.startswith("$"):
            return FilterOperator.EQ, raw
        if ":" not in raw:
            return FilterOperator.ILIKE, raw[1:]

        token, value = raw.split(":", 1)
        try:
            return FilterOperator(token), value
        except ValueError:
            valid = ", ".join(op.value for op in FilterOperator)
            raise PaginationValidationError(
                f'Unknown filter operator "{token}". Valid operators: {valid}',
                extra={"operator": token},
            ) from None

    def _coerce(self, name: str, raw: str) -> Any:
        try:
            return coerce_value(self.config.columns[name], raw)
        except (TypeError, ValueError) as e:
            raise PaginationValidationError(
                f'Invalid value "{raw}" for column "{name}"',
                extra={"column": name, "value": raw},
            ) from e

    def search_clause(self, search: str | None) -> ColumnElement[bool] | None:
        """ILIKE across ``searchable_columns``; ``None`` when nothing to do."""
        if not search or not self.config.searchable_columns:
            return None
        pattern = f"%{escape_like(search)}%"
        return or_(
            *(
                cast(self.config.columns[name], String).ilike(pattern, escape="\\")
                for name in self.config.searchable_columns
            )
        )

    # ──────────────────────────────────────────────────────────────
    # ORDER BY
    # ──────────────────────────────────────────────────────────────

    def resolve_sort(self, sort_by: Sequence[str]) -> SortKey:
        """Validate ``column:DIRECTION`` entries, else use the default sort."""
        if not sort_by:
            return list(self.config.default_sort_by)

        resolved: SortKey = []
        for entry in sort_by:
            name, _, direction = entry.partition(":")
            name = name.strip()
            if name not in self.config.sortable_columns:
                raise PaginationValidationError(
                    f'Column "{name}" is not sortable',
                    extra={"column": name, "sortable": list(self.config.sortable_columns)},
                )
            try:
                resolved.append((name, SortDirection((direction or "ASC").strip().upper())))
            except ValueError:
                raise PaginationValidationError(
                    f'Invalid sort direction "{direction}" for column "{name}"',
                    extra={"column": name, "direction": direction},
                ) from None
        return resolved

    def with_tiebreak(self, sort: SortKey, column: str) -> SortKey:
        """Append ``(column, ASC)`` unless the sort already uses ``column``."""
        if any(name == column for name, _ in sort):
            return list(sort)
        return [*sort, (column, SortDirection.ASC)]

    def order_by(self, sort: SortKey, *, invert: bool = False) -> list[UnaryExpression[Any]]:
        expressions = []
        for name, direction in sort:
            effective = direction.inverted() if invert else direction
            column = self.config.columns[name]
            expressions.append(column.desc() if effective is SortDirection.DESC else column.asc())
        return expressions

    def keyset_predicate(
        self, key: SortKey, values: Sequence[Any], *, backward: bool
    ) -> ColumnElement[bool]:
        """Rows strictly past the boundary ``values`` in key order.

        For key ``(a DESC, b ASC)`` paging forward from ``(v1, v2)``:
            a < v1 OR (a = v1 AND b > v2)
        Paging backward flips every comparison.
        """
        branches = []
        for i, (name, direction) in enumerate(key):
            column = self.config.columns[name]
            ascending = (direction is SortDirection.ASC) != backward
            compare = column > values[i] if ascending else column < values[i]
            equalities = [
                self.config.columns[prev] == values[j] for j, (prev, _) in enumerate(key[:i])
            ]
            branches.append(and_(*equalities, compare) if equalities else compare)
        return or_(*branches)

    # ──────────────────────────────────────────────────────────────
    # Projection
    # ──────────────────────────────────────────────────────────────

    def resolve_projection(
        self, select: Sequence[str] | None, columns: Sequence[str] | None
    ) -> list[str]:
        """Caller columns, else validated ``select``, else the selectable set."""
        if columns is not None:
            return list(columns)

        selectable = self.config.selectable
        if not select:
            return selectable

        allowed = set(selectable)
        unknown = [name for name in select if name not in allowed]
        if unknown:
            raise PaginationValidationError(
                f"Columns not selectable: {', '.join(unknown)}",
                extra={"columns": unknown, "selectable": selectable},
            )
        # keep request order, drop duplicates
        projection = list(dict.fromkeys(select))
        lazy_logger.debug(lambda: f"pagination.projection: {self.config.model.__name__} -> {projection}")
        return projection

    def labeled(self, names: Sequence[str]) -> list[ColumnElement[Any]]:
        return [self.config.columns[name].label(name) for name in names]


__all__ = ["QueryBuilder", "SortKey", "coerce_value", "escape_like"]
