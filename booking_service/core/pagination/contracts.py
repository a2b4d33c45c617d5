"""Shared pagination vocabulary: strategies, filter operators, sort directions."""

from __future__ import annotations

from enum import Enum

DEFAULT_LIMIT = 10
DEFAULT_MAX_LIMIT = 100
DEFAULT_CURSOR_COLUMN = "id"

# signed 64-bit range of SQL BIGINT; larger OFFSET or integer filter values overflow the driver
SQL_INT_MIN = -(2**63)
SQL_INT_MAX = 2**63 - 1


class PaginationStrategy(str, Enum):
    """How a collection is paged."""

    OFFSET = "offset"
    CURSOR = "cursor"


class FilterOperator(str, Enum):
    """Operators accepted in ``filter.<column>=$op:value`` query parameters."""

    EQ = "$eq"
    GT = "$gt"
    GTE = "$gte"
    ILIKE = "$ilike"
    IN = "$in"
    LT = "$lt"
    LTE = "$lte"
    NOT_IN = "$notIn"

    @property
    def is_multi_value(self) -> bool:
        return self in (FilterOperator.IN, FilterOperator.NOT_IN)


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    def inverted(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


ALL_OPERATORS: frozenset[FilterOperator] = frozenset(FilterOperator)

__all__ = [
    "ALL_OPERATORS",
    "DEFAULT_CURSOR_COLUMN",
    "DEFAULT_LIMIT",
    "DEFAULT_MAX_LIMIT",
    "FilterOperator",
    "PaginationStrategy",
    "SQL_INT_MAX",
    "SQL_INT_MIN",
    "SortDirection",
]
