"""Per-entity pagination descriptor.

A ``PaginationConfig`` is declared once per feature, at module import time,
and validated against the mapped table right away so a typo in a column name
fails at startup instead of on the first request.

Example:
    BOOKINGS_PAGINATION = PaginationConfig(
        model=Booking,
        strategy=PaginationStrategy.CURSOR,
        default_sort_by=[("start_at", SortDirection.DESC)],
        sortable_columns=["start_at", "created_at", "total_price"],
        filterable_columns={
            "status": [FilterOperator.EQ, FilterOperator.IN],
            "user_id": [FilterOperator.EQ],
        },
    )
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from booking_service.core.database.inspection import get_column_map
from booking_service.core.pagination.contracts import (
    ALL_OPERATORS,
    DEFAULT_CURSOR_COLUMN,
    FilterOperator,
    PaginationStrategy,
    SortDirection,
)
from booking_service.core.pagination.exceptions import PaginationConfigError
from booking_service.core.settings import get_pagination_settings

if TYPE_CHECKING:
    from sqlalchemy import Column


@dataclass(frozen=True)
class PaginationConfig[T]:
    """Static pagination rules for one model.

    Attributes:
        model: Mapped class being paged.
        strategy: ``offset`` or ``cursor``.
        default_limit: Page size when the request has none. Defaults to
            ``PAGINATION_DEFAULT_LIMIT``.
        max_limit: Upper bound for the page size. Defaults to
            ``PAGINATION_MAX_LIMIT``.
        default_sort_by: Ordering used when the request has no ``sortBy``.
        sortable_columns: Columns accepted in ``sortBy``.
        filterable_columns: Either column names (every operator allowed) or
            a mapping of column name to its allowed operators.
        searchable_columns: Text columns matched by ``search``.
        selectable_columns: Columns a response may contain; ``None`` means
            all columns minus ``exclude_columns``.
        exclude_columns: Columns never returned unless explicitly selectable.
        cursor_column: Unique, totally ordered tie-break column for cursor
            pages (normally the primary key).
    """

    model: type[T]
    strategy: PaginationStrategy = PaginationStrategy.OFFSET
    default_limit: int | None = None
    max_limit: int | None = None
    default_sort_by: Sequence[tuple[str, SortDirection]] = ()
    sortable_columns: Sequence[str] = ()
    filterable_columns: Mapping[str, Sequence[FilterOperator]] | Sequence[str] = field(
        default_factory=dict
    )
    searchable_columns: Sequence[str] = ()
    selectable_columns: Sequence[str] | None = None
    exclude_columns: Sequence[str] = ()
    cursor_column: str = DEFAULT_CURSOR_COLUMN
    columns: dict[str, Column[Any]] = field(init=False, repr=False, compare=False)
    operators: dict[str, frozenset[FilterOperator]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        try:
            columns = get_column_map(self.model)
        except Exception as e:
            msg = f"{self.model!r} is not a mapped class"
            raise PaginationConfigError(msg) from e
        _set(self, "columns", columns)
        name = self.model.__name__

        try:
            _set(self, "strategy", PaginationStrategy(self.strategy))
            _set(
                self,
                "default_sort_by",
                tuple((col, SortDirection(direction)) for col, direction in self.default_sort_by),
            )
            _set(self, "operators", _normalize_operators(self.filterable_columns))
        except ValueError as e:
            msg = f"{name} pagination config: {e}"
            raise PaginationConfigError(msg) from e

        referenced = {
            "default_sort_by": [col for col, _ in self.default_sort_by],
            "sortable_columns": list(self.sortable_columns),
            "filterable_columns": list(self.operators),
            "searchable_columns": list(self.searchable_columns),
            "selectable_columns": list(self.selectable_columns or ()),
            "exclude_columns": list(self.exclude_columns),
            "cursor_column": [self.cursor_column],
        }
        for attr, names in referenced.items():
            unknown = [col for col in names if col not in columns]
            if unknown:
                msg = f"{name} pagination config: unknown {attr}: {', '.join(unknown)}"
                raise PaginationConfigError(msg)

        settings = get_pagination_settings()
        max_limit = self.max_limit if self.max_limit is not None else settings.max_limit
        default_limit = (
            self.default_limit
            if self.default_limit is not None
            else min(settings.default_limit, max_limit)
        )
        if max_limit < 1 or not 1 <= default_limit <= max_limit:
            msg = (
                f"{name} pagination config: default_limit must be within 1..max_limit "
                f"(got default_limit={default_limit}, max_limit={max_limit})"
            )
            raise PaginationConfigError(msg)
        _set(self, "max_limit", max_limit)
        _set(self, "default_limit", default_limit)

    @property
    def selectable(self) -> list[str]:
        """Columns a response may contain, in mapper order."""
        if self.selectable_columns is not None:
            return list(self.selectable_columns)
        excluded = set(self.exclude_columns)
        return [col for col in self.columns if col not in excluded]


def _set(config: PaginationConfig[Any], name: str, value: Any) -> None:
    object.__setattr__(config, name, value)


def _normalize_operators(
    filterable: Mapping[str, Sequence[FilterOperator]] | Sequence[str],
) -> dict[str, frozenset[FilterOperator]]:
    if isinstance(filterable, Mapping):
        return {
            col: frozenset(FilterOperator(op) for op in ops) for col, ops in filterable.items()
        }
    return dict.fromkeys(filterable, ALL_OPERATORS)


__all__ = ["PaginationConfig"]
