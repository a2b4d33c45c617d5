"""Pagination rules for ``GET /audits``."""

from __future__ import annotations

from booking_service.core.pagination import (
    FilterOperator,
    PaginationConfig,
    PaginationStrategy,
    SortDirection,
)
from booking_service.features.audits.models import AuditLog

AUDITS_PAGINATION = PaginationConfig(
    model=AuditLog,
    strategy=PaginationStrategy.CURSOR,
    default_sort_by=[("created_at", SortDirection.DESC), ("id", SortDirection.DESC)],
    sortable_columns=["created_at", "action", "entity_type", "id"],
    filterable_columns={
        "action": [FilterOperator.EQ, FilterOperator.IN],
        "entity_type": [FilterOperator.EQ, FilterOperator.IN],
        "entity_id": [FilterOperator.EQ],
        "user_id": [FilterOperator.EQ],
        "created_at": [FilterOperator.GTE, FilterOperator.LT],
    },
    searchable_columns=["user_agent"],
)
