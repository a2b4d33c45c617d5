"""Pagination rules for ``GET /providers``."""

from __future__ import annotations

from booking_service.core.pagination import FilterOperator, PaginationConfig, SortDirection
from booking_service.features.providers.models import Provider

PROVIDERS_PAGINATION = PaginationConfig(
    model=Provider,
    default_sort_by=[("created_at", SortDirection.DESC), ("id", SortDirection.DESC)],
    sortable_columns=["name", "rating", "reviews_count", "created_at", "updated_at", "id"],
    filterable_columns={
        "name": [FilterOperator.EQ, FilterOperator.ILIKE],
        "is_verified": [FilterOperator.EQ],
        "user_id": [FilterOperator.EQ],
    },
    searchable_columns=["name", "description"],
    exclude_columns=["deleted_at"],
)
