"""Pagination rules for ``GET /services``."""

from __future__ import annotations

from booking_service.core.pagination import FilterOperator, PaginationConfig, SortDirection
from booking_service.features.services.models import Service

SERVICES_PAGINATION = PaginationConfig(
    model=Service,
    default_sort_by=[("created_at", SortDirection.DESC), ("id", SortDirection.DESC)],
    sortable_columns=["name", "price", "duration", "status", "created_at", "updated_at", "id"],
    filterable_columns={
        "name": [FilterOperator.EQ, FilterOperator.ILIKE],
        "status": [FilterOperator.EQ, FilterOperator.IN],
        "provider_id": [FilterOperator.EQ],
        "price": [FilterOperator.GTE, FilterOperator.LTE],
    },
    searchable_columns=["name", "description"],
    exclude_columns=["deleted_at"],
)
