"""Pagination rules for ``GET /reviews``."""

from __future__ import annotations

from booking_service.core.pagination import FilterOperator, PaginationConfig, SortDirection
from booking_service.features.reviews.models import Review

REVIEWS_PAGINATION = PaginationConfig(
    model=Review,
    default_sort_by=[("created_at", SortDirection.DESC), ("id", SortDirection.DESC)],
    sortable_columns=["rating", "created_at", "id"],
    filterable_columns={
        "service_id": [FilterOperator.EQ],
        "rating": [FilterOperator.EQ, FilterOperator.GTE, FilterOperator.LTE],
    },
)
