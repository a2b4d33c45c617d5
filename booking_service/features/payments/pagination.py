"""Pagination rules for ``GET /payments``."""

from __future__ import annotations

from booking_service.core.pagination import FilterOperator, PaginationConfig, SortDirection
from booking_service.features.payments.models import Payment

PAYMENTS_PAGINATION = PaginationConfig(
    model=Payment,
    default_sort_by=[("created_at", SortDirection.DESC), ("id", SortDirection.DESC)],
    sortable_columns=["amount", "paid_at", "created_at", "id"],
    filterable_columns={
        "status": [FilterOperator.EQ, FilterOperator.IN],
        "booking_id": [FilterOperator.EQ],
        "amount": [FilterOperator.GTE, FilterOperator.LTE],
    },
)
