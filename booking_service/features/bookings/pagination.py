"""Pagination rules for ``GET /bookings``.

Cursor pages: bookings are browsed as a timeline and new bookings arrive
constantly, so keyset seeks keep pages stable.
"""

from __future__ import annotations

from booking_service.core.pagination import (
    FilterOperator,
    PaginationConfig,
    PaginationStrategy,
    SortDirection,
)
from booking_service.features.bookings.models import Booking

BOOKINGS_PAGINATION = PaginationConfig(
    model=Booking,
    strategy=PaginationStrategy.CURSOR,
    default_sort_by=[("start_at", SortDirection.DESC), ("id", SortDirection.DESC)],
    sortable_columns=["start_at", "end_at", "status", "total_price", "created_at", "id"],
    filterable_columns={
        "status": [FilterOperator.EQ, FilterOperator.IN, FilterOperator.NOT_IN],
        "service_id": [FilterOperator.EQ],
        "user_id": [FilterOperator.EQ],
        "start_at": [FilterOperator.GTE, FilterOperator.LT],
    },
)
