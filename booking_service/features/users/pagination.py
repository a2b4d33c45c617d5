"""Pagination rules for ``GET /users``."""

from __future__ import annotations

from booking_service.core.pagination import (
    FilterOperator,
    PaginationConfig,
    PaginationStrategy,
    SortDirection,
)
from booking_service.features.users.models import User

USERS_PAGINATION = PaginationConfig(
    model=User,
    strategy=PaginationStrategy.OFFSET,
    default_sort_by=[("created_at", SortDirection.DESC), ("id", SortDirection.DESC)],
    sortable_columns=["email", "first_name", "last_name", "created_at", "updated_at", "id"],
    filterable_columns={
        "email": [FilterOperator.EQ, FilterOperator.ILIKE, FilterOperator.IN],
        "role": [FilterOperator.EQ, FilterOperator.IN],
    },
    searchable_columns=["email", "first_name", "last_name"],
    exclude_columns=["password", "deleted_at"],
)
