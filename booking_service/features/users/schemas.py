"""Pydantic schemas for the users feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from booking_service.core.schemas import CustomBase, TimestampedResponse
from booking_service.features.users.models import UserRole


class UserResponse(TimestampedResponse):
    """User as returned by the API (never includes the password)."""

    id: UUID
    email: str = Field(max_length=256)
    first_name: str
    last_name: str
    role: UserRole


class UserListItem(CustomBase):
    """Row of a users page; only the selected columns are present."""

    id: UUID | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
