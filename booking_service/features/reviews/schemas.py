"""Pydantic schemas for the reviews feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from booking_service.core.schemas import CreatedAtMixin, CustomBase


class ReviewCreate(CustomBase):
    """Payload used when reviewing a completed booking.

    The reviewer and the service are taken from the booking.
    """

    booking_id: UUID
    rating: int = Field(ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)


class ReviewResponse(CustomBase, CreatedAtMixin):
    id: UUID
    booking_id: UUID
    user_id: UUID
    service_id: UUID
    rating: int
    comment: str | None = None


class ReviewListItem(CustomBase):
    id: UUID | None = None
    booking_id: UUID | None = None
    user_id: UUID | None = None
    service_id: UUID | None = None
    rating: int | None = None
    comment: str | None = None
    created_at: datetime | None = None
