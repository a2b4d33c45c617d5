"""Pydantic schemas for the bookings feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import AwareDatetime, Field

from booking_service.core.schemas import CustomBase, TimestampedResponse
from booking_service.features.bookings.models import BookingStatus


class BookingCreate(CustomBase):
    """Payload used when booking a service slot.

    ``end_at`` and ``total_price`` are derived from the service.
    """

    service_id: UUID
    user_id: UUID
    start_at: AwareDatetime = Field(description="Slot start (timezone-aware)")


class BookingResponse(TimestampedResponse):
    id: UUID
    service_id: UUID
    user_id: UUID
    start_at: datetime
    end_at: datetime
    status: BookingStatus
    total_price: int
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None


class BookingListItem(CustomBase):
    id: UUID | None = None
    service_id: UUID | None = None
    user_id: UUID | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None
    status: BookingStatus | None = None
    total_price: int | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
