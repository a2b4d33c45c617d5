"""Domain events raised by the bookings feature."""

from __future__ import annotations

from typing import ClassVar
from uuid import UUID  # noqa: TC003

from booking_service.core.events import DomainEvent


class BookingCreated(DomainEvent):
    event_type: ClassVar[str] = "bookings.created"

    booking_id: UUID
    user_id: UUID
    service_id: UUID
    total_price: int


__all__ = ["BookingCreated"]
