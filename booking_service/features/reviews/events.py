"""Domain events raised by the reviews feature."""

from __future__ import annotations

from typing import ClassVar
from uuid import UUID  # noqa: TC003

from booking_service.core.events import DomainEvent


class ReviewCreated(DomainEvent):
    event_type: ClassVar[str] = "reviews.created"

    review_id: UUID
    booking_id: UUID
    user_id: UUID
    rating: int


__all__ = ["ReviewCreated"]
