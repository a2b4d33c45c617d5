"""Audit log entries written in reaction to domain events.

Handlers run inside the publisher's unit of work, so an entry commits or rolls
back with the change it records.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from booking_service.features.audits.models import AuditAction, EntityType
from booking_service.features.audits.repository import AuditLogRepository
from booking_service.features.bookings.events import BookingCreated
from booking_service.features.reviews.events import ReviewCreated

if TYPE_CHECKING:
    from booking_service.core.database import SessionProvider
    from booking_service.core.events import EventBus


def register_audit_handlers(bus: EventBus, database: SessionProvider) -> None:
    audits = AuditLogRepository(database)

    @bus.subscribe(BookingCreated)
    async def audit_booking_created(event: BookingCreated) -> None:
        await audits.record(
            AuditAction.CREATE,
            EntityType.BOOKING,
            event.booking_id,
            user_id=event.user_id,
            meta={"service_id": str(event.service_id), "total_price": event.total_price},
            ip_address=event.ip_address,
            user_agent=event.user_agent,
        )

    @bus.subscribe(ReviewCreated)
    async def audit_review_created(event: ReviewCreated) -> None:
        await audits.record(
            AuditAction.CREATE,
            EntityType.REVIEW,
            event.review_id,
            user_id=event.user_id,
            meta={"booking_id": str(event.booking_id), "rating": event.rating},
            ip_address=event.ip_address,
            user_agent=event.user_agent,
        )


__all__ = ["register_audit_handlers"]
