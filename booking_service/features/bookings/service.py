"""Service layer for the bookings feature."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Annotated, Any

from fastapi import Depends

from booking_service.core.database import UnitOfWork
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.core.exceptions import ConflictException, NotFoundException
from booking_service.features.bookings.events import BookingCreated
from booking_service.features.bookings.models import BookingStatus
from booking_service.features.bookings.repository import BookingRepository
from booking_service.features.events import EventBusDep  # noqa: TC001
from booking_service.features.services.models import ServiceStatus
from booking_service.features.services.repository import ServiceRepository
from booking_service.features.users.repository import UserRepository
from booking_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from booking_service.core.database import SessionProvider
    from booking_service.core.events import EventBus
    from booking_service.features.bookings.schemas import BookingCreate

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class BookingService:
    """Booking workflows that span several tables.

    Every write runs in one unit of work and publishes its event inside it,
    so a booking and the rows its handlers write (the audit entry) are
    committed together or not at all.
    """

    def __init__(self, database: SessionProvider, events: EventBus) -> None:
        self._uow = UnitOfWork(database)
        self._events = events
        self._bookings = BookingRepository(database)
        self._services = ServiceRepository(database)
        self._users = UserRepository(database)

    async def create_booking(
        self,
        payload: BookingCreate,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> dict[str, Any]:
        """Book ``payload.start_at`` on an active service.

        Raises:
            NotFoundException: Unknown service or user.
            ConflictException: The service is not active.
        """

        async def book() -> dict[str, Any]:
            service = await self._services.find_one_by_id(payload.service_id)
            if service is None:
                raise NotFoundException(
                    f"Service {payload.service_id} not found",
                    extra={"service_id": str(payload.service_id)},
                )
            if service["status"] != ServiceStatus.ACTIVE:
                raise ConflictException(
                    "Service is not available for booking",
                    extra={
                        "service_id": str(payload.service_id),
                        "status": ServiceStatus(service["status"]).value,
                    },
                )
            if not await self._users.exists(payload.user_id):
                raise NotFoundException(
                    f"User {payload.user_id} not found",
                    extra={"user_id": str(payload.user_id)},
                )

            booking = await self._bookings.create_one(
                {
                    "service_id": payload.service_id,
                    "user_id": payload.user_id,
                    "start_at": payload.start_at,
                    "end_at": payload.start_at + timedelta(minutes=service["duration"]),
                    "status": BookingStatus.PENDING,
                    "total_price": service["price"],
                }
            )
            await self._events.publish(
                BookingCreated(
                    booking_id=booking["id"],
                    user_id=payload.user_id,
                    service_id=payload.service_id,
                    total_price=booking["total_price"],
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            )
            return booking

        booking = await self._uow.run(book)
        logger.info(
            "Booking created",
            extra={
                "booking_id": str(booking["id"]),
                "service_id": str(payload.service_id),
                "user_id": str(payload.user_id),
            },
        )
        lazy_logger.debug(lambda: f"bookings.create: {booking['start_at']} -> {booking['end_at']}")
        return booking


def get_booking_service(database: DatabaseDep, events: EventBusDep) -> BookingService:
    return BookingService(database, events)


BookingServiceDep = Annotated[BookingService, Depends(get_booking_service)]
