"""Service layer for the reviews feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated, Any

from fastapi import Depends

from booking_service.core.database import UnitOfWork
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.core.exceptions import ConflictException, NotFoundException
from booking_service.features.bookings.models import BookingStatus
from booking_service.features.bookings.repository import BookingRepository
from booking_service.features.events import EventBusDep  # noqa: TC001
from booking_service.features.providers.repository import ProviderRepository
from booking_service.features.reviews.events import ReviewCreated
from booking_service.features.reviews.models import Review
from booking_service.features.reviews.repository import ReviewRepository
from booking_service.features.services.repository import ServiceRepository

if TYPE_CHECKING:
    from booking_service.core.database import SessionProvider
    from booking_service.core.events import EventBus
    from booking_service.features.reviews.schemas import ReviewCreate

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, database: SessionProvider, events: EventBus) -> None:
        self._uow = UnitOfWork(database)
        self._reviews = ReviewRepository(database)
        self._bookings = BookingRepository(database)
        self._services = ServiceRepository(database)
        self._providers = ProviderRepository(database)
        self._events = events

    async def create_review(
        self,
        payload: ReviewCreate,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> dict[str, Any]:
        """Review a completed booking and refresh the provider's rating.

        The review and the provider aggregate are written in one unit of work;
        ``ReviewCreated`` handlers (the audit entry) write inside it too.

        Raises:
            NotFoundException: Unknown booking.
            ConflictException: The booking is not completed or already reviewed.
        """

        async def review() -> dict[str, Any]:
            booking = await self._bookings.find_one_by_id(payload.booking_id)
            if booking is None:
                raise NotFoundException(
                    f"Booking {payload.booking_id} not found",
                    extra={"booking_id": str(payload.booking_id)},
                )
            if booking["status"] != BookingStatus.COMPLETED:
                raise ConflictException(
                    "Only completed bookings can be reviewed",
                    extra={"booking_id": str(payload.booking_id)},
                )
            if await self._reviews.find_one(Review.booking_id == payload.booking_id) is not None:
                raise ConflictException(
                    "A review already exists for this booking",
                    extra={"booking_id": str(payload.booking_id)},
                )

            created = await self._reviews.create_one(
                {
                    "booking_id": payload.booking_id,
                    "user_id": booking["user_id"],
                    "service_id": booking["service_id"],
                    "rating": payload.rating,
                    "comment": payload.comment,
                }
            )

            service = await self._services.find_one_by_id(booking["service_id"])
            if service is not None:
                rating, count = await self._reviews.provider_stats(service["provider_id"])
                await self._providers.update_rating(service["provider_id"], rating, count)

            await self._events.publish(
                ReviewCreated(
                    review_id=created["id"],
                    booking_id=payload.booking_id,
                    user_id=booking["user_id"],
                    rating=payload.rating,
                    ip_address=ip_address,
                    user_agent=user_agent,
                )
            )
            return created

        created = await self._uow.run(review)
        logger.info(
            "Review created",
            extra={
                "review_id": str(created["id"]),
                "booking_id": str(payload.booking_id),
                "rating": payload.rating,
            },
        )
        return created


def get_review_service(database: DatabaseDep, events: EventBusDep) -> ReviewService:
    return ReviewService(database, events)


ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
