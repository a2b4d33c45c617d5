"""Repository for the bookings feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from booking_service.core.database import BaseRepository
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.features.bookings.models import Booking

if TYPE_CHECKING:
    from booking_service.core.database import SessionProvider


class BookingRepository(BaseRepository[Booking]):
    def __init__(self, database: SessionProvider) -> None:
        super().__init__(Booking, database)


def get_booking_repository(database: DatabaseDep) -> BookingRepository:
    return BookingRepository(database)


BookingRepositoryDep = Annotated[BookingRepository, Depends(get_booking_repository)]
