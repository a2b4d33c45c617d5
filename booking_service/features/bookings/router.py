"""API router for the bookings feature.

Endpoints:
    GET  /bookings               - Paginated list (cursor)
    GET  /bookings/{booking_id}  - Single booking
    POST /bookings               - Book a slot (booking + audit entry, atomically)
"""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from booking_service.core.dependencies import (  # noqa: TC001
    PaginationParamsDep,
    PaginationServiceDep,
)
from booking_service.core.exceptions import NotFoundException
from booking_service.core.pagination import CursorPage
from booking_service.features.bookings.pagination import BOOKINGS_PAGINATION
from booking_service.features.bookings.repository import BookingRepositoryDep  # noqa: TC001
from booking_service.features.bookings.schemas import (
    BookingCreate,
    BookingListItem,
    BookingResponse,
)
from booking_service.features.bookings.service import BookingServiceDep  # noqa: TC001

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get(
    "",
    response_model=CursorPage[BookingListItem],
    response_model_exclude_unset=True,
    summary="List bookings",
    description="Cursor pages; pass `meta.endCursor` back as `after` for the next page.",
)
async def list_bookings(params: PaginationParamsDep, pagination: PaginationServiceDep):
    return await pagination.paginate(BOOKINGS_PAGINATION, params)


@router.get("/{booking_id}", response_model=BookingResponse, summary="Get a booking")
async def get_booking(booking_id: UUID, bookings: BookingRepositoryDep):
    booking = await bookings.find_one_by_id(booking_id)
    if booking is None:
        raise NotFoundException(
            f"Booking {booking_id} not found", extra={"booking_id": str(booking_id)}
        )
    return booking


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book a service",
)
async def create_booking(request: Request, payload: BookingCreate, bookings: BookingServiceDep):
    return await bookings.create_booking(
        payload,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
