"""API router for the payments feature.

Endpoints:
    GET /payments               - Paginated list (offset)
    GET /payments/{payment_id}  - Single payment
"""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter

from booking_service.core.dependencies import (  # noqa: TC001
    PaginationParamsDep,
    PaginationServiceDep,
)
from booking_service.core.exceptions import NotFoundException
from booking_service.core.pagination import OffsetPage
from booking_service.features.payments.pagination import PAYMENTS_PAGINATION
from booking_service.features.payments.repository import PaymentRepositoryDep  # noqa: TC001
from booking_service.features.payments.schemas import PaymentListItem, PaymentResponse

router = APIRouter(prefix="/payments", tags=["payments"])


@router.get(
    "",
    response_model=OffsetPage[PaymentListItem],
    response_model_exclude_unset=True,
    summary="List payments",
)
async def list_payments(params: PaginationParamsDep, pagination: PaginationServiceDep):
    return await pagination.paginate(PAYMENTS_PAGINATION, params)


@router.get("/{payment_id}", response_model=PaymentResponse, summary="Get a payment")
async def get_payment(payment_id: UUID, payments: PaymentRepositoryDep):
    payment = await payments.find_one_by_id(payment_id)
    if payment is None:
        raise NotFoundException(
            f"Payment {payment_id} not found", extra={"payment_id": str(payment_id)}
        )
    return payment
