"""Repository for the payments feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from booking_service.core.database import BaseRepository
from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.features.payments.models import Payment

if TYPE_CHECKING:
    from booking_service.core.database import SessionProvider


class PaymentRepository(BaseRepository[Payment]):
    def __init__(self, database: SessionProvider) -> None:
        super().__init__(Payment, database)


def get_payment_repository(database: DatabaseDep) -> PaymentRepository:
    return PaymentRepository(database)


PaymentRepositoryDep = Annotated[PaymentRepository, Depends(get_payment_repository)]
