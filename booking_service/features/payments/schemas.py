"""Pydantic schemas for the payments feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from booking_service.core.schemas import CreatedAtMixin, CustomBase
from booking_service.features.payments.models import PaymentStatus


class PaymentResponse(CustomBase, CreatedAtMixin):
    id: UUID
    booking_id: UUID
    amount: int
    status: PaymentStatus
    paid_at: datetime | None = None
    refunded_at: datetime | None = None


class PaymentListItem(CustomBase):
    id: UUID | None = None
    booking_id: UUID | None = None
    amount: int | None = None
    status: PaymentStatus | None = None
    paid_at: datetime | None = None
    refunded_at: datetime | None = None
    created_at: datetime | None = None
