"""Pydantic schemas for the providers feature."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from booking_service.core.schemas import CustomBase, TimestampedResponse


class ProviderCreate(CustomBase):
    """Payload used when creating a provider."""

    user_id: UUID = Field(description="Owning user")
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    logo_url: str | None = Field(default=None, max_length=500)


class ProviderResponse(TimestampedResponse):
    id: UUID
    user_id: UUID
    name: str
    description: str | None = None
    logo_url: str | None = None
    is_verified: bool
    rating: Decimal
    reviews_count: int


class ProviderListItem(CustomBase):
    """Row of a providers page; only the selected columns are present."""

    id: UUID | None = None
    user_id: UUID | None = None
    name: str | None = None
    description: str | None = None
    logo_url: str | None = None
    is_verified: bool | None = None
    rating: Decimal | None = None
    reviews_count: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
