"""Pydantic schemas for the services feature."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from booking_service.core.schemas import CustomBase, TimestampedResponse
from booking_service.features.services.models import ServiceStatus


class ServiceCreate(CustomBase):
    """Payload used when creating a service."""

    provider_id: UUID
    name: str = Field(min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, max_length=500)
    price: int = Field(ge=0, description="Price in minor currency units")
    duration: int = Field(gt=0, le=24 * 60, description="Duration in minutes")
    status: ServiceStatus = ServiceStatus.DRAFT


class ServiceResponse(TimestampedResponse):
    id: UUID
    provider_id: UUID
    name: str
    description: str | None = None
    image_url: str | None = None
    price: int
    duration: int
    status: ServiceStatus


class ServiceListItem(CustomBase):
    id: UUID | None = None
    provider_id: UUID | None = None
    name: str | None = None
    description: str | None = None
    image_url: str | None = None
    price: int | None = None
    duration: int | None = None
    status: ServiceStatus | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
