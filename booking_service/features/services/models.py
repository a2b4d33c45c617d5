"""SQLAlchemy models for the services feature."""

from __future__ import annotations

from enum import Enum
from uuid import UUID

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from booking_service.core.database import Base, SoftDeleteMixin, TimestampMixin, UUIDPKMixin


class ServiceStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class Service(Base, UUIDPKMixin, TimestampMixin, SoftDeleteMixin):
    """Something a provider sells by the slot.

    ``price`` is in minor currency units, ``duration`` in minutes.
    """

    __tablename__ = "services"

    provider_id: Mapped[UUID] = mapped_column(
        ForeignKey("providers.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[ServiceStatus] = mapped_column(
        SAEnum(ServiceStatus, name="service_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ServiceStatus.DRAFT,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, name={self.name!r}, status={self.status})>"
