"""SQLAlchemy models for the providers feature."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from booking_service.core.database import Base, SoftDeleteMixin, TimestampMixin, UUIDPKMixin


class Provider(Base, UUIDPKMixin, TimestampMixin, SoftDeleteMixin):
    """A business owned by a user.

    ``rating`` and ``reviews_count`` are denormalized from reviews.
    """

    __tablename__ = "providers"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rating: Mapped[Decimal] = mapped_column(
        Numeric(2, 1), nullable=False, default=Decimal("0"), comment="Average review rating"
    )
    reviews_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Provider(id={self.id}, name={self.name!r})>"
