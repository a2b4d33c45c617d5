"""SQLAlchemy models for the reviews feature."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from booking_service.core.database import Base, CreatedAtMixin, UUIDPKMixin


class Review(Base, UUIDPKMixin, CreatedAtMixin):
    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),)

    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id"), unique=True, nullable=False
    )
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    service_id: Mapped[UUID] = mapped_column(ForeignKey("services.id"), nullable=False, index=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, booking_id={self.booking_id}, rating={self.rating})>"
