"""SQLAlchemy models for the users feature."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from booking_service.core.database import Base, SoftDeleteMixin, TimestampMixin, UUIDPKMixin


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class User(Base, UUIDPKMixin, TimestampMixin, SoftDeleteMixin):
    """Platform account.

    ``password`` holds the hash written by the auth flow and is excluded from
    every repository projection and page.
    """

    __tablename__ = "users"
    __table_args__ = (Index("ix_users_deleted_at_email", "deleted_at", "email"),)

    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="roles", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.USER,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r})>"
