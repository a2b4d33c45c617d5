"""SQLAlchemy models for the audit log."""

from __future__ import annotations

from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import JSON, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from booking_service.core.database import Base, CreatedAtMixin, UUIDPKMixin


class AuditAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LOGIN = "login"
    LOGOUT = "logout"
    PASSWORD_CHANGE = "password_change"
    PASSWORD_RESET = "password_reset"
    VERIFY = "verify"
    CANCEL = "cancel"
    CONFIRM = "confirm"
    COMPLETE = "complete"
    PAY = "pay"
    REFUND = "refund"


class EntityType(str, Enum):
    USER = "user"
    PROVIDER = "provider"
    SERVICE = "service"
    BOOKING = "booking"
    REVIEW = "review"
    PAYMENT = "payment"
    SESSION = "session"


class AuditLog(Base, UUIDPKMixin, CreatedAtMixin):
    """Who did what to which entity.

    The ``meta`` attribute maps to the ``metadata`` column; ``metadata`` is
    reserved on declarative classes.
    """

    __tablename__ = "audit_logs"

    user_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)
    action: Mapped[AuditAction] = mapped_column(
        SAEnum(AuditAction, name="audit_action", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    entity_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)
    meta: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<AuditLog(id={self.id}, action={self.action}, entity={self.entity_type})>"
