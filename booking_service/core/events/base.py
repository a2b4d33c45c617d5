"""Domain event base class.

A domain event is an immutable record of something that happened in one
feature, published on the in-process ``EventBus`` so other features can react
to it (the audit log, for one).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, ClassVar
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from booking_service.core.settings import get_app_settings


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Subclasses must define ``event_type`` (e.g. ``"bookings.created"``):

        class BookingCreated(DomainEvent):
            event_type: ClassVar[str] = "bookings.created"

            booking_id: UUID
            user_id: UUID

    Attributes:
        event_id: Unique identifier for this event instance.
        timestamp: When the event occurred (UTC).
        service: Name of the service that generated the event.
        ip_address: Client address of the request that caused the event.
        user_agent: Client user agent of that request.
        metadata: Additional context.
    """

    event_type: ClassVar[str] = "domain.event"

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    service: str = Field(default_factory=lambda: get_app_settings().service_name)
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.event_type == "domain.event":
            msg = f"{cls.__name__} must define 'event_type' class variable"
            raise TypeError(msg)


__all__ = ["DomainEvent"]
