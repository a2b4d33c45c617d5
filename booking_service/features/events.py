"""Wire every feature's event handlers onto one bus.

The bus is built per request from the request's ``Database``, so handlers
write through the same engine (and ambient unit of work) as the publisher,
and ``app.dependency_overrides[get_database]`` reaches them in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

from fastapi import Depends

from booking_service.core.dependencies import DatabaseDep  # noqa: TC001
from booking_service.core.events import EventBus
from booking_service.features.audits.handlers import register_audit_handlers

if TYPE_CHECKING:
    from booking_service.core.database import SessionProvider


def build_event_bus(database: SessionProvider) -> EventBus:
    bus = EventBus()
    register_audit_handlers(bus, database)
    return bus


def get_event_bus(database: DatabaseDep) -> EventBus:
    return build_event_bus(database)


EventBusDep = Annotated[EventBus, Depends(get_event_bus)]

__all__ = ["EventBusDep", "build_event_bus", "get_event_bus"]
