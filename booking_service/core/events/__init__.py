"""Domain events and the in-process event bus.

    from booking_service.core.events import DomainEvent, EventBus
"""

from booking_service.core.events.base import DomainEvent
from booking_service.core.events.bus import EventBus

__all__ = ["DomainEvent", "EventBus"]
