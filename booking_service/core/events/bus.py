"""In-process event bus.

Features publish domain events; other features subscribe handlers to them.
Handlers run in subscription order and are awaited by ``publish``, so inside a
unit of work they share its transaction: a failing handler rolls back the
change that raised the event.

Usage:
    bus = EventBus()

    @bus.subscribe(BookingCreated)
    async def audit_booking(event: BookingCreated) -> None:
        ...

    await bus.publish(BookingCreated(booking_id=..., user_id=...))
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any, overload

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from booking_service.core.events.base import DomainEvent

    EventHandler = Callable[[Any], Awaitable[None]]

logger = logging.getLogger(__name__)


class EventBus:
    """Maps event types to their handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    @overload
    def subscribe(
        self, event_cls: type[DomainEvent]
    ) -> Callable[[EventHandler], EventHandler]: ...

    @overload
    def subscribe(self, event_cls: type[DomainEvent], handler: EventHandler) -> EventHandler: ...

    def subscribe(
        self,
        event_cls: type[DomainEvent],
        handler: EventHandler | None = None,
    ) -> EventHandler | Callable[[EventHandler], EventHandler]:
        """Subscribe a handler, directly or as a decorator."""

        def register(fn: EventHandler) -> EventHandler:
            self._handlers[event_cls.event_type].append(fn)
            logger.debug(
                "Registered event handler",
                extra={"event_type": event_cls.event_type, "handler": fn.__qualname__},
            )
            return fn

        if handler is not None:
            return register(handler)
        return register

    def unsubscribe(self, event_cls: type[DomainEvent], handler: EventHandler) -> bool:
        """Remove a handler; return False if it was not subscribed."""
        handlers = self._handlers.get(event_cls.event_type, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        if not handlers:
            del self._handlers[event_cls.event_type]
        return True

    async def publish(self, event: DomainEvent) -> None:
        """Await every handler subscribed to ``event`` in order.

        Handler exceptions propagate to the publisher; handlers after the
        failing one do not run.
        """
        handlers = list(self._handlers.get(event.event_type, ()))
        logger.info(
            "Publishing event",
            extra={
                "event_type": event.event_type,
                "event_id": event.event_id,
                "handlers": len(handlers),
            },
        )
        for handler in handlers:
            await handler(event)

    def event_types(self) -> list[str]:
        return sorted(self._handlers)

    def handler_count(self, event_type: str) -> int:
        return len(self._handlers.get(event_type, ()))


__all__ = ["EventBus"]
