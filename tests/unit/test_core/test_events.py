"""Unit tests for domain events and the in-process event bus."""

from __future__ import annotations

import uuid
from typing import ClassVar

import pytest
from pydantic import ValidationError

from booking_service.core.events import DomainEvent, EventBus
from booking_service.features.bookings.events import BookingCreated


class Pinged(DomainEvent):
    event_type: ClassVar[str] = "tests.pinged"

    value: int


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


async def test_publish_awaits_handlers_in_subscription_order(bus):
    calls = []

    @bus.subscribe(Pinged)
    async def first(event: Pinged) -> None:
        calls.append(("first", event.value))

    async def second(event: Pinged) -> None:
        calls.append(("second", event.value))

    bus.subscribe(Pinged, second)
    await bus.publish(Pinged(value=7))

    assert calls == [("first", 7), ("second", 7)]


async def test_publish_without_handlers_is_a_no_op(bus):
    await bus.publish(Pinged(value=1))

    assert bus.handler_count(Pinged.event_type) == 0


async def test_handler_error_propagates_and_stops_later_handlers(bus):
    calls = []

    @bus.subscribe(Pinged)
    async def broken(event: Pinged) -> None:
        raise RuntimeError("audit store down")

    @bus.subscribe(Pinged)
    async def never(event: Pinged) -> None:
        calls.append(event)

    with pytest.raises(RuntimeError, match="audit store down"):
        await bus.publish(Pinged(value=1))
    assert calls == []


async def test_handlers_only_receive_their_event_type(bus):
    seen = []

    @bus.subscribe(BookingCreated)
    async def on_booking(event: BookingCreated) -> None:
        seen.append(event.event_type)

    await bus.publish(Pinged(value=1))

    assert seen == []


def test_handler_registry(bus):
    async def handler(event) -> None: ...

    bus.subscribe(Pinged, handler)
    bus.subscribe(BookingCreated, handler)

    assert bus.event_types() == ["bookings.created", "tests.pinged"]
    assert bus.handler_count("tests.pinged") == 1
    assert bus.unsubscribe(Pinged, handler) is True
    assert bus.unsubscribe(Pinged, handler) is False
    assert bus.event_types() == ["bookings.created"]


def test_event_defaults_and_immutability():
    event = BookingCreated(
        booking_id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        service_id=uuid.uuid4(),
        total_price=5000,
    )

    assert event.event_type == "bookings.created"
    assert event.service == "booking-service"
    assert event.ip_address is None
    assert event.event_id != Pinged(value=1).event_id
    with pytest.raises(ValidationError):
        event.total_price = 1


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        Pinged(value=1, surprise=True)


def test_event_type_is_required_on_subclasses():
    with pytest.raises(TypeError, match="must define 'event_type'"):

        class Nameless(DomainEvent):
            value: int
