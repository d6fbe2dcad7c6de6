"""
Tests for event bus functionality

Tests subscription, priority, middleware, filtering, history and the
scheduling of coroutine handlers from publish_sync.
"""

import asyncio

import pytest

from models.events import BecameVisibleEvent, EventType, ObservationReleasedEvent
from services.event_bus import EventBus
from services.middleware import log_middleware


def visible(region_id="aboutme", crossing=1):
    return BecameVisibleEvent(region_id, 0.6, 0.5, crossing)


def test_filtering():
    bus = EventBus()
    about_events = []
    other_events = []

    bus.subscribe(EventType.BECAME_VISIBLE, about_events.append,
                  filter_fn=lambda e: e.region_id == "aboutme")
    bus.subscribe(EventType.BECAME_VISIBLE, other_events.append,
                  filter_fn=lambda e: e.region_id != "aboutme")

    bus.publish_sync(visible("aboutme"))
    bus.publish_sync(visible("projects"))
    bus.publish_sync(visible("aboutme", crossing=2))

    assert len(about_events) == 2
    assert len(other_events) == 1


def test_middleware_can_drop_events():
    bus = EventBus()
    received = []

    bus.add_middleware(lambda e: None if e.type == EventType.OBSERVATION_RELEASED else e)
    bus.subscribe(EventType.BECAME_VISIBLE, received.append)
    bus.subscribe(EventType.OBSERVATION_RELEASED, received.append)

    bus.publish_sync(visible())
    bus.publish_sync(ObservationReleasedEvent("aboutme", 1))

    assert [e.type for e in received] == [EventType.BECAME_VISIBLE]
    assert len(bus.get_event_history()) == 1


def test_priority_order():
    bus = EventBus()
    order = []

    bus.subscribe(EventType.BECAME_VISIBLE, lambda e: order.append("low"), priority=0)
    bus.subscribe(EventType.BECAME_VISIBLE, lambda e: order.append("high"), priority=10)
    bus.subscribe(EventType.BECAME_VISIBLE, lambda e: order.append("mid"), priority=5)
    bus.subscribe(EventType.BECAME_VISIBLE, lambda e: order.append("high-2"), priority=10)

    bus.publish_sync(visible())

    assert order == ["high", "high-2", "mid", "low"]


def test_handler_failure_is_isolated():
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("handler crash")

    bus.subscribe(EventType.BECAME_VISIBLE, broken, priority=10)
    bus.subscribe(EventType.BECAME_VISIBLE, received.append)

    bus.publish_sync(visible())

    assert len(received) == 1


@pytest.mark.asyncio
async def test_failing_async_handler_is_isolated():
    bus = EventBus()
    received = []

    async def broken(event):
        raise RuntimeError("handler crash")

    async def handler(event):
        received.append(event)

    bus.subscribe(EventType.BECAME_VISIBLE, broken, priority=10)
    bus.subscribe(EventType.BECAME_VISIBLE, handler)
    bus.publish_sync(visible())
    await bus.drain()

    assert len(received) == 1


def test_publish_sync_calls_sync_handlers():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.BECAME_VISIBLE, received.append)

    bus.publish_sync(visible())

    assert len(received) == 1


def test_publish_sync_skips_async_handlers_without_loop():
    bus = EventBus()
    received = []

    async def handler(event):
        received.append(event)

    bus.subscribe(EventType.BECAME_VISIBLE, handler)
    bus.publish_sync(visible())

    assert received == []


@pytest.mark.asyncio
async def test_publish_sync_schedules_async_handlers():
    bus = EventBus()
    received = []

    async def handler(event):
        await asyncio.sleep(0)
        received.append(event)

    bus.subscribe(EventType.BECAME_VISIBLE, handler)
    bus.publish_sync(visible())
    assert received == []

    await bus.drain()
    assert len(received) == 1


def test_unsubscribe():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.BECAME_VISIBLE, received.append)

    assert bus.unsubscribe(EventType.BECAME_VISIBLE, received.append) is True
    assert bus.unsubscribe(EventType.BECAME_VISIBLE, received.append) is False

    bus.publish_sync(visible())
    assert received == []


def test_history_is_bounded():
    bus = EventBus()

    for i in range(150):
        bus.publish_sync(visible(crossing=i))

    history = bus.get_event_history(limit=200)
    assert len(history) == 100
    assert history[-1].crossing == 149

    bus.clear_history()
    assert bus.get_event_history() == []


def test_log_middleware_passes_event_through():
    event = visible()

    assert log_middleware(event) is event
    assert event.to_data() == {"region_id": "aboutme", "ratio": 0.6, "threshold": 0.5, "crossing": 1}
