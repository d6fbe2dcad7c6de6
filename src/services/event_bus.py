"""
Event Bus - routes reveal events between engine, services and controllers

The engine runs inside frame ticks and observer callbacks, which are plain
functions, so everything publishes with publish_sync(). Coroutine handlers
are scheduled on the running loop and awaited through drain().
"""

import asyncio
import inspect
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Set

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)

Handler = Callable[[Event], None]
Middleware = Callable[[Event], Optional[Event]]


def _name(fn) -> str:
    return getattr(fn, "__name__", repr(fn))


@dataclass
class EventHandler:
    """One subscription"""
    handler: Handler
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]

    @property
    def is_async(self) -> bool:
        return inspect.iscoroutinefunction(self.handler)

    def accepts(self, event: Event) -> bool:
        return self.filter_fn is None or self.filter_fn(event)


class EventBus:
    """
    Pub-sub hub keyed by EventType

    Handlers run highest priority first; equal priorities keep subscription
    order. A handler that raises is logged and the remaining handlers still
    run. Middleware may replace an event or drop it by returning None.

    Example:
        bus = EventBus()
        bus.subscribe(EventType.BECAME_VISIBLE, on_visible,
                      filter_fn=lambda e: e.region_id == "aboutme")
        bus.publish_sync(BecameVisibleEvent("aboutme", 0.6, 0.5, 1))
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._middleware: List[Middleware] = []
        self._history: Deque[Event] = deque(maxlen=history_limit)
        self._pending_tasks: Set[asyncio.Task] = set()

    def subscribe(
        self,
        event_type: EventType,
        handler: Handler,
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Register `handler` for `event_type`.

        Args:
            event_type: Event type to listen for
            handler: Sync function or coroutine function taking the event
            priority: Higher runs earlier (default 0)
            filter_fn: Predicate; the handler is skipped when it returns False
        """
        entries = self._handlers.setdefault(event_type, [])
        entries.append(EventHandler(handler, priority, filter_fn))
        # stable sort keeps subscription order within a priority
        entries.sort(key=lambda entry: -entry.priority)

        log.debug("Event handler subscribed", event_type=event_type.name, handler=_name(handler), priority=priority)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> bool:
        """Drop every registration of `handler` for `event_type`; True if any existed."""
        entries = self._handlers.get(event_type, [])
        kept = [entry for entry in entries if entry.handler != handler]
        self._handlers[event_type] = kept
        return len(kept) != len(entries)

    def add_middleware(self, middleware: Middleware) -> None:
        """Append to the middleware chain (runs in registration order)."""
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=_name(middleware))

    def _prepare(self, event: Event) -> Optional[Event]:
        for middleware in self._middleware:
            event = middleware(event)
            if event is None:
                return None
        self._history.append(event)
        return event

    def _targets(self, event: Event) -> List[EventHandler]:
        entries = list(self._handlers.get(event.type, ()))
        if not entries:
            log.debug("No handlers for event", event_type=event.type.name)
        return [entry for entry in entries if entry.accepts(event)]

    def _report(self, entry: EventHandler, event: Event, error: BaseException) -> None:
        log.error(f"Event handler failed: {_name(entry.handler)} for {event.type.name}", exception=repr(error))

    def publish_sync(self, event: Event) -> None:
        """
        Deliver `event` from synchronous code.

        Sync handlers run before this returns. Coroutine handlers become tasks
        on the running loop (see drain()); with no running loop they are
        skipped and a warning is logged.
        """
        event = self._prepare(event)
        if event is None:
            return

        for entry in self._targets(event):
            if entry.is_async:
                self._schedule(entry, event)
                continue
            try:
                entry.handler(event)
            except Exception as e:
                self._report(entry, event, e)

    def _schedule(self, entry: EventHandler, event: Event) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.warn("Async handler skipped (no running loop)", handler=_name(entry.handler), event_type=event.type.name)
            return

        async def deliver():
            try:
                await entry.handler(event)
            except Exception as e:
                self._report(entry, event, e)

        task = loop.create_task(deliver())
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)

    async def drain(self) -> None:
        """Wait until every task scheduled by publish_sync has finished."""
        while self._pending_tasks:
            await asyncio.gather(*list(self._pending_tasks))

    def get_event_history(self, limit: int = 10) -> List[Event]:
        """Most recent events that passed middleware, oldest first."""
        return list(self._history)[-limit:]

    def clear_history(self) -> None:
        self._history.clear()
