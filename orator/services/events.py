"""Event bus for conversation observers.

The engine publishes every observable change (messages appended, requests
started and settled, session ended) on an EventBus so a presentation layer
can re-render without polling engine state.

Design:
- Async handlers registered per event type, or for every event
- Events carry the conversation session id plus a small payload
- Handler failures are logged and never reach the publisher

Usage:
    bus = EventBus()

    @bus.on("conversation.message_appended")
    async def render(event_type, data):
        print(data["role"], data["content"])
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol
from uuid import uuid4

logger = logging.getLogger("events")

CONVERSATION_STARTED = "conversation.started"
MESSAGE_APPENDED = "conversation.message_appended"
REQUEST_STARTED = "conversation.request_started"
REQUEST_SETTLED = "conversation.request_settled"
TURN_SUBMITTED = "conversation.turn_submitted"
FEEDBACK_REQUESTED = "conversation.feedback_requested"
CONVERSATION_ENDED = "conversation.ended"


class EventHandler(Protocol):
    """Protocol for async event handlers."""

    async def __call__(self, event_type: str, data: dict[str, Any]) -> None:
        ...


@dataclass
class Event:
    """Event data structure.

    Attributes:
        id: Unique event identifier
        type: Event type identifier (e.g., "conversation.started")
        data: Event payload
        timestamp: When the event was created
    """

    id: str = field(default_factory=lambda: str(uuid4()))
    type: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "id": self.id,
            "type": self.type,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }


class EventBus:
    """Publish-subscribe bus with async handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._global_handlers: list[EventHandler] = []
        self._pending: set[asyncio.Task[Event]] = set()

    def on(self, event_type: str) -> Callable[[EventHandler], EventHandler]:
        """Decorator to register a handler for one event type.

        Example:
            @bus.on("conversation.ended")
            async def handle_ended(event_type, data):
                print(f"Session ended: {data['session_id']}")
        """
        def decorator(handler: EventHandler) -> EventHandler:
            self._handlers.setdefault(event_type, []).append(handler)
            return handler
        return decorator

    def subscribe_all(self, handler: EventHandler) -> EventHandler:
        """Register a handler called for every event."""
        self._global_handlers.append(handler)
        return handler

    def off(self, event_type: str, handler: EventHandler | None = None) -> None:
        """Unregister handlers for an event type.

        Args:
            event_type: The event type
            handler: Specific handler to remove, or None to remove all
        """
        if handler is None:
            self._handlers.pop(event_type, None)
        else:
            handlers = self._handlers.get(event_type, [])
            self._handlers[event_type] = [h for h in handlers if h != handler]

    async def emit(self, event_type: str, data: dict[str, Any]) -> Event:
        """Publish an event to every matching handler.

        Returns:
            The published Event
        """
        event = Event(type=event_type, data=data)
        handlers = self._handlers.get(event_type, [])[:] + self._global_handlers[:]

        for handler in handlers:
            try:
                await handler(event.type, event.data)
            except Exception:
                logger.error(
                    f"Event handler failed: {event_type}",
                    extra={"service": "events", "operation": event_type},
                    exc_info=True,
                )

        return event

    def try_emit(self, event_type: str, data: dict[str, Any]) -> None:
        """Schedule ``emit`` without waiting for handlers.

        Handler runs start in call order.
        Does nothing when no event loop is running.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return

        task = loop.create_task(self.emit(event_type, data))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def wait_for_pending(self) -> None:
        """Await events scheduled with ``try_emit`` (used in tests and shutdown)."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def get_handlers(self, event_type: str) -> list[EventHandler]:
        """Get registered handlers for an event type."""
        return self._handlers.get(event_type, [])[:]

    def clear(self) -> None:
        """Remove every handler."""
        self._handlers.clear()
        self._global_handlers.clear()


class NullEventBus(EventBus):
    """EventBus that silently discards all events."""

    async def emit(self, event_type: str, data: dict[str, Any]) -> Event:
        return Event(type=event_type, data=data)

    def try_emit(self, event_type: str, data: dict[str, Any]) -> None:
        return None


__all__ = [
    "Event",
    "EventBus",
    "EventHandler",
    "NullEventBus",
    "CONVERSATION_STARTED",
    "MESSAGE_APPENDED",
    "REQUEST_STARTED",
    "REQUEST_SETTLED",
    "TURN_SUBMITTED",
    "FEEDBACK_REQUESTED",
    "CONVERSATION_ENDED",
]
