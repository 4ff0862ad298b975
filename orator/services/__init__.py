"""Shared services used by the conversation engine."""

from orator.services.events import Event, EventBus, EventHandler, NullEventBus

__all__ = [
    "Event",
    "EventBus",
    "EventHandler",
    "NullEventBus",
]
