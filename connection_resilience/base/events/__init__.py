"""Event bus and event name constants."""

from .event_bus import EventBus, Listener
from .event_names import CATEGORY_EVENTS, Events

__all__ = ["EventBus", "Listener", "Events", "CATEGORY_EVENTS"]
