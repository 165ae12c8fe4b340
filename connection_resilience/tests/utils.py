"""Shared testing utilities for coordinator and bus tests.

Exports:
    - EventRecorder: subscribes to named events and records emissions in order.
    - record_at: build an ErrorRecord with a fixed timestamp.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Tuple

from connection_resilience.base.errors import ErrorCategory, ErrorRecord, classify_failure
from connection_resilience.base.events import EventBus


class EventRecorder:
    """Record ``(event, args)`` tuples for every subscribed event name."""

    def __init__(self, bus: EventBus, *events: str) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        for name in events:
            bus.on(name, self._listener(name))

    def _listener(self, name: str):
        def _record(*args: Any) -> None:
            self.calls.append((name, args))

        return _record

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def payloads(self, name: str) -> List[Any]:
        return [args[0] if args else None for n, args in self.calls if n == name]


def record_at(
    message: str,
    when: datetime,
    origin: ErrorCategory = ErrorCategory.UNKNOWN,
) -> ErrorRecord:
    return classify_failure(Exception(message), origin, now=when)
