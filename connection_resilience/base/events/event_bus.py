"""Named-channel publish/subscribe bus.

The coordinator reports classified failures and recovery intents through
an ``EventBus``; external collaborators subscribe by event name. Listeners
run synchronously in subscription order on the emitting call. A listener
that raises is logged and skipped: failures never propagate back into the
coordinator, and the remaining listeners still run.

Coroutine listeners are supported: the returned awaitable is scheduled as a
task on the running loop (failures are logged when the task finishes). With
no running loop the coroutine is closed and a warning is logged.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from typing import Any, Callable, DefaultDict, List, Optional, Set

from ..logging import get_logger, log_event

Listener = Callable[..., Any]

_logger = get_logger("resilience.events")


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", repr(listener))


class EventBus:
    """Registry of named channels and their subscriber lists."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)
        self._tasks: Set[asyncio.Future] = set()

    def on(self, event: str, listener: Listener) -> Listener:
        """Subscribe ``listener`` to ``event`` and return it."""
        self._listeners[event].append(listener)
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        """Subscribe ``listener`` for a single emission; returns the wrapper."""

        def _once(*args: Any) -> Any:
            self.off(event, _once)
            return listener(*args)

        _once.__qualname__ = _listener_name(listener)
        return self.on(event, _once)

    def off(self, event: str, listener: Listener) -> bool:
        """Remove the first registration of ``listener``; ``False`` if absent."""
        listeners = self._listeners.get(event)
        if not listeners or listener not in listeners:
            return False
        listeners.remove(listener)
        if not listeners:
            del self._listeners[event]
        return True

    def emit(self, event: str, *args: Any) -> bool:
        """Invoke every listener of ``event`` with ``args``.

        Returns:
            ``True`` when at least one listener was registered.
        """
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            try:
                result = listener(*args)
            except Exception as exc:  # listener faults must not escape the bus
                self._log_failure(event, listener, exc)
                continue
            if inspect.isawaitable(result):
                self._schedule(event, listener, result)
        return bool(listeners)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def remove_all_listeners(self, event: Optional[str] = None) -> None:
        if event is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event, None)

    def _schedule(self, event: str, listener: Listener, awaitable: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            log_event(
                _logger,
                "bus.listener_dropped",
                level=logging.WARNING,
                bus_event=event,
                listener=_listener_name(listener),
                reason="no running event loop",
            )
            return
        task = asyncio.ensure_future(awaitable, loop=loop)
        self._tasks.add(task)

        def _done(t: asyncio.Future) -> None:
            self._tasks.discard(t)
            if t.cancelled():
                return
            exc = t.exception()
            if exc is not None:
                self._log_failure(event, listener, exc)

        task.add_done_callback(_done)

    def _log_failure(self, event: str, listener: Listener, exc: BaseException) -> None:
        log_event(
            _logger,
            "bus.listener_failed",
            level=logging.ERROR,
            bus_event=event,
            listener=_listener_name(listener),
            error=f"{type(exc).__name__}: {exc}",
        )


__all__ = ["EventBus", "Listener"]
