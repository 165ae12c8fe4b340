"""Bounded-time credential refresh handshake over the event bus.

The coordinator holds no network logic. ``TokenRefreshCoordinator.refresh``
publishes ``tokenRefreshRequested`` with a :class:`TokenRefreshRequest`
carrying ``resolve`` / ``reject`` callables, then races that external
completion against a fixed deadline:

- ``resolve()`` first: ``refresh`` returns normally.
- ``reject(reason)`` first: ``refresh`` raises :class:`TokenRefreshError`.
- deadline first (including when nobody listens): ``refresh`` raises
  :class:`TokenRefreshTimeoutError`.

Whichever settles first wins; later ``resolve`` / ``reject`` calls are
no-ops. The deadline is enforced by ``asyncio.wait_for``, which also
disposes of the pending timer when the request settles.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..constants import DEFAULT_TOKEN_REFRESH_TIMEOUT_SECONDS
from ..errors import TokenRefreshError, TokenRefreshTimeoutError
from ..events import EventBus, Events
from ..logging import get_logger, log_event

_logger = get_logger("resilience.token_refresh")


class TokenRefreshRequest:
    """Single-shot rendezvous handed to the credential provider.

    Attributes:
        resolve: Call with no arguments (or a result) when the new credential
            is in place.
        reject: Call with a reason (exception or text) when renewal failed.
    """

    def __init__(self, future: "asyncio.Future[Any]") -> None:
        self._future = future

    @property
    def settled(self) -> bool:
        return self._future.done()

    def resolve(self, result: Any = None) -> bool:
        """Settle successfully; returns ``False`` when already settled."""
        if self._future.done():
            return False
        self._future.set_result(result)
        return True

    def reject(self, reason: Any = None) -> bool:
        """Settle with a failure; returns ``False`` when already settled."""
        if self._future.done():
            return False
        exc = TokenRefreshError(f"token refresh rejected: {reason}", reason=reason)
        if isinstance(reason, BaseException):
            exc.__cause__ = reason
        self._future.set_exception(exc)
        return True

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"TokenRefreshRequest(settled={self.settled})"


class TokenRefreshCoordinator:
    """Runs the refresh handshake against a fixed deadline.

    Concurrent calls each start an independent handshake; nothing is
    coalesced.
    """

    def __init__(
        self,
        bus: EventBus,
        timeout_seconds: float = DEFAULT_TOKEN_REFRESH_TIMEOUT_SECONDS,
    ) -> None:
        self._bus = bus
        self._timeout = timeout_seconds

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    async def refresh(self) -> Any:
        """Request a credential refresh and wait for the outcome.

        Returns:
            The value passed to ``resolve`` (``None`` by default).

        Raises:
            TokenRefreshError: The credential provider called ``reject``.
            TokenRefreshTimeoutError: Nobody settled the request in time.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()
        request = TokenRefreshRequest(future)
        log_event(_logger, "token_refresh.requested", timeout_seconds=self._timeout)
        self._bus.emit(Events.TOKEN_REFRESH_REQUESTED, request)
        try:
            result = await asyncio.wait_for(future, self._timeout)
        except asyncio.TimeoutError as exc:
            log_event(_logger, "token_refresh.timed_out", level=logging.WARNING, timeout_seconds=self._timeout)
            raise TokenRefreshTimeoutError(self._timeout) from exc
        except TokenRefreshError as exc:
            log_event(_logger, "token_refresh.rejected", level=logging.WARNING, reason=str(exc.reason))
            raise
        log_event(_logger, "token_refresh.succeeded")
        return result


__all__ = ["TokenRefreshCoordinator", "TokenRefreshRequest"]
