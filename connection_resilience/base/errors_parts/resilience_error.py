"""
Exception types raised inside the resilience layer.

Raw connection failures are never re-raised across the coordinator boundary;
these types exist for the one internal operation that completes with an
outcome (the credential refresh handshake).
"""
from __future__ import annotations

from typing import Any


class ResilienceError(Exception):
    """Base class for errors raised by ``connection_resilience`` itself."""


class TokenRefreshError(ResilienceError):
    """The credential provider rejected the refresh handshake.

    Attributes:
        reason: Value supplied to ``reject`` by the credential provider.
    """

    def __init__(self, message: str, reason: Any = None) -> None:
        super().__init__(message)
        self.reason = reason


class TokenRefreshTimeoutError(TokenRefreshError, TimeoutError):
    """No credential provider settled the handshake within the deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"token refresh timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


__all__ = ["ResilienceError", "TokenRefreshError", "TokenRefreshTimeoutError"]
