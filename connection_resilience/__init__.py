"""connection_resilience package

Connection-resilience coordinator for clients holding a long-lived network
connection. Raw failures are classified into a closed taxonomy, kept in a
bounded history, and turned into recovery intents (reconnect, refresh
credentials, fall back to polling, notify the user, or give up) published on
an event bus.

Public API (re-exported):
    - Version: ``__version__``
    - Facade: :class:`ConnectionErrorCoordinator`
    - Taxonomy: :class:`ErrorCategory`, :class:`ErrorSeverity`,
      :class:`RecoveryAction`, :class:`ErrorRecord`
    - Permanent failures: :class:`PermanentFailure`,
      :class:`PermanentFailureReason`
    - Events: :class:`EventBus`, :class:`Events`
    - Settings: :class:`ResilienceSettings`, :func:`get_resilience_settings`

Typical wiring::

    coordinator = ConnectionErrorCoordinator()
    coordinator.on(Events.REQUEST_RECONNECTION, manager.reconnect)
    coordinator.on(Events.TOKEN_REFRESH_REQUESTED, credentials.on_refresh)
    coordinator.handle_network_error(exc, {"attempt_count": 2})
"""

from .base.errors import (
    ErrorCategory,
    ErrorRecord,
    ErrorSeverity,
    PermanentFailureReason,
    RecoveryAction,
    ResilienceError,
    TokenRefreshError,
    TokenRefreshTimeoutError,
    classify_failure,
)
from .base.events import EventBus, Events
from .base.history import ErrorHistory, ErrorStatistics
from .base.recovery import PermanentFailure, TokenRefreshRequest
from .config import ResilienceSettings, get_resilience_settings
from .coordinator import ConnectionErrorCoordinator

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConnectionErrorCoordinator",
    "ErrorCategory",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorRecord",
    "PermanentFailure",
    "PermanentFailureReason",
    "ResilienceError",
    "TokenRefreshError",
    "TokenRefreshTimeoutError",
    "classify_failure",
    "EventBus",
    "Events",
    "ErrorHistory",
    "ErrorStatistics",
    "TokenRefreshRequest",
    "ResilienceSettings",
    "get_resilience_settings",
]
