"""
Resilience Base Package

Exports the building blocks the coordinator facade wires together:

- Errors: failure taxonomy, immutable records, and the classifier
- Logging: shared structured JSON logger
- Events: named-channel publish/subscribe bus
- History: bounded FIFO error log and statistics
- Recovery: recovery dispatch, refresh handshake, permanent failure policy
"""

from .errors import (
    ErrorCategory,
    ErrorRecord,
    ErrorSeverity,
    RecoveryAction,
    ResilienceError,
    TokenRefreshError,
    TokenRefreshTimeoutError,
    classify_failure,
    escalate,
)
from .logging import LogContext, configure_logger, get_logger, log_event
from .events import CATEGORY_EVENTS, EventBus, Events
from .history import ErrorHistory, ErrorStatistics
from .recovery import (
    PermanentFailurePolicy,
    RecoveryDispatcher,
    TokenRefreshCoordinator,
    TokenRefreshRequest,
)

__all__ = [
    # Errors
    "ErrorCategory",
    "ErrorSeverity",
    "RecoveryAction",
    "ErrorRecord",
    "ResilienceError",
    "TokenRefreshError",
    "TokenRefreshTimeoutError",
    "classify_failure",
    "escalate",
    # Logging
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    # Events
    "EventBus",
    "Events",
    "CATEGORY_EVENTS",
    # History
    "ErrorHistory",
    "ErrorStatistics",
    # Recovery
    "PermanentFailurePolicy",
    "RecoveryDispatcher",
    "TokenRefreshCoordinator",
    "TokenRefreshRequest",
]
