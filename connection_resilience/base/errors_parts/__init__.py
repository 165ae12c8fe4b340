"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `connection_resilience.base.errors` for the stable surface.
"""

from .error_category import ErrorCategory
from .error_severity import ErrorSeverity
from .recovery_action import RecoveryAction, RETRYABLE_ACTIONS
from .permanent_failure_reason import PermanentFailureReason
from .error_record import ErrorRecord
from .resilience_error import ResilienceError, TokenRefreshError, TokenRefreshTimeoutError
from .classification import attempt_count, classify_failure, escalate, failure_message

__all__ = [
    "ErrorCategory",
    "ErrorSeverity",
    "RecoveryAction",
    "RETRYABLE_ACTIONS",
    "PermanentFailureReason",
    "ErrorRecord",
    "ResilienceError",
    "TokenRefreshError",
    "TokenRefreshTimeoutError",
    "attempt_count",
    "classify_failure",
    "escalate",
    "failure_message",
]
