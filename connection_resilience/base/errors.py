"""Unified connection failure taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``connection_resilience.base.errors_parts`` to maintain a stable import path
while enforcing the one-class-per-file governance rule.
"""

from .errors_parts.error_category import ErrorCategory
from .errors_parts.error_severity import ErrorSeverity
from .errors_parts.recovery_action import RecoveryAction, RETRYABLE_ACTIONS
from .errors_parts.permanent_failure_reason import PermanentFailureReason
from .errors_parts.error_record import ErrorRecord
from .errors_parts.resilience_error import (
    ResilienceError,
    TokenRefreshError,
    TokenRefreshTimeoutError,
)
from .errors_parts.classification import (
    attempt_count,
    classify_failure,
    escalate,
    failure_message,
)

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
