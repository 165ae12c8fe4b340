"""
Recovery actions chosen for classified failures.

Each :class:`ErrorRecord` carries exactly one ``RecoveryAction`` describing
how the surrounding client should react. ``RETRYABLE_ACTIONS`` lists the
actions a retryable record may carry.
"""
from __future__ import annotations

from enum import Enum


class RecoveryAction(str, Enum):
    """Abstract response policy for a classified failure."""

    RECONNECT = "reconnect"
    REFRESH_TOKEN = "refresh_token"
    FALLBACK_POLLING = "fallback_polling"
    NOTIFY_USER = "notify_user"
    LOG_ONLY = "log_only"
    PERMANENT_FAILURE = "permanent_failure"


RETRYABLE_ACTIONS = frozenset({RecoveryAction.RECONNECT, RecoveryAction.REFRESH_TOKEN})


__all__ = ["RecoveryAction", "RETRYABLE_ACTIONS"]
