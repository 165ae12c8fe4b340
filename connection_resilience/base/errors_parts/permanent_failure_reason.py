"""
Reasons attached to a detected permanent failure.

Each reason selects the user-facing message and the recovery options
offered once automatic recovery is abandoned for a category.
"""
from __future__ import annotations

from enum import Enum


class PermanentFailureReason(str, Enum):
    """Why automatic recovery was abandoned."""

    MAX_RECONNECTION_ATTEMPTS = "max_reconnection_attempts"
    AUTHENTICATION_FAILED = "authentication_failed"
    SERVER_PERMANENTLY_UNAVAILABLE = "server_permanently_unavailable"
    NETWORK_PERMANENTLY_UNAVAILABLE = "network_permanently_unavailable"


__all__ = ["PermanentFailureReason"]
