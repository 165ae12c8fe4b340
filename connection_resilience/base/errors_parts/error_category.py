"""
Normalized failure categories (taxonomy).

Defines the closed `ErrorCategory` enumeration assigned to every classified
connection failure. Values are lowercase snake_case and are considered a
stable public contract for logging, statistics, and event routing.
"""
from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Enumerated failure categories for a long-lived connection."""

    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    PROTOCOL = "protocol"
    NETWORK = "network"
    SERVER = "server"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


__all__ = ["ErrorCategory"]
