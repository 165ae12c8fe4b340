"""Base shared constants for the resilience layer.

Central location to avoid scattering magic strings and default numbers.
Runtime overrides go through ``connection_resilience.config``; these values
are the built-in defaults it starts from.
"""
from __future__ import annotations

# Bounded error history (FIFO eviction beyond this size)
DEFAULT_MAX_HISTORY_SIZE = 100

# Credential refresh handshake deadline (seconds)
DEFAULT_TOKEN_REFRESH_TIMEOUT_SECONDS = 5.0

# Persistent issue detection: more than THRESHOLD records within WINDOW
DEFAULT_PERSISTENT_WINDOW_MS = 300_000
DEFAULT_PERSISTENT_THRESHOLD = 5

# Window used for the "recent errors" statistic
DEFAULT_RECENT_WINDOW_SECONDS = 3600

# Severity escalation by accumulated attempts (strictly greater than)
DEFAULT_CRITICAL_ATTEMPT_THRESHOLD = 3
DEFAULT_PERMANENT_ATTEMPT_THRESHOLD = 10

# Context keys read for the attempt count, first present wins
ATTEMPT_CONTEXT_KEYS = ("attempt_count", "attemptCount", "attempt")

# Context flag set on records produced after a failed credential refresh
REFRESH_ATTEMPT_CONTEXT_KEY = "refresh_attempt"

# Context key holding the offending payload of a protocol failure
PROTOCOL_MESSAGE_CONTEXT_KEY = "protocol_message"

# Fallback code when no heuristic matches
UNKNOWN_ERROR_CODE = "unknown_error"

__all__ = [
    "DEFAULT_MAX_HISTORY_SIZE",
    "DEFAULT_TOKEN_REFRESH_TIMEOUT_SECONDS",
    "DEFAULT_PERSISTENT_WINDOW_MS",
    "DEFAULT_PERSISTENT_THRESHOLD",
    "DEFAULT_RECENT_WINDOW_SECONDS",
    "DEFAULT_CRITICAL_ATTEMPT_THRESHOLD",
    "DEFAULT_PERMANENT_ATTEMPT_THRESHOLD",
    "ATTEMPT_CONTEXT_KEYS",
    "REFRESH_ATTEMPT_CONTEXT_KEY",
    "PROTOCOL_MESSAGE_CONTEXT_KEY",
    "UNKNOWN_ERROR_CODE",
]
