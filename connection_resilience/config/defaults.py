"""connection_resilience.config.defaults
======================================

Defaults for the permanent failure policy, keyed by category value. Each
entry is ``(threshold, window_seconds)``: the policy fires once at least
``threshold`` records of that category fall within the trailing window.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

PERMANENT_FAILURE_DEFAULTS = {
    "authentication": (3, 60.0),
    "server": (5, 300.0),
    "network": (4, 180.0),
}

# Prefix for environment overrides, e.g. RESILIENCE_MAX_HISTORY_SIZE
ENV_PREFIX = "RESILIENCE_"

__all__ = ["PERMANENT_FAILURE_DEFAULTS", "ENV_PREFIX"]
