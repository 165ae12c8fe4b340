"""Validated runtime settings for the resilience coordinator.

``ResilienceSettings`` is a frozen Pydantic model holding every tunable of
the coordinator. ``get_resilience_settings()`` returns a process-cached
instance built from the built-in defaults plus ``RESILIENCE_*`` environment
overrides; the cache is rebuilt only when one of those variables changes, so
tests can adjust the environment at runtime.

Supported environment variables (all optional):
    RESILIENCE_MAX_HISTORY_SIZE
    RESILIENCE_TOKEN_REFRESH_TIMEOUT_SECONDS
    RESILIENCE_PERSISTENT_WINDOW_MS
    RESILIENCE_PERSISTENT_THRESHOLD
    RESILIENCE_RECENT_WINDOW_SECONDS
    RESILIENCE_CRITICAL_ATTEMPT_THRESHOLD
    RESILIENCE_PERMANENT_ATTEMPT_THRESHOLD

Invalid values (unparseable or failing validation bounds) are ignored and
the default is kept.
"""
from __future__ import annotations

import os
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..base.constants import (
    DEFAULT_CRITICAL_ATTEMPT_THRESHOLD,
    DEFAULT_MAX_HISTORY_SIZE,
    DEFAULT_PERMANENT_ATTEMPT_THRESHOLD,
    DEFAULT_PERSISTENT_THRESHOLD,
    DEFAULT_PERSISTENT_WINDOW_MS,
    DEFAULT_RECENT_WINDOW_SECONDS,
    DEFAULT_TOKEN_REFRESH_TIMEOUT_SECONDS,
)
from .defaults import ENV_PREFIX, PERMANENT_FAILURE_DEFAULTS


class ResilienceSettings(BaseModel):
    """Tunables for history, handshake deadline, and escalation.

    Attributes
    ----------
    max_history_size:
        Capacity of the FIFO error history.
    token_refresh_timeout_seconds:
        Deadline of the credential refresh handshake.
    persistent_window_ms / persistent_threshold:
        A category is a persistent issue when more than ``persistent_threshold``
        records fall within the trailing ``persistent_window_ms``.
    recent_window_seconds:
        Window of the ``recent_errors`` statistic.
    critical_attempt_threshold / permanent_attempt_threshold:
        Attempt counts above which severity becomes ``critical`` and the
        action becomes ``permanent_failure``.
    permanent_failure_rules:
        Category value to ``(threshold, window_seconds)`` for the permanent
        failure policy.
    """

    model_config = ConfigDict(frozen=True)

    max_history_size: int = Field(default=DEFAULT_MAX_HISTORY_SIZE, gt=0)
    token_refresh_timeout_seconds: float = Field(default=DEFAULT_TOKEN_REFRESH_TIMEOUT_SECONDS, gt=0)
    persistent_window_ms: int = Field(default=DEFAULT_PERSISTENT_WINDOW_MS, gt=0)
    persistent_threshold: int = Field(default=DEFAULT_PERSISTENT_THRESHOLD, ge=0)
    recent_window_seconds: float = Field(default=DEFAULT_RECENT_WINDOW_SECONDS, gt=0)
    critical_attempt_threshold: int = Field(default=DEFAULT_CRITICAL_ATTEMPT_THRESHOLD, ge=0)
    permanent_attempt_threshold: int = Field(default=DEFAULT_PERMANENT_ATTEMPT_THRESHOLD, ge=0)
    permanent_failure_rules: Dict[str, Tuple[int, float]] = Field(
        default_factory=lambda: dict(PERMANENT_FAILURE_DEFAULTS)
    )

    @model_validator(mode="after")
    def _validate_thresholds(self) -> "ResilienceSettings":
        """Ensure the permanent threshold does not undercut the critical one.

        Raises:
            ValueError: If ``permanent_attempt_threshold`` is below
                ``critical_attempt_threshold`` or a policy rule is non-positive.
        """
        if self.permanent_attempt_threshold < self.critical_attempt_threshold:
            raise ValueError("permanent_attempt_threshold must be >= critical_attempt_threshold")
        for category, (threshold, window) in self.permanent_failure_rules.items():
            if threshold <= 0 or window <= 0:
                raise ValueError(f"permanent failure rule for {category!r} must be positive")
        return self


_ENV_FIELDS = (
    "max_history_size",
    "token_refresh_timeout_seconds",
    "persistent_window_ms",
    "persistent_threshold",
    "recent_window_seconds",
    "critical_attempt_threshold",
    "permanent_attempt_threshold",
)

_CACHED: Optional[ResilienceSettings] = None
_ENV_GUARD: Optional[str] = None


def _env_name(field: str) -> str:
    return f"{ENV_PREFIX}{field.upper()}"


def _env_overrides() -> Dict[str, Any]:
    """Collect raw ``RESILIENCE_*`` values, each validated on its own."""
    out: Dict[str, Any] = {}
    for field in _ENV_FIELDS:
        raw = os.getenv(_env_name(field))
        if raw is None or not raw.strip():
            continue
        try:
            ResilienceSettings(**{**out, field: raw.strip()})
        except ValidationError:
            continue
        out[field] = raw.strip()
    return out


def get_resilience_settings() -> ResilienceSettings:
    """Return the process-cached :class:`ResilienceSettings`.

    The cache is invalidated when any ``RESILIENCE_*`` override changes.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - intentional, documented module cache
    cur_guard = "/".join(os.getenv(_env_name(f), "") for f in _ENV_FIELDS)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED
    _CACHED = ResilienceSettings(**_env_overrides())
    _ENV_GUARD = cur_guard
    return _CACHED


__all__ = ["ResilienceSettings", "get_resilience_settings"]
