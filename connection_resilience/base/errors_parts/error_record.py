"""
Immutable classified representation of one raw connection failure.

An ``ErrorRecord`` is built once by the classifier, appended to the bounded
history, and then only read. Escalation produces a new record through
:meth:`ErrorRecord.with_escalation`; nothing mutates an existing one.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .error_category import ErrorCategory
from .error_severity import ErrorSeverity
from .recovery_action import RETRYABLE_ACTIONS, RecoveryAction


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ErrorRecord:
    """Classified failure with a fixed category, severity, and recovery action.

    Attributes:
        category: Refined :class:`ErrorCategory` for the failure.
        severity: :class:`ErrorSeverity` after escalation.
        code: Stable snake_case code (e.g. ``"invalid_token"``).
        message: Human-readable failure message.
        original_failure: The raw failure object, kept for diagnostics.
        timestamp: Aware instant the record was created (naive values are
            taken as UTC).
        context: Read-only caller context (attempt counts, connection id, ...).
        retryable: Whether the failure may be retried automatically.
        recovery_action: Response policy for the surrounding client.

    Raises:
        ValueError: When ``retryable`` is set for an action outside
            ``reconnect`` / ``refresh_token``.
    """

    category: ErrorCategory
    severity: ErrorSeverity
    code: str
    message: str
    original_failure: Any = field(default=None, hash=False)
    timestamp: datetime = field(default_factory=_utcnow)
    context: Mapping[str, Any] = field(default_factory=dict, hash=False)
    retryable: bool = False
    recovery_action: RecoveryAction = RecoveryAction.LOG_ONLY

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None:
            # naive timestamps are taken as UTC
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))
        if self.retryable and self.recovery_action not in RETRYABLE_ACTIONS:
            raise ValueError(
                f"retryable record cannot use recovery action {self.recovery_action.value!r}"
            )
        if not isinstance(self.context, MappingProxyType):
            object.__setattr__(self, "context", MappingProxyType(dict(self.context or {})))

    def with_escalation(
        self,
        *,
        severity: Optional[ErrorSeverity] = None,
        recovery_action: Optional[RecoveryAction] = None,
    ) -> "ErrorRecord":
        """Return a copy with a raised severity and/or a replaced action."""
        action = recovery_action or self.recovery_action
        return replace(
            self,
            severity=severity or self.severity,
            recovery_action=action,
            retryable=self.retryable and action in RETRYABLE_ACTIONS,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dictionary (enum values, ISO timestamp)."""
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
            "original_failure": repr(self.original_failure) if self.original_failure is not None else None,
            "timestamp": self.timestamp.isoformat(),
            "context": {k: _jsonable(v) for k, v in self.context.items()},
            "retryable": self.retryable,
            "recovery_action": self.recovery_action.value,
        }


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return repr(value)


__all__ = ["ErrorRecord"]
