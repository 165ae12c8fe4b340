"""
Failure classification mapping raw connection failures to ``ErrorRecord``.

Message text is the only signal shared by every failure source (socket
errors, server-sent error frames, credential provider rejections), so the
classifier lower-cases it and applies an ordered table of substring
heuristics. The first matching rule wins; the order of ``_RULES`` is a
compatibility contract (network/timeout before authentication before
protocol before server).

Precedence:
    1. Typed timeouts (``TimeoutError`` / ``asyncio.TimeoutError``).
    2. Substring heuristics, in table order.
    3. Origin-hint fallback with code ``unknown_error``.

Severity escalation is applied afterwards from the attempt count carried
in the caller context. Classification never raises.
"""
from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Tuple

from ..constants import (
    ATTEMPT_CONTEXT_KEYS,
    DEFAULT_CRITICAL_ATTEMPT_THRESHOLD,
    DEFAULT_PERMANENT_ATTEMPT_THRESHOLD,
    UNKNOWN_ERROR_CODE,
)
from .error_category import ErrorCategory
from .error_record import ErrorRecord
from .error_severity import ErrorSeverity
from .recovery_action import RecoveryAction


@dataclass(frozen=True)
class _Rule:
    """One heuristic bucket of the classification table."""

    patterns: Tuple[str, ...]
    category: Callable[[str], ErrorCategory]
    code: Callable[[str], str]
    severity: ErrorSeverity
    retryable: bool
    action: RecoveryAction


def _network_category(msg: str) -> ErrorCategory:
    if "timeout" in msg or "timed out" in msg:
        return ErrorCategory.TIMEOUT
    return ErrorCategory.NETWORK


def _network_code(msg: str) -> str:
    if "timeout" in msg or "timed out" in msg:
        return "connection_timeout"
    if "connection refused" in msg:
        return "connection_refused"
    return "network_error"


def _auth_code(msg: str) -> str:
    if "token" in msg:
        return "invalid_token"
    if "unauthorized" in msg or "forbidden" in msg:
        return "unauthorized"
    return "authentication_failed"


def _protocol_code(msg: str) -> str:
    return "parse_error" if "parse" in msg else "protocol_error"


def _server_code(msg: str) -> str:
    if "500" in msg:
        return "internal_server_error"
    if "503" in msg:
        return "service_unavailable"
    return "server_error"


_RULES: Tuple[_Rule, ...] = (
    _Rule(
        patterns=("network", "connection refused", "timeout", "timed out", "unreachable"),
        category=_network_category,
        code=_network_code,
        severity=ErrorSeverity.HIGH,
        retryable=True,
        action=RecoveryAction.RECONNECT,
    ),
    _Rule(
        patterns=("auth", "unauthorized", "forbidden", "token"),
        category=lambda _msg: ErrorCategory.AUTHENTICATION,
        code=_auth_code,
        severity=ErrorSeverity.HIGH,
        retryable=True,
        action=RecoveryAction.REFRESH_TOKEN,
    ),
    _Rule(
        patterns=("parse", "malformed", "invalid json", "protocol"),
        category=lambda _msg: ErrorCategory.PROTOCOL,
        code=_protocol_code,
        severity=ErrorSeverity.MEDIUM,
        retryable=False,
        action=RecoveryAction.LOG_ONLY,
    ),
    _Rule(
        patterns=("server", "internal", "500", "503"),
        category=lambda _msg: ErrorCategory.SERVER,
        code=_server_code,
        severity=ErrorSeverity.HIGH,
        retryable=True,
        action=RecoveryAction.RECONNECT,
    ),
)


def _render(value: Any) -> str:
    """``str(value)``, falling back to ``repr`` and then the type name when rendering raises."""
    with contextlib.suppress(Exception):
        return str(value)
    with contextlib.suppress(Exception):
        return repr(value)
    return type(value).__name__


def failure_message(failure: Any) -> str:
    """Render a raw failure as text; never raises.

    Supported shapes (checked in order):
    - ``str``
    - mappings with a ``message`` (or ``error``) key
    - exceptions (``str(exc)``, falling back to the class name when empty)
    - anything else via ``str()``

    Objects whose ``__str__`` raises are rendered with ``repr`` (or their
    type name as a last resort).
    """
    if failure is None:
        return ""
    if isinstance(failure, str):
        return failure
    if isinstance(failure, Mapping):
        for key in ("message", "error"):
            val = failure.get(key)
            if val is not None:
                return _render(val)
        return _render(dict(failure))
    if isinstance(failure, BaseException):
        return _render(failure) or type(failure).__name__
    return _render(failure)


def _match_rule(msg: str) -> Optional[_Rule]:
    for rule in _RULES:
        if any(p in msg for p in rule.patterns):
            return rule
    return None


def attempt_count(context: Optional[Mapping[str, Any]]) -> Optional[int]:
    """Return the attempt count carried by ``context`` (``None`` if absent)."""
    if not context:
        return None
    for key in ATTEMPT_CONTEXT_KEYS:
        val = context.get(key)
        if isinstance(val, bool):
            continue
        if isinstance(val, int):
            return val
        if isinstance(val, str) and val.strip().isdigit():
            return int(val)
    return None


def escalate(
    record: ErrorRecord,
    *,
    critical_after: int = DEFAULT_CRITICAL_ATTEMPT_THRESHOLD,
    permanent_after: int = DEFAULT_PERMANENT_ATTEMPT_THRESHOLD,
) -> ErrorRecord:
    """Raise severity and replace the action from the accumulated attempt count.

    ``attempts > critical_after`` forces ``critical``; ``attempts >
    permanent_after`` additionally forces ``permanent_failure`` whatever the
    category. Returns ``record`` unchanged when no threshold is crossed.
    """
    attempts = attempt_count(record.context)
    if attempts is None or attempts <= critical_after:
        return record
    action = RecoveryAction.PERMANENT_FAILURE if attempts > permanent_after else None
    return record.with_escalation(severity=ErrorSeverity.CRITICAL, recovery_action=action)


def classify_failure(
    failure: Any,
    origin: ErrorCategory = ErrorCategory.UNKNOWN,
    context: Optional[Mapping[str, Any]] = None,
    *,
    now: Optional[datetime] = None,
    critical_after: int = DEFAULT_CRITICAL_ATTEMPT_THRESHOLD,
    permanent_after: int = DEFAULT_PERMANENT_ATTEMPT_THRESHOLD,
) -> ErrorRecord:
    """Classify a raw failure into an escalated :class:`ErrorRecord`.

    Args:
        failure: Raw failure (exception, string, mapping, or any object).
        origin: Category hint from the calling entry point, used when no
            heuristic matches.
        context: Optional free-form caller context (``attempt_count``, ...).
        now: Timestamp override, mainly for tests.
        critical_after: Attempt count above which severity becomes critical.
        permanent_after: Attempt count above which the action becomes
            ``permanent_failure``.

    Returns:
        A new immutable record; never raises for any failure shape.
    """
    msg = failure_message(failure)
    lowered = msg.lower()
    ctx = dict(context or {})
    extra = {} if now is None else {"timestamp": now}

    # typed timeouts probe as "timeout" so they land in the timeout bucket
    probe = "timeout" if isinstance(failure, (TimeoutError, asyncio.TimeoutError)) else lowered
    rule = _match_rule(probe)
    if rule is None:
        record = ErrorRecord(
            category=origin,
            severity=ErrorSeverity.MEDIUM,
            code=UNKNOWN_ERROR_CODE,
            message=msg,
            original_failure=failure,
            context=ctx,
            retryable=False,
            recovery_action=RecoveryAction.LOG_ONLY,
            **extra,
        )
    else:
        record = ErrorRecord(
            category=rule.category(probe),
            severity=rule.severity,
            code=rule.code(probe),
            message=msg,
            original_failure=failure,
            context=ctx,
            retryable=rule.retryable,
            recovery_action=rule.action,
            **extra,
        )
    return escalate(record, critical_after=critical_after, permanent_after=permanent_after)


__all__ = [
    "classify_failure",
    "escalate",
    "attempt_count",
    "failure_message",
]
