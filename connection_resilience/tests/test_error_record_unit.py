"""ErrorRecord immutability, invariants, and serialization."""
from __future__ import annotations

import dataclasses
import json
from datetime import datetime, timezone

import pytest

from connection_resilience.base.errors import (
    ErrorCategory,
    ErrorRecord,
    ErrorSeverity,
    RecoveryAction,
    classify_failure,
)


def test_record_is_frozen():
    record = classify_failure(Exception("token expired"), ErrorCategory.AUTHENTICATION)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.severity = ErrorSeverity.LOW  # type: ignore[misc]


def test_context_is_read_only_copy():
    ctx = {"attempt_count": 1}
    record = classify_failure(Exception("network"), ErrorCategory.NETWORK, ctx)
    ctx["attempt_count"] = 99
    assert record.context["attempt_count"] == 1
    with pytest.raises(TypeError):
        record.context["attempt_count"] = 2  # type: ignore[index]


def test_retryable_requires_retry_action():
    with pytest.raises(ValueError):
        ErrorRecord(
            category=ErrorCategory.PROTOCOL,
            severity=ErrorSeverity.MEDIUM,
            code="protocol_error",
            message="bad",
            retryable=True,
            recovery_action=RecoveryAction.LOG_ONLY,
        )


def test_with_escalation_returns_new_record():
    record = classify_failure(Exception("network"), ErrorCategory.NETWORK)
    escalated = record.with_escalation(
        severity=ErrorSeverity.CRITICAL,
        recovery_action=RecoveryAction.PERMANENT_FAILURE,
    )
    assert record.severity is ErrorSeverity.HIGH
    assert escalated.severity is ErrorSeverity.CRITICAL
    assert escalated.retryable is False
    assert escalated.timestamp == record.timestamp


def test_severity_is_totally_ordered():
    assert ErrorSeverity.LOW < ErrorSeverity.MEDIUM < ErrorSeverity.HIGH < ErrorSeverity.CRITICAL
    assert max(ErrorSeverity) is ErrorSeverity.CRITICAL
    assert ErrorSeverity.HIGH >= ErrorSeverity.HIGH


def test_to_dict_is_json_serializable():
    when = datetime(2024, 1, 1, tzinfo=timezone.utc)
    record = classify_failure(
        ValueError("invalid json"),
        ErrorCategory.PROTOCOL,
        {"protocol_message": b"\x00", "nested": {"n": 1}},
        now=when,
    )
    data = record.to_dict()
    json.dumps(data)
    assert data["category"] == "protocol"
    assert data["timestamp"] == "2024-01-01T00:00:00+00:00"
    assert data["context"]["nested"] == {"n": 1}
    assert data["original_failure"].startswith("ValueError")
