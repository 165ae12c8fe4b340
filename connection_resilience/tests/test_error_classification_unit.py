"""Classifier precedence, codes, fallback, and attempt-based escalation."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from connection_resilience.base.errors import (
    ErrorCategory,
    ErrorSeverity,
    RecoveryAction,
    attempt_count,
    classify_failure,
    failure_message,
)


@pytest.mark.parametrize(
    "message",
    ["Connection timeout", "network timeout while reading", "request timed out"],
)
def test_timeout_wins_over_network_bucket(message):
    record = classify_failure(Exception(message), ErrorCategory.NETWORK)
    assert record.category is ErrorCategory.TIMEOUT
    assert record.code == "connection_timeout"
    assert record.severity is ErrorSeverity.HIGH
    assert record.retryable is True
    assert record.recovery_action is RecoveryAction.RECONNECT


def test_network_codes():
    refused = classify_failure(Exception("ECONNREFUSED: connection refused"), ErrorCategory.CONNECTION)
    assert refused.category is ErrorCategory.NETWORK
    assert refused.code == "connection_refused"
    unreachable = classify_failure("host unreachable", ErrorCategory.CONNECTION)
    assert unreachable.code == "network_error"


def test_network_checked_before_authentication():
    record = classify_failure(Exception("network error while sending auth token"), ErrorCategory.AUTHENTICATION)
    assert record.category is ErrorCategory.NETWORK


@pytest.mark.parametrize(
    "message, code",
    [
        ("token expired", "invalid_token"),
        ("401 Unauthorized", "unauthorized"),
        ("Forbidden", "unauthorized"),
        ("Authentication required", "authentication_failed"),
    ],
)
def test_authentication_codes(message, code):
    record = classify_failure(Exception(message), ErrorCategory.CONNECTION)
    assert record.category is ErrorCategory.AUTHENTICATION
    assert record.code == code
    assert record.retryable is True
    assert record.recovery_action is RecoveryAction.REFRESH_TOKEN


def test_protocol_is_not_retryable():
    record = classify_failure(Exception("malformed json payload"), ErrorCategory.PROTOCOL)
    assert record.category is ErrorCategory.PROTOCOL
    assert record.severity is ErrorSeverity.MEDIUM
    assert record.retryable is False
    assert record.recovery_action is RecoveryAction.LOG_ONLY
    assert classify_failure("failed to parse frame").code == "parse_error"


@pytest.mark.parametrize(
    "message, code",
    [
        ("HTTP 500", "internal_server_error"),
        ("503 from upstream", "service_unavailable"),
        ("server closed the stream", "server_error"),
    ],
)
def test_server_codes(message, code):
    record = classify_failure(Exception(message), ErrorCategory.CONNECTION)
    assert record.category is ErrorCategory.SERVER
    assert record.code == code
    assert record.recovery_action is RecoveryAction.RECONNECT


def test_unmatched_message_falls_back_to_origin():
    record = classify_failure(Exception("something odd happened"), ErrorCategory.CONNECTION)
    assert record.category is ErrorCategory.CONNECTION
    assert record.severity is ErrorSeverity.MEDIUM
    assert record.code == "unknown_error"
    assert record.retryable is False


def test_default_origin_is_unknown():
    assert classify_failure("???").category is ErrorCategory.UNKNOWN


def test_typed_timeout_without_message():
    record = classify_failure(asyncio.TimeoutError(), ErrorCategory.CONNECTION)
    assert record.category is ErrorCategory.TIMEOUT


@pytest.mark.parametrize("failure", [None, 42, {"unexpected": "shape"}, object()])
def test_classification_never_raises(failure):
    record = classify_failure(failure, ErrorCategory.SERVER)
    assert record.category in set(ErrorCategory)


def test_failure_message_shapes():
    assert failure_message({"message": "boom"}) == "boom"
    assert failure_message({"error": "bad"}) == "bad"
    assert failure_message(RuntimeError()) == "RuntimeError"
    assert failure_message("plain") == "plain"


def test_attempt_count_keys():
    assert attempt_count({"attempt_count": 2}) == 2
    assert attempt_count({"attemptCount": 4}) == 4
    assert attempt_count({"attempt": "7"}) == 7
    assert attempt_count({"attempt_count": True}) is None
    assert attempt_count(None) is None


def test_escalation_to_critical_after_three_attempts():
    base = classify_failure(Exception("network down"), ErrorCategory.NETWORK, {"attempt_count": 3})
    assert base.severity is ErrorSeverity.HIGH
    record = classify_failure(Exception("network down"), ErrorCategory.NETWORK, {"attempt_count": 4})
    assert record.severity is ErrorSeverity.CRITICAL
    assert record.recovery_action is RecoveryAction.RECONNECT
    assert record.retryable is True


def test_escalation_to_permanent_failure_after_ten_attempts():
    record = classify_failure(Exception("network down"), ErrorCategory.NETWORK, {"attemptCount": 11})
    assert record.severity is ErrorSeverity.CRITICAL
    assert record.recovery_action is RecoveryAction.PERMANENT_FAILURE
    assert record.retryable is False


def test_escalation_applies_regardless_of_category():
    record = classify_failure(Exception("malformed"), ErrorCategory.PROTOCOL, {"attempt_count": 12})
    assert record.recovery_action is RecoveryAction.PERMANENT_FAILURE


def test_custom_thresholds():
    record = classify_failure(
        Exception("network down"),
        ErrorCategory.NETWORK,
        {"attempt_count": 2},
        critical_after=1,
        permanent_after=1,
    )
    assert record.recovery_action is RecoveryAction.PERMANENT_FAILURE


class _BrokenStr:
    def __str__(self):
        raise RuntimeError("broken __str__")

    def __repr__(self):
        return "<broken str>"


class _Unprintable:
    def __str__(self):
        raise RuntimeError("broken __str__")

    def __repr__(self):
        raise RuntimeError("broken __repr__")


def test_failure_message_survives_raising_str():
    assert failure_message(_BrokenStr()) == "<broken str>"
    assert failure_message(_Unprintable()) == "_Unprintable"
    assert failure_message({"message": _Unprintable()}) == "_Unprintable"


@pytest.mark.parametrize("failure", [_BrokenStr(), _Unprintable(), {"error": _BrokenStr()}])
def test_unprintable_failures_fall_back_to_origin(failure):
    record = classify_failure(failure, ErrorCategory.NETWORK)
    assert record.category is ErrorCategory.NETWORK
    assert record.code == "unknown_error"
    assert record.original_failure is failure


def test_naive_now_is_taken_as_utc():
    naive = datetime(2024, 6, 1, 12, 0)
    record = classify_failure("network down", ErrorCategory.NETWORK, now=naive)
    assert record.timestamp == naive.replace(tzinfo=timezone.utc)
