"""Bounded FIFO history, statistics, and sliding-window persistence checks."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from connection_resilience.base.errors import ErrorCategory, classify_failure
from connection_resilience.base.history import ErrorHistory

from .utils import record_at

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_capacity_evicts_oldest_first():
    history = ErrorHistory(max_size=100)
    for i in range(150):
        history.append(record_at(f"network down #{i}", NOW))
    records = history.all()
    assert len(records) == 100
    assert records[0].message == "network down #50"
    assert records[-1].message == "network down #149"


def test_all_is_a_restartable_snapshot():
    history = ErrorHistory(max_size=3)
    history.append(record_at("a", NOW))
    snapshot = history.all()
    history.append(record_at("b", NOW))
    assert [r.message for r in snapshot] == ["a"]
    assert [r.message for r in history] == ["a", "b"]
    assert [r.message for r in history] == ["a", "b"]


def test_invalid_capacity():
    with pytest.raises(ValueError):
        ErrorHistory(max_size=0)


def test_clear():
    history = ErrorHistory()
    history.append(record_at("network down", NOW))
    history.clear()
    assert len(history) == 0
    assert history.statistics(now=NOW).total_errors == 0


def test_persistent_issue_needs_more_than_five():
    history = ErrorHistory()
    for i in range(5):
        history.append(record_at("network down", NOW - timedelta(minutes=i)))
    assert history.is_persistent_issue(ErrorCategory.NETWORK, 300_000, now=NOW) is False
    history.append(record_at("network down", NOW - timedelta(seconds=30)))
    assert history.is_persistent_issue(ErrorCategory.NETWORK, 300_000, now=NOW) is True


def test_persistent_issue_ignores_old_and_other_categories():
    history = ErrorHistory()
    for _ in range(6):
        history.append(record_at("network down", NOW - timedelta(minutes=10)))
        history.append(record_at("HTTP 500", NOW))
    assert history.is_persistent_issue(ErrorCategory.NETWORK, 300_000, now=NOW) is False
    assert history.is_persistent_issue(ErrorCategory.SERVER, 300_000, now=NOW) is True
    # widening the window brings the old records back in
    assert history.is_persistent_issue(ErrorCategory.NETWORK, 900_000, now=NOW) is True


def test_persistent_issue_is_side_effect_free():
    history = ErrorHistory()
    for _ in range(6):
        history.append(record_at("network down", NOW))
    for _ in range(3):
        assert history.is_persistent_issue(ErrorCategory.NETWORK, now=NOW) is True
    assert len(history) == 6


def test_statistics_counts():
    history = ErrorHistory()
    history.append(record_at("network down", NOW - timedelta(hours=2)))
    history.append(record_at("token expired", NOW - timedelta(minutes=5)))
    history.append(classify_failure("network down", ErrorCategory.NETWORK, {"attempt_count": 5}, now=NOW))
    stats = history.statistics(now=NOW)
    assert stats.total_errors == 3
    assert stats.by_category["network"] == 2
    assert stats.by_category["authentication"] == 1
    assert stats.by_category["protocol"] == 0
    assert stats.by_severity == {"low": 0, "medium": 0, "high": 2, "critical": 1}
    assert stats.recent_errors == 2
    assert stats.to_dict()["generated_at"] == NOW.isoformat()


def test_flood_of_one_category_crowds_out_others():
    history = ErrorHistory(max_size=10)
    history.append(record_at("token expired", NOW))
    for _ in range(10):
        history.append(record_at("network down", NOW))
    assert history.statistics(now=NOW).by_category["authentication"] == 0


def test_naive_timestamps_compare_with_aware_queries():
    naive_now = NOW.replace(tzinfo=None)
    history = ErrorHistory()
    history.append(record_at("network down", naive_now - timedelta(seconds=5)))
    history.append(record_at("network down", NOW - timedelta(seconds=1)))
    assert len(history.recent(ErrorCategory.NETWORK, 60, now=naive_now)) == 2
    assert len(history.recent(ErrorCategory.NETWORK, 60, now=NOW)) == 2
    assert history.statistics(now=naive_now).recent_errors == 2
    assert history.statistics(now=naive_now).generated_at.tzinfo is not None
