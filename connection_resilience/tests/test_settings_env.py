"""Settings validation and RESILIENCE_* environment overrides."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from connection_resilience.config import ResilienceSettings, get_resilience_settings


def test_defaults():
    s = ResilienceSettings()
    assert s.max_history_size == 100
    assert s.token_refresh_timeout_seconds == 5.0
    assert s.persistent_window_ms == 300_000
    assert s.persistent_threshold == 5
    assert s.recent_window_seconds == 3600
    assert s.critical_attempt_threshold == 3
    assert s.permanent_attempt_threshold == 10
    assert s.permanent_failure_rules["authentication"] == (3, 60.0)


def test_settings_are_frozen():
    with pytest.raises(ValidationError):
        ResilienceSettings().max_history_size = 5  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_history_size": 0},
        {"token_refresh_timeout_seconds": -1},
        {"critical_attempt_threshold": 5, "permanent_attempt_threshold": 2},
        {"permanent_failure_rules": {"server": (0, 10.0)}},
    ],
)
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ValidationError):
        ResilienceSettings(**kwargs)


def test_env_overrides_are_applied(monkeypatch):
    monkeypatch.setenv("RESILIENCE_MAX_HISTORY_SIZE", "20")
    monkeypatch.setenv("RESILIENCE_TOKEN_REFRESH_TIMEOUT_SECONDS", "1.5")
    s = get_resilience_settings()
    assert s.max_history_size == 20
    assert s.token_refresh_timeout_seconds == 1.5


def test_invalid_env_values_keep_defaults(monkeypatch):
    monkeypatch.setenv("RESILIENCE_MAX_HISTORY_SIZE", "lots")
    monkeypatch.setenv("RESILIENCE_PERSISTENT_WINDOW_MS", "-10")
    s = get_resilience_settings()
    assert s.max_history_size == 100
    assert s.persistent_window_ms == 300_000


def test_cache_refreshes_when_env_changes(monkeypatch):
    monkeypatch.delenv("RESILIENCE_MAX_HISTORY_SIZE", raising=False)
    first = get_resilience_settings()
    assert get_resilience_settings() is first
    monkeypatch.setenv("RESILIENCE_MAX_HISTORY_SIZE", "7")
    second = get_resilience_settings()
    assert second is not first
    assert second.max_history_size == 7
