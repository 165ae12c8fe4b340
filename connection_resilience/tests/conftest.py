"""Pytest configuration for the resilience test suite.

Rebinds the shared ``resilience`` log handler to the current ``sys.stderr``
before each test (pytest swaps the stream between captures) and provides a
coordinator wired with a short refresh deadline so timeout paths run fast.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from connection_resilience import ConnectionErrorCoordinator, ResilienceSettings
from connection_resilience.base.logging import get_logger

from .utils import EventRecorder


@pytest.fixture(autouse=True)
def _bind_log_stream() -> Iterator[None]:
    get_logger()
    yield


@pytest.fixture()
def fast_settings() -> ResilienceSettings:
    """Settings with a 50ms refresh deadline."""

    return ResilienceSettings(token_refresh_timeout_seconds=0.05)


@pytest.fixture()
def coordinator(fast_settings: ResilienceSettings) -> ConnectionErrorCoordinator:
    return ConnectionErrorCoordinator(fast_settings)


@pytest.fixture()
def recorder_for():
    """Return a factory attaching an ``EventRecorder`` to a coordinator's bus."""

    def _make(coord: ConnectionErrorCoordinator, *events: str) -> EventRecorder:
        return EventRecorder(coord.bus, *events)

    return _make
