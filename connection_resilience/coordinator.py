"""Connection-resilience coordinator facade.

Turns raw failures observed on a long-lived connection into classified
``ErrorRecord`` objects and recovery intents. One entry point exists per
failure origin; each one runs the same pipeline:

    classify -> append to history -> category event -> permanent failure
    policy -> recovery dispatch

All entry points except :meth:`handle_authentication_error` are synchronous
and never suspend. The authentication entry point awaits the credential
refresh handshake (bounded by the configured deadline). No entry point
raises for a raw failure; outcomes are published on the event bus.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple, Union

from .base.constants import PROTOCOL_MESSAGE_CONTEXT_KEY
from .base.errors import ErrorCategory, ErrorRecord, ErrorSeverity, classify_failure
from .base.events import CATEGORY_EVENTS, EventBus, Events, Listener
from .base.history import ErrorHistory, ErrorStatistics
from .base.logging import LogContext, get_logger, log_event
from .base.recovery import PermanentFailurePolicy, RecoveryDispatcher, TokenRefreshCoordinator
from .config import ResilienceSettings, get_resilience_settings

Context = Optional[Mapping[str, Any]]

_logger = get_logger("resilience.coordinator")

_SEVERITY_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.INFO,
    ErrorSeverity.HIGH: logging.WARNING,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


class ConnectionErrorCoordinator:
    """Classifies connection failures and publishes recovery intents.

    Args:
        settings: Explicit settings; defaults to ``get_resilience_settings()``.
        bus: Event bus to publish on; a private one is created when omitted.
        history: Error history; sized from ``settings`` when omitted.

    Collaborators subscribe through :meth:`on` (or directly on :attr:`bus`):
    the connection manager to ``requestReconnection`` / ``requestFallbackMode``,
    the credential provider to ``tokenRefreshRequested``, the UI layer to
    ``requestUserNotification`` and the category events.
    """

    def __init__(
        self,
        settings: Optional[ResilienceSettings] = None,
        *,
        bus: Optional[EventBus] = None,
        history: Optional[ErrorHistory] = None,
    ) -> None:
        self.settings = settings or get_resilience_settings()
        self.bus = bus if bus is not None else EventBus()
        if history is None:
            history = ErrorHistory(
                self.settings.max_history_size,
                persistent_threshold=self.settings.persistent_threshold,
                recent_window_seconds=self.settings.recent_window_seconds,
            )
        self.history = history
        self._policy = PermanentFailurePolicy(self.history, self.settings.permanent_failure_rules)
        self._refresher = TokenRefreshCoordinator(
            self.bus, timeout_seconds=self.settings.token_refresh_timeout_seconds
        )
        self._dispatcher = RecoveryDispatcher(self.bus, self._refresher, self._record_refresh_failure)

    # ------------------------------------------------------------------ bus
    def on(self, event: str, listener: Listener) -> Listener:
        return self.bus.on(event, listener)

    def off(self, event: str, listener: Listener) -> bool:
        return self.bus.off(event, listener)

    # ------------------------------------------------------- classification
    def classify(
        self,
        failure: Any,
        origin: ErrorCategory,
        context: Context = None,
        *,
        now: Optional[datetime] = None,
    ) -> ErrorRecord:
        """Classify without storing or publishing anything."""
        return classify_failure(
            failure,
            origin,
            context,
            now=now,
            critical_after=self.settings.critical_attempt_threshold,
            permanent_after=self.settings.permanent_attempt_threshold,
        )

    def _record(self, failure: Any, origin: ErrorCategory, context: Context) -> ErrorRecord:
        record = self.classify(failure, origin, context)
        self.history.append(record)
        log_event(
            _logger,
            "error.classified",
            LogContext.for_record(record),
            level=_SEVERITY_LEVELS[record.severity],
            origin=origin.value,
            message=record.message,
            retryable=record.retryable,
            action=record.recovery_action.value,
        )
        self.bus.emit(CATEGORY_EVENTS[record.category], record)
        permanent = self._policy.evaluate(record)
        if permanent is not None:
            log_event(
                _logger,
                "error.persistent_failure_detected",
                LogContext.for_record(record),
                level=logging.ERROR,
                reason=permanent.reason.value,
                attempt_count=permanent.attempt_count,
                details=permanent.technical_details,
            )
            self.bus.emit(Events.PERSISTENT_FAILURE_DETECTED, permanent)
            self.bus.emit(Events.STOP_RECONNECTION)
        return record

    def _record_refresh_failure(self, failure: Any, context: Mapping[str, Any]) -> ErrorRecord:
        record = self.classify(failure, ErrorCategory.AUTHENTICATION, context)
        self.history.append(record)
        return record

    def _handle(self, failure: Any, origin: ErrorCategory, context: Context) -> ErrorRecord:
        record = self._record(failure, origin, context)
        self._dispatcher.dispatch(record)
        return record

    # --------------------------------------------------------- entry points
    def handle_connection_error(self, failure: Any, context: Context = None) -> ErrorRecord:
        return self._handle(failure, ErrorCategory.CONNECTION, context)

    async def handle_authentication_error(self, failure: Any, context: Context = None) -> ErrorRecord:
        """Classify an authentication failure and run the refresh handshake.

        Completes once the handshake settles: ``authenticationRecovered`` on
        success, ``authenticationFailed`` on rejection or timeout. Concurrent
        calls each start their own handshake.

        Returns:
            The record classified for ``failure`` (not the post-refresh one).
        """
        record = self._record(failure, ErrorCategory.AUTHENTICATION, context)
        await self._dispatcher.dispatch_authentication(record)
        return record

    def handle_protocol_error(
        self,
        failure: Any,
        message: Any = None,
        context: Context = None,
    ) -> ErrorRecord:
        """Classify a protocol failure; ``message`` is the offending payload."""
        ctx = dict(context or {})
        if message is not None:
            ctx[PROTOCOL_MESSAGE_CONTEXT_KEY] = message
        return self._handle(failure, ErrorCategory.PROTOCOL, ctx)

    def handle_network_error(self, failure: Any, context: Context = None) -> ErrorRecord:
        return self._handle(failure, ErrorCategory.NETWORK, context)

    def handle_server_error(self, failure: Any, context: Context = None) -> ErrorRecord:
        return self._handle(failure, ErrorCategory.SERVER, context)

    def handle_timeout_error(self, failure: Any, context: Context = None) -> ErrorRecord:
        return self._handle(failure, ErrorCategory.TIMEOUT, context)

    # ---------------------------------------------------------- diagnostics
    def get_error_history(self) -> Tuple[ErrorRecord, ...]:
        return self.history.all()

    def get_error_statistics(self) -> ErrorStatistics:
        return self.history.statistics()

    def is_persistent_issue(
        self,
        category: Union[ErrorCategory, str],
        window_ms: Optional[int] = None,
    ) -> bool:
        """Whether ``category`` failed repeatedly within ``window_ms``.

        Unknown category names have no records and report ``False``.
        """
        try:
            category = ErrorCategory(category)
        except ValueError:
            return False
        if window_ms is None:
            window_ms = self.settings.persistent_window_ms
        return self.history.is_persistent_issue(category, window_ms)

    def clear_history(self) -> None:
        self.history.clear()
        self._policy.reset()
        log_event(_logger, "history.cleared")


__all__ = ["ConnectionErrorCoordinator"]
