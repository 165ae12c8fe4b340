"""Executes the side effects implied by a record's recovery action.

``dispatch`` is a synchronous switch on ``record.recovery_action`` that
publishes the matching recovery intent:

==================  ============================
action              event
==================  ============================
reconnect           ``requestReconnection``
refresh_token       ``requestTokenRefresh``
fallback_polling    ``requestFallbackMode``
notify_user         ``requestUserNotification``
permanent_failure   ``permanentFailure`` (terminal)
log_only            none (logged only)
==================  ============================

A ``critical`` protocol record additionally publishes
``criticalProtocolError``.

``dispatch_authentication`` is used for the authentication origin only: it
runs ``dispatch`` and, for ``refresh_token`` records, drives the credential
refresh handshake. A failed or timed-out handshake never raises; it is
converted into an ``authenticationFailed`` event carrying a record
reclassified with ``refresh_attempt=True`` in its context.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping

from ..constants import REFRESH_ATTEMPT_CONTEXT_KEY
from ..errors import (
    ErrorCategory,
    ErrorRecord,
    ErrorSeverity,
    RecoveryAction,
    TokenRefreshError,
)
from ..events import EventBus, Events
from ..logging import LogContext, get_logger, log_event
from .token_refresh import TokenRefreshCoordinator

Reclassifier = Callable[[Any, Mapping[str, Any]], ErrorRecord]

_logger = get_logger("resilience.recovery")

_ACTION_EVENTS: Dict[RecoveryAction, str] = {
    RecoveryAction.RECONNECT: Events.REQUEST_RECONNECTION,
    RecoveryAction.REFRESH_TOKEN: Events.REQUEST_TOKEN_REFRESH,
    RecoveryAction.FALLBACK_POLLING: Events.REQUEST_FALLBACK_MODE,
    RecoveryAction.NOTIFY_USER: Events.REQUEST_USER_NOTIFICATION,
    RecoveryAction.PERMANENT_FAILURE: Events.PERMANENT_FAILURE,
}


class RecoveryDispatcher:
    """Maps classified records to recovery intents on the event bus.

    Args:
        bus: Event bus used for every emission.
        refresher: Credential refresh handshake runner.
        reclassify: Callable ``(failure, context) -> ErrorRecord`` used to
            build the record reported after a failed refresh.
    """

    def __init__(
        self,
        bus: EventBus,
        refresher: TokenRefreshCoordinator,
        reclassify: Reclassifier,
    ) -> None:
        self._bus = bus
        self._refresher = refresher
        self._reclassify = reclassify

    def dispatch(self, record: ErrorRecord) -> None:
        action = record.recovery_action
        event = _ACTION_EVENTS.get(action)
        log_event(
            _logger,
            "recovery.dispatch",
            LogContext.for_record(record),
            level=logging.ERROR if action is RecoveryAction.PERMANENT_FAILURE else logging.INFO,
            action=action.value,
            emits=event,
        )
        if event is not None:
            self._bus.emit(event, record)
        if record.severity is ErrorSeverity.CRITICAL and record.category is ErrorCategory.PROTOCOL:
            self._bus.emit(Events.CRITICAL_PROTOCOL_ERROR, record)

    async def dispatch_authentication(self, record: ErrorRecord) -> bool:
        """Dispatch ``record`` and run the refresh handshake when it asks for one.

        Returns:
            ``True`` when the handshake succeeded, ``False`` when it failed or
            was not attempted.
        """
        self.dispatch(record)
        if record.recovery_action is not RecoveryAction.REFRESH_TOKEN:
            return False
        try:
            await self._refresher.refresh()
        except TokenRefreshError as exc:
            context = dict(record.context)
            context[REFRESH_ATTEMPT_CONTEXT_KEY] = True
            failed = self._reclassify(record.original_failure, context)
            log_event(
                _logger,
                "recovery.authentication_failed",
                LogContext.for_record(failed),
                level=logging.WARNING,
                reason=str(exc),
            )
            self._bus.emit(Events.AUTHENTICATION_FAILED, failed)
            return False
        log_event(_logger, "recovery.authentication_recovered", LogContext.for_record(record))
        self._bus.emit(Events.AUTHENTICATION_RECOVERED)
        return True


__all__ = ["RecoveryDispatcher", "Reclassifier"]
