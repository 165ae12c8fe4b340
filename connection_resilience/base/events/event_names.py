"""Event names published on the resilience event bus.

Names are camelCase strings kept stable for collaborators (connection
manager, credential provider, notification layer) that subscribe by name.
"""
from __future__ import annotations

from typing import Dict

from ..errors import ErrorCategory


class Events:
    """Namespace of event name constants."""

    # category events (payload: ErrorRecord)
    CONNECTION_ERROR = "connectionError"
    AUTHENTICATION_ERROR = "authenticationError"
    PROTOCOL_ERROR = "protocolError"
    CRITICAL_PROTOCOL_ERROR = "criticalProtocolError"
    NETWORK_ERROR = "networkError"
    SERVER_ERROR = "serverError"
    TIMEOUT_ERROR = "timeoutError"
    UNKNOWN_ERROR = "unknownError"

    # recovery intents (payload: ErrorRecord)
    REQUEST_RECONNECTION = "requestReconnection"
    REQUEST_TOKEN_REFRESH = "requestTokenRefresh"
    REQUEST_FALLBACK_MODE = "requestFallbackMode"
    REQUEST_USER_NOTIFICATION = "requestUserNotification"
    PERMANENT_FAILURE = "permanentFailure"
    # permanent failure policy (payload: PermanentFailure; stopReconnection has none)
    PERSISTENT_FAILURE_DETECTED = "persistentFailureDetected"
    STOP_RECONNECTION = "stopReconnection"

    # credential refresh handshake
    TOKEN_REFRESH_REQUESTED = "tokenRefreshRequested"
    AUTHENTICATION_RECOVERED = "authenticationRecovered"
    AUTHENTICATION_FAILED = "authenticationFailed"


CATEGORY_EVENTS: Dict[ErrorCategory, str] = {
    ErrorCategory.CONNECTION: Events.CONNECTION_ERROR,
    ErrorCategory.AUTHENTICATION: Events.AUTHENTICATION_ERROR,
    ErrorCategory.PROTOCOL: Events.PROTOCOL_ERROR,
    ErrorCategory.NETWORK: Events.NETWORK_ERROR,
    ErrorCategory.SERVER: Events.SERVER_ERROR,
    ErrorCategory.TIMEOUT: Events.TIMEOUT_ERROR,
    ErrorCategory.UNKNOWN: Events.UNKNOWN_ERROR,
}


__all__ = ["Events", "CATEGORY_EVENTS"]
