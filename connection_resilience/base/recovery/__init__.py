"""Recovery execution: dispatch of recovery intents and the refresh handshake."""

from .permanent_failure import PermanentFailurePolicy
from .permanent_failure_report import PermanentFailure
from .recovery_dispatcher import RecoveryDispatcher
from .token_refresh import TokenRefreshCoordinator, TokenRefreshRequest

__all__ = [
    "PermanentFailure",
    "PermanentFailurePolicy",
    "RecoveryDispatcher",
    "TokenRefreshCoordinator",
    "TokenRefreshRequest",
]
