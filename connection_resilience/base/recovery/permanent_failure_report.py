"""Payload published when a category is judged permanently failing.

Built by :class:`PermanentFailurePolicy` from the records that crossed the
category rule. Carries the failure reason, a message suitable for end users,
a one-line technical summary and the ids of the recovery options the UI
layer may offer.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Tuple

from ..errors import ErrorCategory, ErrorRecord, PermanentFailureReason

_REASONS: Mapping[ErrorCategory, PermanentFailureReason] = {
    ErrorCategory.AUTHENTICATION: PermanentFailureReason.AUTHENTICATION_FAILED,
    ErrorCategory.SERVER: PermanentFailureReason.SERVER_PERMANENTLY_UNAVAILABLE,
    ErrorCategory.NETWORK: PermanentFailureReason.NETWORK_PERMANENTLY_UNAVAILABLE,
    ErrorCategory.TIMEOUT: PermanentFailureReason.NETWORK_PERMANENTLY_UNAVAILABLE,
}

_USER_MESSAGES: Mapping[PermanentFailureReason, str] = {
    PermanentFailureReason.MAX_RECONNECTION_ATTEMPTS: (
        "Unable to establish a stable connection after multiple attempts. "
        "The service may be temporarily unavailable."
    ),
    PermanentFailureReason.AUTHENTICATION_FAILED: (
        "Authentication failed. Please check your login credentials and try signing in again."
    ),
    PermanentFailureReason.SERVER_PERMANENTLY_UNAVAILABLE: (
        "The service is currently unavailable. "
        "Please try again later or contact support if the issue persists."
    ),
    PermanentFailureReason.NETWORK_PERMANENTLY_UNAVAILABLE: (
        "Network connection is unavailable. Please check your internet connection and try again."
    ),
}

_RECOVERY_OPTIONS: Mapping[PermanentFailureReason, Tuple[str, ...]] = {
    PermanentFailureReason.MAX_RECONNECTION_ATTEMPTS: ("retry_connection", "enable_fallback"),
    PermanentFailureReason.AUTHENTICATION_FAILED: ("sign_in_again",),
    PermanentFailureReason.SERVER_PERMANENTLY_UNAVAILABLE: ("check_status", "enable_fallback"),
    PermanentFailureReason.NETWORK_PERMANENTLY_UNAVAILABLE: ("check_network", "work_offline"),
}


def reason_for(category: ErrorCategory) -> PermanentFailureReason:
    return _REASONS.get(category, PermanentFailureReason.MAX_RECONNECTION_ATTEMPTS)


@dataclass(frozen=True)
class PermanentFailure:
    """Immutable description of a category that automatic recovery gave up on.

    Attributes:
        reason: Why recovery was abandoned.
        category: Category whose rule fired.
        timestamp: Evaluation instant.
        attempt_count: Number of records inside the rule window.
        last_error: The record that crossed the threshold.
        error_history: Records inside the rule window, oldest first.
        user_message: Message suitable for end users.
        technical_details: ``" | "``-joined diagnostic summary.
        recovery_options: Ids of the options the UI may offer.
    """

    reason: PermanentFailureReason
    category: ErrorCategory
    timestamp: datetime
    attempt_count: int
    last_error: ErrorRecord
    error_history: Tuple[ErrorRecord, ...]
    user_message: str
    technical_details: str
    recovery_options: Tuple[str, ...]

    @classmethod
    def from_records(
        cls,
        last_error: ErrorRecord,
        window_records: Iterable[ErrorRecord],
        *,
        timestamp: datetime,
        all_records: Iterable[ErrorRecord] = (),
    ) -> "PermanentFailure":
        """Build the payload for ``last_error``'s category.

        ``all_records`` (the whole history) only feeds the per-category
        counts of ``technical_details``.
        """
        records = tuple(window_records)
        reason = reason_for(last_error.category)
        details = [
            f"Reason: {reason.value}",
            f"Attempts: {len(records)}",
            f"Last Error: {last_error.code} - {last_error.message}",
            f"Error Category: {last_error.category.value}",
        ]
        counts = Counter(r.category.value for r in all_records)
        if counts:
            details.append("Error History: " + ", ".join(f"{c}:{n}" for c, n in counts.items()))
        return cls(
            reason=reason,
            category=last_error.category,
            timestamp=timestamp,
            attempt_count=len(records),
            last_error=last_error,
            error_history=records,
            user_message=_USER_MESSAGES[reason],
            technical_details=" | ".join(details),
            recovery_options=_RECOVERY_OPTIONS[reason],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reason": self.reason.value,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "attempt_count": self.attempt_count,
            "last_error": self.last_error.to_dict(),
            "error_history": [r.to_dict() for r in self.error_history],
            "user_message": self.user_message,
            "technical_details": self.technical_details,
            "recovery_options": list(self.recovery_options),
        }


__all__ = ["PermanentFailure", "reason_for"]
