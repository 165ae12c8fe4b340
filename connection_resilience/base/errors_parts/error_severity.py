"""
Totally ordered severity levels for classified failures.

``ErrorSeverity`` members compare by rank (``low < medium < high <
critical``) rather than by their string values, so escalation logic can use
plain comparison operators.
"""
from __future__ import annotations

from enum import Enum


class ErrorSeverity(str, Enum):
    """Severity assigned to an :class:`ErrorRecord`."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RANKS[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, ErrorSeverity):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {"low": 0, "medium": 1, "high": 2, "critical": 3}


__all__ = ["ErrorSeverity"]
