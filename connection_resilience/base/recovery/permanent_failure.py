"""Detects failure patterns that suggest a fault automatic recovery cannot fix.

Per-category rules ``(threshold, window_seconds)`` are evaluated against the
bounded history each time a record of that category is handled, e.g. three
authentication failures within a minute. A category fires at most once
until :meth:`PermanentFailurePolicy.reset` is called (the coordinator resets
it when the history is cleared).
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Mapping, Optional, Set, Tuple

from ..errors import ErrorCategory, ErrorRecord
from ..history import ErrorHistory
from .permanent_failure_report import PermanentFailure


class PermanentFailurePolicy:
    """Windowed count thresholds per category over an :class:`ErrorHistory`."""

    def __init__(self, history: ErrorHistory, rules: Mapping[str, Tuple[int, float]]) -> None:
        self._history = history
        self._rules = dict(rules)
        self._triggered: Set[ErrorCategory] = set()

    def evaluate(self, record: ErrorRecord, now: Optional[datetime] = None) -> Optional[PermanentFailure]:
        """Return a :class:`PermanentFailure` the first time ``record``'s category crosses its rule.

        Returns ``None`` when the category has no rule, is below its
        threshold, or has already fired since the last :meth:`reset`.
        """
        rule = self._rules.get(record.category.value)
        if rule is None or record.category in self._triggered:
            return None
        threshold, window_seconds = rule
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        window = self._history.recent(record.category, window_seconds, now)
        if len(window) < threshold:
            return None
        self._triggered.add(record.category)
        return PermanentFailure.from_records(
            record,
            window,
            timestamp=now,
            all_records=self._history,
        )

    def is_triggered(self, category: ErrorCategory) -> bool:
        return category in self._triggered

    def reset(self) -> None:
        self._triggered.clear()


__all__ = ["PermanentFailurePolicy"]
