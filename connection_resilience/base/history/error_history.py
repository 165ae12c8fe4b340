"""Capacity-bounded, insertion-ordered log of classified failures.

``ErrorHistory`` is a FIFO ring buffer over ``collections.deque(maxlen=N)``:
appending beyond capacity evicts the oldest record, regardless of category
or how often a record was read. Window queries are recomputed on each call
from the stored timestamps; no timers or derived state are kept.

The coordinator runs on a single-threaded event loop, so no locking is
applied.
"""
from __future__ import annotations

from collections import deque
from datetime import datetime, timedelta, timezone
from typing import Deque, Iterator, List, Optional, Tuple

from ..constants import (
    DEFAULT_MAX_HISTORY_SIZE,
    DEFAULT_PERSISTENT_THRESHOLD,
    DEFAULT_PERSISTENT_WINDOW_MS,
    DEFAULT_RECENT_WINDOW_SECONDS,
)
from ..errors import ErrorCategory, ErrorRecord, ErrorSeverity
from .error_statistics import ErrorStatistics


def _now(now: Optional[datetime] = None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    return now if now.tzinfo is not None else now.replace(tzinfo=timezone.utc)


class ErrorHistory:
    """Bounded FIFO history of :class:`ErrorRecord` objects.

    Args:
        max_size: Capacity; the oldest record is evicted beyond it.
        persistent_threshold: ``is_persistent_issue`` fires when the windowed
            count is strictly greater than this value.
        recent_window_seconds: Window of the ``recent_errors`` statistic.

    Raises:
        ValueError: If ``max_size`` is not positive.
    """

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_HISTORY_SIZE,
        *,
        persistent_threshold: int = DEFAULT_PERSISTENT_THRESHOLD,
        recent_window_seconds: float = DEFAULT_RECENT_WINDOW_SECONDS,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._records: Deque[ErrorRecord] = deque(maxlen=max_size)
        self._persistent_threshold = persistent_threshold
        self._recent_window = timedelta(seconds=recent_window_seconds)

    @property
    def max_size(self) -> int:
        return self._records.maxlen or 0

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def all(self) -> Tuple[ErrorRecord, ...]:
        """Return the stored records, oldest first (a snapshot copy)."""
        return tuple(self._records)

    def clear(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ErrorRecord]:
        return iter(self.all())

    def recent(
        self,
        category: ErrorCategory,
        window_seconds: float,
        now: Optional[datetime] = None,
    ) -> List[ErrorRecord]:
        """Return records of ``category`` with timestamps in ``[now - window, now]``."""
        now = _now(now)
        start = now - timedelta(seconds=window_seconds)
        return [
            r for r in self._records
            if r.category is category and start <= r.timestamp <= now
        ]

    def is_persistent_issue(
        self,
        category: ErrorCategory,
        window_ms: int = DEFAULT_PERSISTENT_WINDOW_MS,
        now: Optional[datetime] = None,
    ) -> bool:
        """Whether ``category`` failed more than the threshold within the window."""
        return len(self.recent(category, window_ms / 1000.0, now)) > self._persistent_threshold

    def statistics(self, now: Optional[datetime] = None) -> ErrorStatistics:
        now = _now(now)
        by_category = {c.value: 0 for c in ErrorCategory}
        by_severity = {s.value: 0 for s in ErrorSeverity}
        recent = 0
        start = now - self._recent_window
        for r in self._records:
            by_category[r.category.value] += 1
            by_severity[r.severity.value] += 1
            if r.timestamp >= start:
                recent += 1
        return ErrorStatistics(
            total_errors=len(self._records),
            by_category=by_category,
            by_severity=by_severity,
            recent_errors=recent,
            generated_at=now,
        )


__all__ = ["ErrorHistory"]
