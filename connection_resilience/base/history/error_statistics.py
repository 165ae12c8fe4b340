"""Error statistics snapshot dataclass.

Immutable snapshot of the error history, designed for diagnostics
serialization and logging.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class ErrorStatistics:
    """Point-in-time counts over the bounded error history.

    ``by_category`` and ``by_severity`` always contain every enum value
    (zero counts included). ``recent_errors`` counts records within the
    configured recent window (one hour by default).
    """

    total_errors: int
    by_category: Dict[str, int]
    by_severity: Dict[str, int]
    recent_errors: int
    generated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["generated_at"] = self.generated_at.isoformat()
        return data


__all__ = ["ErrorStatistics"]
