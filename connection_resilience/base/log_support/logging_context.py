"""Structured logging context object for resilience events.

This module defines :class:`LogContext`, a dataclass used to carry common
fields for resilience logging events (connection id, failure category and
code, plus extra metadata). It offers a ``to_dict`` helper that merges the
``extra`` mapping and prunes ``None`` values for clean structured output.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for resilience logging events."""

    connection_id: Optional[str] = None
    category: Optional[str] = None
    code: Optional[str] = None
    severity: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_record(cls, record: Any) -> "LogContext":
        """Build a context from an ``ErrorRecord`` (connection id read from its context)."""
        connection_id = record.context.get("connection_id") or record.context.get("connectionId")
        return cls(
            connection_id=str(connection_id) if connection_id is not None else None,
            category=record.category.value,
            code=record.code,
            severity=record.severity.value,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
