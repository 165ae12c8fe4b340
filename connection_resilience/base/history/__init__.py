"""Bounded error history and statistics snapshot."""

from .error_history import ErrorHistory
from .error_statistics import ErrorStatistics

__all__ = ["ErrorHistory", "ErrorStatistics"]
