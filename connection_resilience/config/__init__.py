"""Configuration layer for the resilience coordinator.

Merge order (later wins):
    1. Built-in defaults (``connection_resilience.base.constants`` and
       ``config.defaults``)
    2. ``RESILIENCE_*`` environment variables
    3. Explicit ``ResilienceSettings`` passed to the coordinator

Public API
----------
* ResilienceSettings
* get_resilience_settings() -> ResilienceSettings
"""
from __future__ import annotations

from .settings import ResilienceSettings, get_resilience_settings

__all__ = ["ResilienceSettings", "get_resilience_settings"]
