"""
Event analyzers that consume combat events through subscriptions.
"""

from .dispatcher import (
    SELECTED_PLAYER,
    Analyzer,
    EventDispatcher,
    EventFilter,
    Events,
)
from .ability_usage import AbilityUsageAnalyzer

__all__ = [
    "SELECTED_PLAYER",
    "Analyzer",
    "EventDispatcher",
    "EventFilter",
    "Events",
    "AbilityUsageAnalyzer",
]
