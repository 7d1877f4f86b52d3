"""
Event model and readers for encounter reports.
"""

from .events import BoundaryKind, BoundaryEvent, CombatEvent, EventFactory
from .reader import EncounterReport, read_encounter_report

__all__ = [
    "BoundaryKind",
    "BoundaryEvent",
    "CombatEvent",
    "EventFactory",
    "EncounterReport",
    "read_encounter_report",
]
