"""
Reader for JSON encounter reports.

A report holds the boss id, the fight window and the complete event list of
one pull, with phase boundary markers mixed in with regular combat events.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .events import BoundaryEvent, CombatEvent, EventFactory

logger = logging.getLogger(__name__)


@dataclass
class EncounterReport:
    """All events recorded for a single encounter attempt."""

    boss_id: Optional[int]
    start_time: int = 0
    end_time: int = 0
    boundary_events: List[BoundaryEvent] = field(default_factory=list)
    combat_events: List[CombatEvent] = field(default_factory=list)

    @property
    def duration(self) -> int:
        """Fight length in report time units."""
        return max(0, self.end_time - self.start_time)


def parse_encounter_report(data: Dict[str, Any]) -> EncounterReport:
    """
    Build an EncounterReport from a decoded report document.

    Args:
        data: Decoded JSON document

    Returns:
        EncounterReport with events sorted by timestamp
    """
    if not isinstance(data, dict):
        raise ValueError("Encounter report must be a JSON object")

    records = data.get("events") or []
    boundary_events: List[BoundaryEvent] = []
    combat_events: List[CombatEvent] = []

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(f"Event #{index} is not an object: {record!r}")
        try:
            event = EventFactory.create_event(record)
        except ValueError as e:
            raise ValueError(f"Event #{index}: {e}") from e

        if isinstance(event, BoundaryEvent):
            boundary_events.append(event)
        else:
            combat_events.append(event)

    boundary_events.sort(key=lambda e: e.timestamp)
    combat_events.sort(key=lambda e: e.timestamp)

    all_timestamps = [e.timestamp for e in boundary_events] + [e.timestamp for e in combat_events]
    start_time = data.get("start_time")
    end_time = data.get("end_time")
    if start_time is None:
        start_time = min(all_timestamps, default=0)
    if end_time is None:
        end_time = max(all_timestamps, default=start_time)

    boss_id = data.get("boss")
    report = EncounterReport(
        boss_id=int(boss_id) if boss_id is not None else None,
        start_time=int(start_time),
        end_time=int(end_time),
        boundary_events=boundary_events,
        combat_events=combat_events,
    )

    logger.debug(
        f"Parsed report for boss {report.boss_id}: "
        f"{len(boundary_events)} boundary events, {len(combat_events)} combat events"
    )
    return report


def read_encounter_report(file_path: Union[str, Path]) -> EncounterReport:
    """
    Read an encounter report from a JSON file.

    Args:
        file_path: Path to the report file

    Returns:
        Parsed EncounterReport
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Encounter report not found: {file_path}")

    logger.debug(f"Reading encounter report {file_path.name}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path.name}: {e}") from e

    return parse_encounter_report(data)
