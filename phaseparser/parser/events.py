"""
Event classes and factory for encounter report events.
"""

from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional, Union
from enum import Enum


class BoundaryKind(Enum):
    """Phase boundary marker types."""

    PHASE_START = "phasestart"
    PHASE_END = "phaseend"


class EventType(Enum):
    """Enumeration of known combat event types."""

    CAST = "cast"
    BEGIN_CAST = "begincast"
    DAMAGE = "damage"
    HEAL = "heal"
    APPLY_BUFF = "applybuff"
    REMOVE_BUFF = "removebuff"
    APPLY_DEBUFF = "applydebuff"
    REMOVE_DEBUFF = "removedebuff"
    DEATH = "death"


@dataclass(frozen=True)
class BoundaryEvent:
    """
    One observed phase transition.

    The instance id distinguishes repeated occurrences of the same phase
    (e.g. the second intermission) and is only ever compared for equality.
    """

    kind: BoundaryKind
    phase_key: str
    instance_id: Hashable
    timestamp: int

    @property
    def is_start(self) -> bool:
        return self.kind is BoundaryKind.PHASE_START

    @property
    def is_end(self) -> bool:
        return self.kind is BoundaryKind.PHASE_END


@dataclass(frozen=True)
class CombatEvent:
    """A regular combat event (cast, damage, aura change)."""

    timestamp: int
    event_type: str
    source_id: Optional[Hashable] = None
    target_id: Optional[Hashable] = None
    ability_id: Optional[int] = None
    amount: int = 0

    def is_type(self, event_type: Union[str, EventType]) -> bool:
        """Check the event type, accepting either the enum or its raw value."""
        if isinstance(event_type, EventType):
            event_type = event_type.value
        return self.event_type == event_type


ReportEvent = Union[BoundaryEvent, CombatEvent]


class EventFactory:
    """Factory for creating event objects from report records."""

    _boundary_types: Dict[str, BoundaryKind] = {kind.value: kind for kind in BoundaryKind}

    @staticmethod
    def _safe_int(value: Any, default: int = 0) -> int:
        """Safely convert a value to int, returning default on failure."""
        if value is None:
            return default
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    @classmethod
    def create_event(cls, record: Dict[str, Any]) -> ReportEvent:
        """
        Create an event object from a report record.

        Args:
            record: Decoded JSON record with at least ``type`` and ``timestamp``

        Returns:
            BoundaryEvent for phase markers, CombatEvent otherwise

        Raises:
            ValueError: If the record is missing required fields
        """
        event_type = record.get("type")
        if not event_type:
            raise ValueError(f"Event record has no type: {record!r}")

        timestamp = record.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise ValueError(f"Event record has invalid timestamp: {record!r}")
        if timestamp < 0:
            raise ValueError(f"Event record has negative timestamp: {record!r}")

        kind = cls._boundary_types.get(event_type)
        if kind is not None:
            return cls._create_boundary_event(kind, timestamp, record)

        return CombatEvent(
            timestamp=timestamp,
            event_type=event_type,
            source_id=record.get("sourceID"),
            target_id=record.get("targetID"),
            ability_id=record.get("abilityGameID"),
            amount=cls._safe_int(record.get("amount")),
        )

    @staticmethod
    def _create_boundary_event(
        kind: BoundaryKind, timestamp: int, record: Dict[str, Any]
    ) -> BoundaryEvent:
        phase = record.get("phase") or {}
        if not isinstance(phase, dict):
            raise ValueError(f"Phase boundary record has invalid phase: {record!r}")
        phase_key = phase.get("key")
        if not phase_key:
            raise ValueError(f"Phase boundary record has no phase key: {record!r}")

        # Phases that occur once are commonly logged without an instance
        instance_id = phase.get("instance", 0)
        if isinstance(instance_id, (list, dict)):
            raise ValueError(f"Phase boundary record has invalid instance: {record!r}")

        return BoundaryEvent(
            kind=kind,
            phase_key=str(phase_key),
            instance_id=instance_id,
            timestamp=timestamp,
        )
