"""
Phase segmentation for boss encounters.

Turns the phase boundary markers of one pull into start/end timestamps per
phase. Only phases known to the boss catalog and having at least one
instance with both a start and an end marker are reported.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from phaseparser.catalog.bosses import PhaseDescriptor
from phaseparser.parser.events import BoundaryEvent


@dataclass
class IntervalSet:
    """
    Start and end timestamps of one phase.

    ``starts`` and ``ends`` are sorted independently and are not guaranteed
    to have the same length; use ``scoping.phase_windows`` to pair them.
    """

    key: str
    name: str
    starts: List[int] = field(default_factory=list)
    ends: List[int] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def first_start(self) -> Optional[int]:
        return self.starts[0] if self.starts else None

    @property
    def last_end(self) -> Optional[int]:
        return self.ends[-1] if self.ends else None

    def to_dict(self) -> Dict[str, Any]:
        """Catalog metadata with the phase timestamps added."""
        return {
            **self.metadata,
            "key": self.key,
            "name": self.name,
            "start": list(self.starts),
            "end": list(self.ends),
        }


SegmentationResult = Dict[str, IntervalSet]


def segment(
    events: Optional[Iterable[BoundaryEvent]],
    catalog_phases: Mapping[str, PhaseDescriptor],
) -> SegmentationResult:
    """
    Build phase intervals from boundary events.

    Args:
        events: Phase boundary events of one encounter attempt, in any order
        catalog_phases: Known phases for the boss, keyed by phase key

    Returns:
        Mapping of phase key to IntervalSet, in catalog order
    """
    if not events:
        return {}
    events = list(events)

    started = {e.phase_key for e in events if e.is_start}
    ended = {e.phase_key for e in events if e.is_end}
    # only phases that have both a start and an end event
    candidates = started & ended

    result: SegmentationResult = {}
    for key, descriptor in catalog_phases.items():
        if key not in candidates:
            continue

        start_events = [e for e in events if e.is_start and e.phase_key == key]
        end_events = [e for e in events if e.is_end and e.phase_key == key]
        start_instances = {e.instance_id for e in start_events}
        end_instances = {e.instance_id for e in end_events}

        # keep boundaries whose instance has a marker of the opposite kind
        starts = sorted(e.timestamp for e in start_events if e.instance_id in end_instances)
        ends = sorted(e.timestamp for e in end_events if e.instance_id in start_instances)
        if not starts or not ends:
            continue

        result[key] = IntervalSet(
            key=key,
            name=descriptor.name,
            starts=starts,
            ends=ends,
            metadata=dict(descriptor.metadata),
        )

    return result
