"""
Boss phase catalog.

This module contains the known phases for raid bosses, keyed by the encounter
id used in combat logs. Phase keys match the keys carried by phase boundary
events; anything else on a phase (display name, difficulties, ordering) is
display metadata that analysis code passes through untouched.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional


class Difficulty(IntEnum):
    """Raid difficulty IDs as used in combat logs."""

    RAID_NORMAL = 14
    RAID_HEROIC = 15
    RAID_MYTHIC = 16
    RAID_LFR = 17


ALL_DIFFICULTIES: List[int] = [
    Difficulty.RAID_LFR,
    Difficulty.RAID_NORMAL,
    Difficulty.RAID_HEROIC,
    Difficulty.RAID_MYTHIC,
]


@dataclass(frozen=True)
class PhaseDescriptor:
    """A named phase of a boss encounter."""

    key: str
    name: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Boss:
    """A raid boss and the phases its encounter can go through."""

    boss_id: int
    name: str
    zone: str
    phases: Dict[str, PhaseDescriptor] = field(default_factory=dict)


def _phase(key: str, name: str, difficulties: Optional[List[int]] = None, **extra: Any) -> PhaseDescriptor:
    metadata: Dict[str, Any] = {"difficulties": [int(d) for d in (difficulties or ALL_DIFFICULTIES)]}
    metadata.update(extra)
    return PhaseDescriptor(key=key, name=name, metadata=metadata)


def _boss(boss_id: int, name: str, zone: str, *phases: PhaseDescriptor) -> Boss:
    return Boss(boss_id=boss_id, name=name, zone=zone, phases={p.key: p for p in phases})


# Known bosses with phase markers. Extendable via register_boss() or a
# phase_catalog.yaml file (see catalog.loader).
BOSSES: Dict[int, Boss] = {
    boss.boss_id: boss
    for boss in (
        _boss(
            2407,
            "Sire Denathrius",
            "Castle Nathria",
            _phase("P1", "Stage One: Sinners Be Cleansed"),
            _phase("I1", "Intermission: March of the Penitent"),
            _phase("P2", "Stage Two: The Crimson Chorus"),
            _phase("P3", "Stage Three: Indignation"),
        ),
        _boss(
            2435,
            "Sylvanas Windrunner",
            "Sanctum of Domination",
            _phase("P1", "Stage One: A Cycle of Hatred"),
            _phase("I1", "Intermission: A Monument to our Suffering"),
            _phase("P2", "Stage Two: The Banshee Queen"),
            _phase("P3", "Stage Three: The Freedom of Choice"),
        ),
        _boss(
            2537,
            "The Jailer",
            "Sepulcher of the First Ones",
            _phase("P1", "Stage One: Origin of Domination"),
            _phase("I1", "Intermission: Dominating Presence", [Difficulty.RAID_HEROIC, Difficulty.RAID_MYTHIC]),
            _phase("P2", "Stage Two: Unholy Attunement"),
            _phase("I2", "Intermission: Relentless Domination"),
            _phase("P3", "Stage Three: The Unmaking"),
            _phase("P4", "Stage Four: Hidden Power", [Difficulty.RAID_MYTHIC]),
        ),
    )
}


def find_by_boss_id(boss_id: Optional[int]) -> Optional[Boss]:
    """Look up a boss by encounter id."""
    if boss_id is None:
        return None
    return BOSSES.get(int(boss_id))


def get_boss_phases(boss_id: Optional[int]) -> Dict[str, PhaseDescriptor]:
    """
    Get the known phases for a boss.

    Returns an empty dict for unknown bosses so that segmentation simply
    yields no phases.
    """
    boss = find_by_boss_id(boss_id)
    return dict(boss.phases) if boss else {}


def register_boss(boss: Boss) -> None:
    """Add or replace a boss in the catalog."""
    BOSSES[boss.boss_id] = boss
