"""
Helpers for scoping analysis to a selected phase.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from .phases import IntervalSet, SegmentationResult

logger = logging.getLogger(__name__)

SELECTION_ALL_PHASES = "ALL"
SELECTION_CUSTOM_PHASE = "CUSTOM"

Window = Tuple[int, int]
T = TypeVar("T")


def phase_windows(interval_set: IntervalSet) -> List[Window]:
    """
    Pair the starts and ends of a phase into time windows.

    Starts and ends are paired by position. When the counts differ the extra
    boundaries are dropped.
    """
    if len(interval_set.starts) != len(interval_set.ends):
        logger.debug(
            f"Phase {interval_set.key} has {len(interval_set.starts)} starts "
            f"and {len(interval_set.ends)} ends, pairing the first "
            f"{min(len(interval_set.starts), len(interval_set.ends))}"
        )
    return list(zip(interval_set.starts, interval_set.ends))


def resolve_selection(
    result: Optional[SegmentationResult],
    selection: str,
    fight_start: int,
    fight_end: int,
    custom: Optional[Window] = None,
) -> List[Window]:
    """
    Get the time windows covered by a phase selection.

    Args:
        result: Segmentation result for the fight
        selection: SELECTION_ALL_PHASES, SELECTION_CUSTOM_PHASE or a phase key
        fight_start: Fight start timestamp
        fight_end: Fight end timestamp
        custom: Window to use for SELECTION_CUSTOM_PHASE

    Returns:
        List of (start, end) windows, empty for unknown phases
    """
    if selection == SELECTION_ALL_PHASES:
        return [(fight_start, fight_end)]

    if selection == SELECTION_CUSTOM_PHASE:
        if custom is None:
            raise ValueError("Custom phase selection requires a time window")
        start = max(fight_start, custom[0])
        end = min(fight_end, custom[1])
        return [(start, end)] if start <= end else []

    if not result or selection not in result:
        return []
    return phase_windows(result[selection])


def in_windows(timestamp: int, windows: Sequence[Window]) -> bool:
    """Check if a timestamp falls inside any of the windows (inclusive)."""
    return any(start <= timestamp <= end for start, end in windows)


def events_in_windows(events: Iterable[T], windows: Sequence[Window]) -> List[T]:
    """Events whose timestamp falls inside any of the windows (inclusive)."""
    return [event for event in events if in_windows(event.timestamp, windows)]
