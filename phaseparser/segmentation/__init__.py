"""
Segmentation module for deriving boss phase intervals.
"""

from .phases import IntervalSet, SegmentationResult, segment
from .host import SegmentationHost
from .scoping import (
    SELECTION_ALL_PHASES,
    SELECTION_CUSTOM_PHASE,
    phase_windows,
    resolve_selection,
    in_windows,
    events_in_windows,
)

__all__ = [
    "IntervalSet",
    "SegmentationResult",
    "segment",
    "SegmentationHost",
    "SELECTION_ALL_PHASES",
    "SELECTION_CUSTOM_PHASE",
    "phase_windows",
    "resolve_selection",
    "in_windows",
    "events_in_windows",
]
