"""
Event subscription for per-ability analyzers.

Analyzers register interest in events matching a filter (event type, source,
ability) and receive each matching event once, in timestamp order.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Hashable, Iterable, List, Optional, Sequence, Tuple

from phaseparser.parser.events import CombatEvent, EventType
from phaseparser.segmentation.scoping import Window, in_windows

logger = logging.getLogger(__name__)


class _SelectedPlayer:
    """Placeholder for the player being analyzed, resolved at dispatch time."""

    def __repr__(self) -> str:
        return "SELECTED_PLAYER"


SELECTED_PLAYER = _SelectedPlayer()

EventHandler = Callable[[CombatEvent], Any]


@dataclass(frozen=True)
class EventFilter:
    """Predicate over combat events."""

    event_type: str
    source: Optional[Hashable] = None
    ability_id: Optional[int] = None

    def by(self, source: Hashable) -> "EventFilter":
        """Restrict to events caused by a source (or SELECTED_PLAYER)."""
        return replace(self, source=source)

    def spell(self, ability_id: int) -> "EventFilter":
        """Restrict to events of one ability."""
        return replace(self, ability_id=ability_id)

    def matches(self, event: CombatEvent, selected_player: Optional[Hashable] = None) -> bool:
        if event.event_type != self.event_type:
            return False
        if self.source is not None:
            source = selected_player if self.source is SELECTED_PLAYER else self.source
            if event.source_id != source:
                return False
        if self.ability_id is not None and event.ability_id != self.ability_id:
            return False
        return True


class Events:
    """Base filters for the common event types."""

    cast = EventFilter(EventType.CAST.value)
    damage = EventFilter(EventType.DAMAGE.value)
    heal = EventFilter(EventType.HEAL.value)
    applybuff = EventFilter(EventType.APPLY_BUFF.value)
    removebuff = EventFilter(EventType.REMOVE_BUFF.value)


class EventDispatcher:
    """
    Delivers combat events to registered listeners.

    Listeners are called in registration order for each event; events are
    delivered in timestamp order (stable for equal timestamps).
    """

    def __init__(self, selected_player: Optional[Hashable] = None):
        """
        Initialize dispatcher.

        Args:
            selected_player: Source id that SELECTED_PLAYER filters resolve to
        """
        self.selected_player = selected_player
        self._listeners: List[Tuple[EventFilter, EventHandler, bool]] = []
        self.events_dispatched = 0

    def add_event_listener(self, event_filter: EventFilter, handler: EventHandler, scoped: bool = True) -> None:
        """
        Register a handler for events matching a filter.

        Args:
            event_filter: Events the handler is interested in
            handler: Called once per matching event
            scoped: If False the handler also receives events outside the
                windows passed to run(), e.g. to track buff state across phases
        """
        self._listeners.append((event_filter, handler, scoped))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def run(self, events: Iterable[CombatEvent], windows: Optional[Sequence[Window]] = None) -> int:
        """
        Dispatch a complete batch of events.

        Args:
            events: Combat events of the encounter, in any order
            windows: Only dispatch events inside these windows to scoped
                listeners (phase scoping)

        Returns:
            Number of handler invocations
        """
        ordered = sorted(events, key=lambda e: e.timestamp)

        calls = 0
        in_scope_count = 0
        for event in ordered:
            in_scope = windows is None or in_windows(event.timestamp, windows)
            if in_scope:
                in_scope_count += 1
            for event_filter, handler, scoped in self._listeners:
                if scoped and not in_scope:
                    continue
                if event_filter.matches(event, self.selected_player):
                    handler(event)
                    calls += 1

        self.events_dispatched += in_scope_count
        logger.debug(f"Dispatched {in_scope_count} events to {len(self._listeners)} listeners ({calls} calls)")
        return calls


class Analyzer:
    """
    Base class for event analyzers.

    Subclasses register listeners in ``__init__`` when active; all
    accumulated state lives on the analyzer instance.
    """

    def __init__(self, dispatcher: EventDispatcher, active: bool = True):
        self.dispatcher = dispatcher
        self.active = active

    @property
    def selected_player(self) -> Optional[Hashable]:
        return self.dispatcher.selected_player

    def add_event_listener(self, event_filter: EventFilter, handler: EventHandler, scoped: bool = True) -> None:
        if not self.active:
            return
        self.dispatcher.add_event_listener(event_filter, handler, scoped=scoped)
