"""
Tests for event subscriptions and the ability usage analyzer.
"""

import pytest

from phaseparser.analyzer.ability_usage import AbilityUsageAnalyzer
from phaseparser.analyzer.dispatcher import (
    SELECTED_PLAYER,
    Analyzer,
    EventDispatcher,
    EventFilter,
    Events,
)
from tests.helpers import combat

PLAYER = 7
FEL_BARRAGE = 258925
FEL_BARRAGE_DAMAGE = 258926
METAMORPHOSIS = 162264


class TestEventFilter:
    """Test filter matching."""

    def test_event_type(self):
        assert Events.cast.matches(combat(0, "cast"))
        assert not Events.cast.matches(combat(0, "damage"))

    def test_chaining_returns_new_filter(self):
        base = Events.damage
        narrowed = base.by(PLAYER).spell(FEL_BARRAGE_DAMAGE)

        assert base.source is None and base.ability_id is None
        assert narrowed == EventFilter("damage", PLAYER, FEL_BARRAGE_DAMAGE)

    def test_selected_player_resolved(self):
        event_filter = Events.cast.by(SELECTED_PLAYER)

        assert event_filter.matches(combat(0, "cast", source=PLAYER), selected_player=PLAYER)
        assert not event_filter.matches(combat(0, "cast", source=9), selected_player=PLAYER)

    def test_spell(self):
        event_filter = Events.cast.spell(FEL_BARRAGE)

        assert event_filter.matches(combat(0, "cast", ability=FEL_BARRAGE))
        assert not event_filter.matches(combat(0, "cast", ability=1))


class TestEventDispatcher:
    """Test event delivery order and scoping."""

    def test_timestamp_order(self):
        dispatcher = EventDispatcher(selected_player=PLAYER)
        seen = []
        dispatcher.add_event_listener(Events.cast, lambda e: seen.append(e.timestamp))

        dispatcher.run([combat(t, "cast") for t in (300, 100, 200)])

        assert seen == [100, 200, 300]

    def test_each_event_delivered_once(self):
        dispatcher = EventDispatcher(selected_player=PLAYER)
        first, second = [], []
        dispatcher.add_event_listener(Events.cast, first.append)
        dispatcher.add_event_listener(Events.cast.by(SELECTED_PLAYER), second.append)
        events = [combat(10, "cast", source=PLAYER), combat(20, "cast", source=9), combat(30, "damage")]

        calls = dispatcher.run(events)

        assert [e.timestamp for e in first] == [10, 20]
        assert [e.timestamp for e in second] == [10]
        assert calls == 3
        assert dispatcher.events_dispatched == 3

    def test_windows(self):
        dispatcher = EventDispatcher()
        seen = []
        dispatcher.add_event_listener(Events.cast, lambda e: seen.append(e.timestamp))

        dispatcher.run([combat(t, "cast") for t in (5, 15, 25)], windows=[(10, 20)])

        assert seen == [15]

    def test_unscoped_listener_sees_every_event(self):
        dispatcher = EventDispatcher()
        scoped, unscoped = [], []
        dispatcher.add_event_listener(Events.cast, lambda e: scoped.append(e.timestamp))
        dispatcher.add_event_listener(Events.cast, lambda e: unscoped.append(e.timestamp), scoped=False)

        dispatcher.run([combat(t, "cast") for t in (5, 15, 25)], windows=[(10, 20)])

        assert scoped == [15]
        assert unscoped == [5, 15, 25]
        assert dispatcher.events_dispatched == 1

    def test_inactive_analyzer_registers_nothing(self):
        dispatcher = EventDispatcher()
        analyzer = Analyzer(dispatcher, active=False)

        analyzer.add_event_listener(Events.cast, lambda e: None)

        assert dispatcher.listener_count == 0


class TestAbilityUsageAnalyzer:
    """Test cast, damage and bad cast tallies."""

    @pytest.fixture
    def events(self):
        return [
            combat(1000, "applybuff", source=PLAYER, target=PLAYER, ability=METAMORPHOSIS),
            combat(2000, "cast", source=PLAYER, ability=FEL_BARRAGE),
            combat(2100, "damage", source=PLAYER, ability=FEL_BARRAGE_DAMAGE, amount=5000),
            combat(5000, "removebuff", source=PLAYER, target=PLAYER, ability=METAMORPHOSIS),
            combat(6000, "cast", source=PLAYER, ability=FEL_BARRAGE),
            combat(6100, "damage", source=PLAYER, ability=FEL_BARRAGE_DAMAGE, amount=3000),
            combat(6200, "cast", source=9, ability=FEL_BARRAGE),
            combat(6300, "damage", source=9, ability=FEL_BARRAGE_DAMAGE, amount=9999),
        ]

    def _run(self, events, windows=None, **kwargs):
        dispatcher = EventDispatcher(selected_player=PLAYER)
        analyzer = AbilityUsageAnalyzer(
            dispatcher,
            cast_ability_id=FEL_BARRAGE,
            damage_ability_id=FEL_BARRAGE_DAMAGE,
            **kwargs,
        )
        dispatcher.run(events, windows=windows)
        return analyzer

    def test_casts_and_damage(self, events):
        analyzer = self._run(events)

        assert analyzer.casts == 2
        assert analyzer.damage == 8000
        assert analyzer.bad_casts == 0
        assert analyzer.suggestion_severity() is None

    def test_bad_casts_without_buff(self, events):
        analyzer = self._run(events, required_buff_id=METAMORPHOSIS)

        assert analyzer.bad_casts == 1
        assert analyzer.suggestion_severity() == "average"

    def test_major_severity(self, events):
        analyzer = self._run(list(reversed(events)), required_buff_id=METAMORPHOSIS)
        assert analyzer.bad_casts == 1

        analyzer.bad_casts = 2
        assert analyzer.suggestion_severity() == "major"

    def test_buff_on_other_player_ignored(self):
        events = [
            combat(1000, "applybuff", source=9, target=9, ability=METAMORPHOSIS),
            combat(2000, "cast", source=PLAYER, ability=FEL_BARRAGE),
        ]

        analyzer = self._run(events, required_buff_id=METAMORPHOSIS)

        assert analyzer.bad_casts == 1

    def test_suggestion_thresholds(self, events):
        analyzer = self._run(events, required_buff_id=METAMORPHOSIS)

        assert analyzer.suggestion_thresholds == {
            "actual": 1,
            "is_greater_than": {"minor": 0, "average": 0, "major": 1},
            "style": "number",
        }

    def test_inactive(self, events):
        analyzer = self._run(events, active=False)

        assert analyzer.casts == 0
        assert analyzer.summary()["damage"] == 0

    def test_damage_defaults_to_cast_ability(self):
        dispatcher = EventDispatcher(selected_player=PLAYER)
        analyzer = AbilityUsageAnalyzer(dispatcher, cast_ability_id=FEL_BARRAGE)

        dispatcher.run([combat(10, "damage", source=PLAYER, ability=FEL_BARRAGE, amount=42)])

        assert analyzer.damage == 42

    def test_buff_applied_before_window(self):
        """Test that buff state carries into a window that starts after the buff was applied."""
        events = [
            combat(15000, "applybuff", source=PLAYER, target=PLAYER, ability=METAMORPHOSIS),
            combat(31000, "cast", source=PLAYER, ability=FEL_BARRAGE),
        ]

        analyzer = self._run(events, windows=[(30000, 60000)], required_buff_id=METAMORPHOSIS)

        assert analyzer.casts == 1
        assert analyzer.bad_casts == 0

    def test_buff_removed_before_window(self):
        events = [
            combat(15000, "applybuff", source=PLAYER, target=PLAYER, ability=METAMORPHOSIS),
            combat(20000, "removebuff", source=PLAYER, target=PLAYER, ability=METAMORPHOSIS),
            combat(31000, "cast", source=PLAYER, ability=FEL_BARRAGE),
            combat(12000, "cast", source=PLAYER, ability=FEL_BARRAGE),
        ]

        analyzer = self._run(events, windows=[(30000, 60000)], required_buff_id=METAMORPHOSIS)

        assert analyzer.casts == 1
        assert analyzer.bad_casts == 1
