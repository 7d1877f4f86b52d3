"""
Cast and damage tallies for a single ability.
"""

from typing import Any, Dict, Optional

from phaseparser.parser.events import CombatEvent
from .dispatcher import Analyzer, EventDispatcher, Events, SELECTED_PLAYER


class AbilityUsageAnalyzer(Analyzer):
    """
    Tracks how often the selected player used an ability and how much damage
    it did.

    When ``required_buff_id`` is set, casts made while that buff was not
    active on the player count as bad casts.
    """

    def __init__(
        self,
        dispatcher: EventDispatcher,
        cast_ability_id: int,
        damage_ability_id: Optional[int] = None,
        required_buff_id: Optional[int] = None,
        active: bool = True,
    ):
        super().__init__(dispatcher, active=active)
        self.cast_ability_id = cast_ability_id
        self.damage_ability_id = damage_ability_id or cast_ability_id
        self.required_buff_id = required_buff_id

        self.casts = 0
        self.bad_casts = 0
        self.damage = 0
        self._buff_active = False

        self.add_event_listener(Events.cast.by(SELECTED_PLAYER).spell(self.cast_ability_id), self.on_cast)
        self.add_event_listener(Events.damage.by(SELECTED_PLAYER).spell(self.damage_ability_id), self.on_damage)
        if required_buff_id is not None:
            self.add_event_listener(Events.applybuff.spell(required_buff_id), self.on_buff_applied, scoped=False)
            self.add_event_listener(Events.removebuff.spell(required_buff_id), self.on_buff_removed, scoped=False)

    def on_damage(self, event: CombatEvent):
        self.damage += event.amount

    def on_cast(self, event: CombatEvent):
        self.casts += 1
        if self.required_buff_id is not None and not self._buff_active:
            self.bad_casts += 1

    def on_buff_applied(self, event: CombatEvent):
        if event.target_id == self.selected_player:
            self._buff_active = True

    def on_buff_removed(self, event: CombatEvent):
        if event.target_id == self.selected_player:
            self._buff_active = False

    @property
    def suggestion_thresholds(self) -> Dict[str, Any]:
        return {
            "actual": self.bad_casts,
            "is_greater_than": {
                "minor": 0,
                "average": 0,
                "major": 1,
            },
            "style": "number",
        }

    def suggestion_severity(self) -> Optional[str]:
        """Most severe threshold exceeded by the bad cast count, if any."""
        thresholds = self.suggestion_thresholds
        actual = thresholds["actual"]
        for severity in ("major", "average", "minor"):
            if actual > thresholds["is_greater_than"][severity]:
                return severity
        return None

    def summary(self) -> Dict[str, Any]:
        return {
            "cast_ability_id": self.cast_ability_id,
            "casts": self.casts,
            "bad_casts": self.bad_casts,
            "damage": self.damage,
            "severity": self.suggestion_severity(),
        }
