"""
Event builders shared by the tests.
"""

from phaseparser.parser.events import BoundaryEvent, BoundaryKind, CombatEvent


def start(key, instance, timestamp):
    return BoundaryEvent(BoundaryKind.PHASE_START, key, instance, timestamp)


def end(key, instance, timestamp):
    return BoundaryEvent(BoundaryKind.PHASE_END, key, instance, timestamp)


def combat(timestamp, event_type, source=None, ability=None, amount=0, target=None):
    return CombatEvent(
        timestamp=timestamp,
        event_type=event_type,
        source_id=source,
        target_id=target,
        ability_id=ability,
        amount=amount,
    )
