"""Random event catalog.

Six environmental events that may fire at the start of a turn. Symmetric
events hit both combatants; one-sided events hit a side chosen by coin flip
and announce who was affected.

``probability`` is carried as descriptive catalog data. The engine first rolls
the global event chance and then draws an event uniformly, so catalog order
is part of the reproducible draw.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from ...core.data import CombatState, EventScope

EventEffect = Callable[[CombatState], None]


@dataclass(frozen=True)
class RandomEvent:
    """One catalog entry.

    ``apply`` mutates a single combat state; the engine calls it once per
    affected side. ``announcement`` is formatted with the affected fighter's
    name for one-sided events.
    """
    name: str
    effect: str
    probability: float
    scope: EventScope
    apply: EventEffect
    announcement: Optional[str] = None


def _lose_hp(amount: int) -> EventEffect:
    def effect(fighter: CombatState) -> None:
        fighter.current_hp -= amount
    return effect


def _gain_attack(fighter: CombatState) -> None:
    fighter.current_attack += 5


def _healing_mist(fighter: CombatState) -> None:
    # Capped at max HP, which also trims HP boosted above max by a special move
    fighter.current_hp = min(fighter.max_hp, fighter.current_hp + 10)


def _gain_speed(fighter: CombatState) -> None:
    fighter.current_speed += 3


def _power_drain(fighter: CombatState) -> None:
    fighter.current_attack = max(1, fighter.current_attack - 5)


RANDOM_EVENTS: tuple[RandomEvent, ...] = (
    RandomEvent("SOLAR FLARE", "Both fighters lose 5 HP", 0.08, EventScope.BOTH, _lose_hp(5)),
    RandomEvent(
        "ADRENALINE RUSH", "Random fighter gains +5 attack", 0.08, EventScope.ONE_SIDE,
        _gain_attack, "{name} gains +5 attack!",
    ),
    RandomEvent("EARTHQUAKE", "Both fighters take 8 damage", 0.06, EventScope.BOTH, _lose_hp(8)),
    RandomEvent(
        "HEALING MIST", "Random fighter heals 10 HP", 0.07, EventScope.ONE_SIDE,
        _healing_mist, "{name} heals 10 HP!",
    ),
    RandomEvent(
        "SPEED BOOST", "Random fighter gains +3 speed", 0.08, EventScope.ONE_SIDE,
        _gain_speed, "{name} gains +3 speed!",
    ),
    RandomEvent(
        "POWER DRAIN", "Random fighter loses 5 attack", 0.06, EventScope.ONE_SIDE,
        _power_drain, "{name} loses 5 attack!",
    ),
)

EVENTS_BY_NAME: dict[str, RandomEvent] = {event.name: event for event in RANDOM_EVENTS}
