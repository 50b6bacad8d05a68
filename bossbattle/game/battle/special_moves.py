"""Special move catalog.

Twelve fixed moves keyed by id. Each entry is a small closed variant: a name,
a description shown in the log, and an effect that mutates the attacker and/or
defender combat state in place. Damage-dealing moves go through the same
barrier absorption as normal attacks unless they are true damage.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from ...core.data import CombatState
from .combat_resolver import apply_damage, apply_true_damage

MoveEffect = Callable[[CombatState, CombatState], None]


@dataclass(frozen=True)
class SpecialMove:
    """One catalog entry."""
    id: int
    name: str
    description: str
    effect: MoveEffect


def _overload_strike(attacker: CombatState, defender: CombatState) -> None:
    apply_damage(defender, attacker.current_attack + 20)


def _critical_pulse(attacker: CombatState, defender: CombatState) -> None:
    apply_damage(defender, attacker.current_attack * 2)


def _true_breaker(attacker: CombatState, defender: CombatState) -> None:
    apply_true_damage(defender, 15)


def _second_wind(attacker: CombatState, defender: CombatState) -> None:
    # Not capped at max HP
    attacker.current_hp += 25


def _iron_skin(attacker: CombatState, defender: CombatState) -> None:
    attacker.current_hp += 10
    attacker.current_speed += 10


def _stone_guard(attacker: CombatState, defender: CombatState) -> None:
    attacker.barrier += 20


def _battle_frenzy(attacker: CombatState, defender: CombatState) -> None:
    attacker.current_attack += 15


def _weakening_curse(attacker: CombatState, defender: CombatState) -> None:
    defender.current_attack = max(1, defender.current_attack - 15)


def _shadow_blink(attacker: CombatState, defender: CombatState) -> None:
    attacker.current_speed += 20


def _dual_edge(attacker: CombatState, defender: CombatState) -> None:
    # The attack boost lands first and feeds the hit
    attacker.current_attack += 10
    apply_damage(defender, attacker.current_attack + 10)


def _life_siphon(attacker: CombatState, defender: CombatState) -> None:
    apply_true_damage(defender, 15)
    attacker.current_hp += 10


def _adrenal_surge(attacker: CombatState, defender: CombatState) -> None:
    attacker.current_hp += 10
    attacker.current_speed += 10


SPECIAL_MOVES: dict[int, SpecialMove] = {
    move.id: move
    for move in (
        SpecialMove(1, "OVERLOAD STRIKE", "+20 bonus damage", _overload_strike),
        SpecialMove(2, "CRITICAL PULSE", "Double damage this turn", _critical_pulse),
        SpecialMove(3, "TRUE BREAKER", "+15 true damage (ignores barrier)", _true_breaker),
        SpecialMove(4, "SECOND WIND", "Heal +25 HP", _second_wind),
        SpecialMove(5, "IRON SKIN", "Heal +10 HP / +10 speed", _iron_skin),
        SpecialMove(6, "STONE GUARD", "Add +20 barrier HP", _stone_guard),
        SpecialMove(7, "BATTLE FRENZY", "+15 attack for rest of fight", _battle_frenzy),
        SpecialMove(8, "WEAKENING CURSE", "Enemy attack -15", _weakening_curse),
        SpecialMove(9, "SHADOW BLINK", "+20 speed for rest of fight", _shadow_blink),
        SpecialMove(10, "DUAL EDGE", "+10 attack +10 bonus damage", _dual_edge),
        SpecialMove(11, "LIFE SIPHON", "Enemy -15 HP / Self +10 HP", _life_siphon),
        SpecialMove(12, "ADRENAL SURGE", "+10 HP +10 speed", _adrenal_surge),
    )
}


def get_special_move(move_id: int) -> Optional[SpecialMove]:
    """Look up a move by id; None when the id is not in the catalog."""
    return SPECIAL_MOVES.get(move_id)
