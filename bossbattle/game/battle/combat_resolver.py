"""
Combat resolution for normal attacks and damage application.

This module handles the actual damage math: barrier absorption, true damage,
and the dodge/crit rolls of a normal attack. Turn order, events and special
move gating live in the battle engine.
"""
import math
from dataclasses import dataclass
from typing import Optional

from ...core.data import CombatState, FightLogEntry, LogEntryKind
from ...core.random_source import RandomSource
from .battle_rules import BattleRules


@dataclass(frozen=True)
class DamageResult:
    """Split of a hit between barrier and HP.

    ``absorbed + dealt == computed`` for every barrier-respecting hit.
    """
    computed: int
    absorbed: int
    dealt: int


@dataclass(frozen=True)
class AttackResult:
    """Everything a normal attack decided."""
    dodge_chance: float
    dodged: bool
    critical: bool = False
    damage: Optional[DamageResult] = None


def apply_damage(defender: CombatState, damage: int) -> DamageResult:
    """Apply barrier-respecting damage.

    The barrier soaks up to its full value first; the remainder hits HP.
    """
    absorbed = min(defender.barrier, damage) if defender.barrier > 0 else 0
    defender.barrier -= absorbed
    dealt = damage - absorbed
    defender.current_hp -= dealt
    return DamageResult(computed=damage, absorbed=absorbed, dealt=dealt)


def apply_true_damage(defender: CombatState, damage: int) -> DamageResult:
    """Apply damage straight to HP, ignoring any barrier."""
    defender.current_hp -= damage
    return DamageResult(computed=damage, absorbed=0, dealt=damage)


class CombatResolver:
    """Resolves normal attacks between two combat states."""

    def __init__(self, rules: BattleRules, rng: RandomSource):
        self.rules = rules
        self.rng = rng

    def roll_damage(self, attacker: CombatState) -> tuple[int, bool]:
        """Raw damage of a normal attack and whether it crit."""
        damage = attacker.current_attack
        critical = self.rng.chance(self.rules.crit_chance)
        if critical:
            damage = math.floor(damage * self.rules.crit_multiplier)
        return damage, critical

    def resolve_attack(
        self,
        attacker: CombatState,
        defender: CombatState,
        turn: int
    ) -> tuple[AttackResult, list[FightLogEntry]]:
        """
        Resolve one normal attack.

        Args:
            attacker: The combatant acting this turn
            defender: The combatant being attacked
            turn: Current fight turn, stamped on the log entries

        Returns:
            The attack result and the log entries it produced
        """
        names = {"attacker_name": attacker.name, "defender_name": defender.name}
        dodge_chance = self.rules.dodge_chance(attacker.current_speed, defender.current_speed)

        if self.rng.chance(dodge_chance):
            entry = FightLogEntry(
                turn=turn,
                message=f"{defender.name} DODGED the attack! (Speed advantage)",
                kind=LogEntryKind.DODGE,
                **names,
            )
            return AttackResult(dodge_chance=dodge_chance, dodged=True), [entry]

        raw_damage, critical = self.roll_damage(attacker)
        crit_text = " ** CRITICAL HIT **" if critical else ""
        entries: list[FightLogEntry] = []

        had_barrier = defender.barrier > 0
        result = apply_damage(defender, raw_damage)

        if had_barrier:
            entries.append(
                FightLogEntry(
                    turn=turn,
                    message=f"{attacker.name} attacks{crit_text}! {result.absorbed} damage absorbed by barrier",
                    kind=LogEntryKind.BARRIER,
                    **names,
                )
            )
            if result.dealt > 0:
                entries.append(
                    FightLogEntry(
                        turn=turn,
                        message=(
                            f"{result.dealt} damage dealt to {defender.name}! "
                            f"({defender.display_hp} HP remaining)"
                        ),
                        kind=LogEntryKind.ATTACK,
                    )
                )
        else:
            entries.append(
                FightLogEntry(
                    turn=turn,
                    message=(
                        f"{attacker.name} attacks for {result.dealt} damage{crit_text}! "
                        f"{defender.name} has {defender.display_hp} HP remaining"
                    ),
                    kind=LogEntryKind.ATTACK,
                    **names,
                )
            )

        return AttackResult(dodge_chance=dodge_chance, dodged=False, critical=critical, damage=result), entries
