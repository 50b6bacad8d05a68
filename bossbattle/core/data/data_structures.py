"""Battle data structures.

This module provides the records that flow through a fight:

Data Flow:
1. CharacterDefinition (roster) -> CombatState (engine, per fight) -> discarded
2. Engine -> FightLogEntry sequence -> FightOutcome (presentation, scoreboard)

Definitions and outcomes are immutable. CombatState is the only mutable
structure and never outlives the fight that created it.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .game_enums import FightEnding, LogEntryKind


@dataclass(frozen=True)
class CharacterDefinition:
    """A boss as submitted by a student.

    Field names follow the engine's vocabulary; ``from_dict`` and ``to_dict``
    translate to the script vocabulary (hp/attack/speed/special_id) used by
    rosters and the original boss template.
    """
    name: str
    max_hp: int
    base_attack: int
    base_speed: int
    special_move_id: int
    story: str = ""

    @property
    def stat_total(self) -> int:
        """Points spent against the stat budget."""
        return self.max_hp + self.base_attack + self.base_speed

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CharacterDefinition":
        """Build a definition from a script-style mapping.

        Args:
            data: Mapping with name, hp, attack, speed, special_id and story keys

        Returns:
            CharacterDefinition with integer stats

        Raises:
            KeyError: If a stat key is missing
            ValueError: If a stat is not an integer
        """
        return cls(
            name=str(data["name"]),
            max_hp=int(data["hp"]),
            base_attack=int(data["attack"]),
            base_speed=int(data["speed"]),
            special_move_id=int(data["special_id"]),
            story=str(data.get("story", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert back to the script-style mapping."""
        return {
            "name": self.name,
            "hp": self.max_hp,
            "attack": self.base_attack,
            "speed": self.base_speed,
            "special_id": self.special_move_id,
            "story": self.story,
        }


@dataclass
class CombatState:
    """Mutable in-fight view of one combatant.

    Wraps the original definition so the engine can always hand the untouched
    definition back in the outcome. ``current_hp`` may drop below zero; only
    the display helpers clamp it.
    """
    definition: CharacterDefinition
    current_hp: int
    current_attack: int
    current_speed: int
    barrier: int = 0
    used_special: bool = False
    rage_mode: bool = False

    @classmethod
    def from_definition(cls, definition: CharacterDefinition) -> "CombatState":
        """Create the fight-start state for a definition."""
        return cls(
            definition=definition,
            current_hp=definition.max_hp,
            current_attack=definition.base_attack,
            current_speed=definition.base_speed,
        )

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def max_hp(self) -> int:
        return self.definition.max_hp

    @property
    def special_move_id(self) -> int:
        return self.definition.special_move_id

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    @property
    def display_hp(self) -> int:
        """HP as shown in log lines, never below zero."""
        return max(0, self.current_hp)

    def stat_line(self) -> str:
        """Summary used after a special move resolves."""
        return f"{self.name}: HP={self.display_hp}, ATK={self.current_attack}, Barrier={self.barrier}"


@dataclass(frozen=True)
class FightLogEntry:
    """One line of the fight log."""
    turn: int
    message: str
    kind: LogEntryKind
    attacker_name: Optional[str] = None
    defender_name: Optional[str] = None


@dataclass(frozen=True)
class FightOutcome:
    """Final result of a single simulation.

    ``winner`` and ``loser`` are the definitions passed to the engine, never
    the mutated combat states.
    """
    winner: CharacterDefinition
    loser: CharacterDefinition
    log: tuple[FightLogEntry, ...]
    turns: int
    ending: FightEnding
    final_hp: Mapping[str, int] = field(default_factory=dict)

    @property
    def timed_out(self) -> bool:
        return self.ending == FightEnding.TIMEOUT

    def messages(self) -> list[str]:
        """Plain log text in order, for presentation layers."""
        return [entry.message for entry in self.log]

    def entries_of(self, kind: LogEntryKind) -> list[FightLogEntry]:
        """Log entries with a given kind, in order."""
        return [entry for entry in self.log if entry.kind == kind]
