"""Battle rule constants and their YAML loader.

The defaults below are the workshop's canonical numbers. A rules file under
``assets/config/`` may override any subset of them, e.g. to run a classroom
session with a shorter turn cap or no random events.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

import yaml


DEFAULT_RULES_PATH = "assets/config/battle_rules.yaml"


@dataclass(frozen=True)
class BattleRules:
    """Tunable constants consumed by the engine and the roster validator."""

    # Action resolution
    special_move_turn: int = 3
    crit_chance: float = 0.15
    crit_multiplier: float = 1.5
    base_dodge_chance: float = 0.05
    dodge_per_speed_point: float = 0.01
    max_dodge_chance: float = 0.30

    # Rage mode
    rage_hp_threshold: float = 0.5
    rage_attack_bonus: int = 10

    # Random events
    random_event_chance: float = 0.75

    # Turn cap; exceeding it ends the fight as a draw decided by tiebreak
    max_turns: int = 100

    # Roster constraints (checked upstream, never by the engine)
    max_stat_points: int = 200
    min_special_move_id: int = 1
    max_special_move_id: int = 12

    def __post_init__(self) -> None:
        for name in ("crit_chance", "base_dodge_chance", "dodge_per_speed_point",
                     "max_dodge_chance", "rage_hp_threshold", "random_event_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        if self.crit_multiplier < 1.0:
            raise ValueError(f"crit_multiplier must be >= 1, got {self.crit_multiplier}")
        if self.max_turns <= 0:
            raise ValueError(f"max_turns must be > 0, got {self.max_turns}")
        if self.special_move_turn <= 0:
            raise ValueError(f"special_move_turn must be > 0, got {self.special_move_turn}")
        if self.max_stat_points <= 0:
            raise ValueError(f"max_stat_points must be > 0, got {self.max_stat_points}")
        if self.min_special_move_id > self.max_special_move_id:
            raise ValueError("min_special_move_id must not exceed max_special_move_id")

    def dodge_chance(self, attacker_speed: int, defender_speed: int) -> float:
        """Chance for the defender to avoid a normal attack.

        Base chance plus a bonus per point of defender speed advantage, capped.
        """
        advantage = max(0, defender_speed - attacker_speed)
        return min(self.base_dodge_chance + advantage * self.dodge_per_speed_point, self.max_dodge_chance)

    def rage_threshold_reached(self, current_hp: int, max_hp: int) -> bool:
        return current_hp <= max_hp * self.rage_hp_threshold


DEFAULT_RULES = BattleRules()


def _resolve_path(path: Union[str, Path]) -> Path:
    """Resolve a rules path; relative paths are taken from the project root."""
    if os.path.isabs(path):
        return Path(path)
    project_root = Path(__file__).parent.parent.parent.parent
    return project_root / path


def load_battle_rules(path: Optional[Union[str, Path]] = None) -> BattleRules:
    """Load battle rules from a YAML file.

    Args:
        path: Rules file; None returns the built-in defaults

    Returns:
        BattleRules with the file's values layered over the defaults

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If the file has no ``battle_rules`` section or an unknown key
        ValueError: If a value is out of range
    """
    if path is None:
        return DEFAULT_RULES

    rules_file = _resolve_path(path)
    try:
        with open(rules_file, "r", encoding="utf-8") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Battle rules file not found: {rules_file}")

    if "battle_rules" not in data:
        raise KeyError(f"Missing 'battle_rules' section in {rules_file}")

    section = data["battle_rules"] or {}
    known = {f.name for f in fields(BattleRules)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise KeyError(f"Unknown battle rule(s) in {rules_file}: {', '.join(unknown)}")

    try:
        return replace(DEFAULT_RULES, **section)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid battle rules in {rules_file}: {e}")
