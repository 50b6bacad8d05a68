"""Battle simulation.

This package contains the fight engine and its catalogs:
- battle_engine.py: The turn loop producing a FightOutcome
- combat_resolver.py: Normal attack rolls and barrier-aware damage
- special_moves.py: The twelve special moves keyed by id
- random_events.py: The six turn-start random events
- battle_rules.py: Tunable constants and their YAML loader
"""

from .battle_engine import BattleEngine, simulate
from .battle_rules import DEFAULT_RULES, BattleRules, load_battle_rules
from .combat_resolver import AttackResult, CombatResolver, DamageResult, apply_damage, apply_true_damage
from .random_events import EVENTS_BY_NAME, RANDOM_EVENTS, RandomEvent
from .special_moves import SPECIAL_MOVES, SpecialMove, get_special_move

__all__ = [
    "BattleEngine",
    "simulate",
    "DEFAULT_RULES",
    "BattleRules",
    "load_battle_rules",
    "AttackResult",
    "CombatResolver",
    "DamageResult",
    "apply_damage",
    "apply_true_damage",
    "EVENTS_BY_NAME",
    "RANDOM_EVENTS",
    "RandomEvent",
    "SPECIAL_MOVES",
    "SpecialMove",
    "get_special_move",
]
