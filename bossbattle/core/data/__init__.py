"""Core data structures and definitions.

This package contains the fundamental battle data types:
- data_structures.py: definitions, per-fight combat state, log entries and outcomes
- game_enums.py: centralized enums for log kinds, event scopes and match status
"""

from .data_structures import CharacterDefinition, CombatState, FightLogEntry, FightOutcome
from .game_enums import EventScope, FightEnding, LogEntryKind, MatchStatus

__all__ = [
    "CharacterDefinition",
    "CombatState",
    "FightLogEntry",
    "FightOutcome",
    "EventScope",
    "FightEnding",
    "LogEntryKind",
    "MatchStatus",
]
