"""Centralized battle enums.

This module contains the enums shared by the engine, the catalogs and the
managers, providing a single source of truth for tags that would otherwise
be magic strings.
"""

from enum import Enum, auto


class LogEntryKind(Enum):
    """What a fight log line describes."""
    SETUP = auto()         # Turn 0 banner, starting stats, initiative
    TURN = auto()          # Turn separator
    RANDOM_EVENT = auto()  # Event announcement and its follow-up
    RAGE = auto()          # Rage mode activation
    SPECIAL = auto()       # Special move announcement and stat summary
    ATTACK = auto()        # Normal attack landing on HP
    DODGE = auto()         # Attack avoided
    BARRIER = auto()       # Attack absorbed (partly or fully) by a barrier
    KNOCKOUT = auto()
    TIMEOUT = auto()
    RESULT = auto()        # Victory or tiebreak line


class EventScope(Enum):
    """Which combatants a random event touches."""
    BOTH = auto()
    ONE_SIDE = auto()


class FightEnding(Enum):
    """How the turn loop stopped."""
    KNOCKOUT = auto()
    EVENT_KNOCKOUT = auto()  # Attacker dropped to 0 HP by a random event, no K.O. swing
    TIMEOUT = auto()


class MatchStatus(Enum):
    """Lifecycle of a tournament match."""
    PENDING = auto()   # Waiting for entrants from the previous round
    READY = auto()
    BYE = auto()       # Single entrant, advances without a fight
    COMPLETED = auto()
