"""Battle events and context.

This module defines the events that the engine, the tournament orchestrator
and the managers exchange through the EventManager.

Event Design Principles:
- Events are immutable dataclasses
- All events carry the fight turn they were raised on (0 outside a fight)
- Events reference definitions and outcomes instead of copying their fields
- Events use enums instead of magic strings
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..data.data_structures import CharacterDefinition, FightOutcome


class EventType(Enum):
    """Types of events that managers can subscribe to."""
    # Fight lifecycle
    FIGHT_STARTED = auto()
    TURN_STARTED = auto()
    FIGHT_ENDED = auto()

    # Turn resolution
    RANDOM_EVENT_TRIGGERED = auto()
    RAGE_ACTIVATED = auto()
    SPECIAL_MOVE_USED = auto()
    ATTACK_RESOLVED = auto()
    FIGHTER_DEFEATED = auto()

    # Tournament
    ROUND_COMPLETED = auto()
    TOURNAMENT_COMPLETED = auto()

    # Logging
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class BattleEvent(ABC):
    """Base class for all battle events."""
    turn: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class FightStarted(BattleEvent):
    """Emitted once both combat states exist and the setup log is written."""
    first: "CharacterDefinition"
    second: "CharacterDefinition"

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.FIGHT_STARTED)


@dataclass(frozen=True)
class TurnStarted(BattleEvent):
    """Emitted at the top of each combat turn."""
    attacker_name: str
    defender_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TURN_STARTED)


@dataclass(frozen=True)
class RandomEventTriggered(BattleEvent):
    """Emitted when a random event fires. ``affected_name`` is None for both sides."""
    event_name: str
    affected_name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.RANDOM_EVENT_TRIGGERED)


@dataclass(frozen=True)
class RageActivated(BattleEvent):
    """Emitted the single time a combatant enters rage mode."""
    fighter_name: str
    new_attack: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.RAGE_ACTIVATED)


@dataclass(frozen=True)
class SpecialMoveUsed(BattleEvent):
    """Emitted after a special move effect has been applied."""
    attacker_name: str
    defender_name: str
    move_id: int
    move_name: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.SPECIAL_MOVE_USED)


@dataclass(frozen=True)
class AttackResolved(BattleEvent):
    """Emitted after a normal attack, hit or miss."""
    attacker_name: str
    defender_name: str
    damage: int
    absorbed: int = 0
    critical: bool = False
    dodged: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ATTACK_RESOLVED)


@dataclass(frozen=True)
class FighterDefeated(BattleEvent):
    """Emitted when a defender's HP reaches zero."""
    fighter_name: str
    defeated_by: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.FIGHTER_DEFEATED)


@dataclass(frozen=True)
class FightEnded(BattleEvent):
    """Emitted with the final outcome. Scoreboards record results from this."""
    outcome: "FightOutcome"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.FIGHT_ENDED)


@dataclass(frozen=True)
class RoundCompleted(BattleEvent):
    """Emitted when every match of a tournament round has a winner."""
    round_number: int
    advancing: tuple[str, ...]

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ROUND_COMPLETED)


@dataclass(frozen=True)
class TournamentCompleted(BattleEvent):
    """Emitted when the final match produces a champion."""
    champion: "CharacterDefinition"
    rounds: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.TOURNAMENT_COMPLETED)


@dataclass(frozen=True)
class LogMessage(BattleEvent):
    """Event for centralized logging through LogManager."""
    message: str
    category: str = "SYSTEM"
    level: str = "INFO"
    source: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(BattleEvent):
    """Event for debug output (roll values, chances)."""
    message: str
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(BattleEvent):
    """Event requesting the LogManager to write its buffer to disk."""
    log_dir: str = "logs"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
