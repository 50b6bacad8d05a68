"""Event system for publisher-subscriber communication.

This package contains the event-driven plumbing around the battle engine:
- event_manager.py: Publisher-subscriber event routing
- events.py: Event definitions for fights, tournaments and logging
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    BattleEvent,
    EventType,
    FightStarted,
    TurnStarted,
    RandomEventTriggered,
    RageActivated,
    SpecialMoveUsed,
    AttackResolved,
    FighterDefeated,
    FightEnded,
    RoundCompleted,
    TournamentCompleted,
    LogMessage,
    DebugMessage,
    LogSaveRequested,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "BattleEvent",
    "EventType",
    "FightStarted",
    "TurnStarted",
    "RandomEventTriggered",
    "RageActivated",
    "SpecialMoveUsed",
    "AttackResolved",
    "FighterDefeated",
    "FightEnded",
    "RoundCompleted",
    "TournamentCompleted",
    "LogMessage",
    "DebugMessage",
    "LogSaveRequested",
]
