"""Manager systems that listen to the battle event bus.

This package contains the managers that collect what fights produce:
- log_manager.py: Categorized, filterable log buffer with file export
- scoreboard_manager.py: Lifetime and session standings from FIGHT_ENDED
"""

from .log_manager import LogCategory, LogLevel, LogManager, LogRecord
from .scoreboard_manager import ScoreboardEntry, ScoreboardManager

__all__ = [
    "LogCategory",
    "LogLevel",
    "LogManager",
    "LogRecord",
    "ScoreboardEntry",
    "ScoreboardManager",
]
