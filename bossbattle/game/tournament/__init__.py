"""Tournament play.

This package contains the bracket orchestration around the engine:
- bracket.py: Seeding, byes, match play and winner advancement
"""

from .bracket import Match, Tournament

__all__ = [
    "Match",
    "Tournament",
]
