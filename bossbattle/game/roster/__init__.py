"""Boss submissions.

This package contains everything upstream of the engine:
- boss_validator.py: Workshop rules every submission must satisfy
- boss_roster.py: Registered bosses and session membership
- roster_loader.py: YAML roster files
"""

from .boss_roster import BossRoster, RosterError
from .boss_validator import ValidationError, validate_boss
from .roster_loader import DEFAULT_ROSTER_PATH, load_definitions, load_roster

__all__ = [
    "BossRoster",
    "RosterError",
    "ValidationError",
    "validate_boss",
    "DEFAULT_ROSTER_PATH",
    "load_definitions",
    "load_roster",
]
