"""Boss roster and workshop session membership.

The roster owns every registered definition; the session is the subset of
bosses taking part in the current workshop run, in the order they joined.
"""

from typing import TYPE_CHECKING, Optional

from ...core.data import CharacterDefinition
from ...core.events import LogMessage
from ..battle.battle_rules import DEFAULT_RULES, BattleRules
from .boss_validator import ValidationError, validate_boss

if TYPE_CHECKING:
    from ...core.events import EventManager


class RosterError(Exception):
    """Raised when a boss cannot be registered."""

    def __init__(self, message: str, errors: Optional[list[ValidationError]] = None):
        super().__init__(message)
        self.errors = errors or []


class BossRoster:
    """Registered bosses keyed by name."""

    def __init__(self, rules: Optional[BattleRules] = None, event_manager: Optional["EventManager"] = None):
        self.rules = rules or DEFAULT_RULES
        self.event_manager = event_manager
        self._bosses: dict[str, CharacterDefinition] = {}
        self._session: list[str] = []

    def _emit_log(self, message: str, level: str = "INFO") -> None:
        if self.event_manager is not None:
            self.event_manager.publish(
                LogMessage(turn=0, message=message, category="ROSTER", level=level, source="BossRoster"),
                source="BossRoster"
            )

    def register(self, definition: CharacterDefinition) -> CharacterDefinition:
        """Validate and add a boss.

        Raises:
            RosterError: If the boss fails validation or the name is taken
        """
        errors = validate_boss(definition, self.rules)
        if errors:
            self._emit_log(f"Rejected '{definition.name}': {'; '.join(str(e) for e in errors)}", level="WARNING")
            raise RosterError(f"Boss '{definition.name}' failed validation", errors)

        if definition.name in self._bosses:
            raise RosterError(f"A boss named '{definition.name}' is already registered")

        self._bosses[definition.name] = definition
        self._emit_log(f"Registered {definition.name} ({definition.stat_total} stat points)")
        return definition

    def remove(self, name: str) -> CharacterDefinition:
        """Remove a boss from the roster and the session.

        Raises:
            KeyError: If no boss has that name
        """
        definition = self.get(name)
        del self._bosses[name]
        if name in self._session:
            self._session.remove(name)
        self._emit_log(f"Removed {name}")
        return definition

    def get(self, name: str) -> CharacterDefinition:
        if name not in self._bosses:
            raise KeyError(f"Unknown boss '{name}'")
        return self._bosses[name]

    def names(self) -> list[str]:
        return list(self._bosses)

    def all(self) -> list[CharacterDefinition]:
        return list(self._bosses.values())

    def __len__(self) -> int:
        return len(self._bosses)

    def __contains__(self, name: object) -> bool:
        return name in self._bosses

    # Session membership

    def add_to_session(self, name: str) -> None:
        """Add a registered boss to the session; adding twice is a no-op.

        Raises:
            KeyError: If no boss has that name
        """
        self.get(name)
        if name not in self._session:
            self._session.append(name)

    def remove_from_session(self, name: str) -> None:
        if name in self._session:
            self._session.remove(name)

    def clear_session(self) -> None:
        self._session.clear()

    def in_session(self, name: str) -> bool:
        return name in self._session

    def session_bosses(self) -> list[CharacterDefinition]:
        """Session members in join order."""
        return [self._bosses[name] for name in self._session]
