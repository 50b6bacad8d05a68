"""YAML roster loader.

A roster file lists boss submissions in the same vocabulary as the boss
template students fill in::

    bosses:
      - name: "Gravemaw"
        hp: 90
        attack: 55
        speed: 45
        special_id: 6
        story: "..."
    session: ["Gravemaw"]   # optional; defaults to every boss

Relative paths are taken from the project root.
"""

import os
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING, Union

import yaml

from ...core.data import CharacterDefinition
from ..battle.battle_rules import BattleRules
from .boss_roster import BossRoster, RosterError

if TYPE_CHECKING:
    from ...core.events import EventManager


DEFAULT_ROSTER_PATH = "assets/data/rosters/workshop.yaml"


def _resolve_path(path: Union[str, Path]) -> Path:
    if os.path.isabs(path):
        return Path(path)
    project_root = Path(__file__).parent.parent.parent.parent
    return project_root / path


def _read_roster_file(path: Optional[Union[str, Path]]) -> tuple[Path, dict[str, Any]]:
    roster_file = _resolve_path(path or DEFAULT_ROSTER_PATH)
    try:
        with open(roster_file, "r", encoding="utf-8") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Roster file not found: {roster_file}")

    if "bosses" not in data:
        raise KeyError(f"Missing 'bosses' section in {roster_file}")
    return roster_file, data


def _parse_definitions(roster_file: Path, data: dict[str, Any]) -> list[CharacterDefinition]:
    definitions = []
    for index, entry in enumerate(data["bosses"] or []):
        try:
            definitions.append(CharacterDefinition.from_dict(entry))
        except (KeyError, TypeError, ValueError) as e:
            raise RosterError(f"Malformed boss entry #{index} in {roster_file}: {e!r}")
    return definitions


def load_definitions(path: Optional[Union[str, Path]] = None) -> list[CharacterDefinition]:
    """Parse a roster file without validating or registering anything.

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If the file has no ``bosses`` section
        RosterError: If an entry is missing a field or has a non-integer stat
    """
    roster_file, data = _read_roster_file(path)
    return _parse_definitions(roster_file, data)


def load_roster(
    path: Optional[Union[str, Path]] = None,
    rules: Optional[BattleRules] = None,
    event_manager: Optional["EventManager"] = None
) -> BossRoster:
    """Load and register every boss in a roster file.

    Args:
        path: Roster file; the bundled workshop roster when omitted
        rules: Rules used to validate each boss
        event_manager: Optional bus for roster log messages

    Returns:
        BossRoster with the file's bosses registered and the session filled

    Raises:
        FileNotFoundError: If the file does not exist
        KeyError: If the file has no ``bosses`` section or the session names
            an unknown boss
        RosterError: If an entry is malformed, invalid or a duplicate
    """
    roster_file, data = _read_roster_file(path)

    roster = BossRoster(rules=rules, event_manager=event_manager)
    for definition in _parse_definitions(roster_file, data):
        roster.register(definition)

    session = data.get("session")
    for name in (roster.names() if session is None else session):
        roster.add_to_session(name)

    return roster
