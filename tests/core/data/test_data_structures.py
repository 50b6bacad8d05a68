"""
Unit tests for the battle data structures.

Covers definitions, the per-fight combat state, log entries and outcomes.
"""

import dataclasses

import pytest

from bossbattle.core.data import (
    CharacterDefinition,
    CombatState,
    FightEnding,
    FightLogEntry,
    FightOutcome,
    LogEntryKind,
)
from tests.test_utils import make_boss


class TestCharacterDefinition:
    """Test CharacterDefinition functionality."""

    def test_stat_total(self):
        """Test the stat budget sums hp, attack and speed."""
        boss = make_boss(hp=90, attack=60, speed=50)
        assert boss.stat_total == 200

    def test_definition_is_immutable(self):
        """Test definitions cannot be changed after creation."""
        boss = make_boss()
        with pytest.raises(dataclasses.FrozenInstanceError):
            boss.max_hp = 500  # type: ignore[misc]

    def test_from_dict_uses_roster_vocabulary(self):
        """Test building a definition from roster keys."""
        boss = CharacterDefinition.from_dict({
            "name": "Gravemaw",
            "hp": "100",
            "attack": 55,
            "speed": 45,
            "special_id": 6,
            "story": "Hungry bell.",
        })

        assert boss.name == "Gravemaw"
        assert boss.max_hp == 100
        assert boss.base_attack == 55
        assert boss.base_speed == 45
        assert boss.special_move_id == 6
        assert boss.story == "Hungry bell."

    def test_from_dict_story_is_optional(self):
        """Test that a missing story becomes an empty string."""
        boss = CharacterDefinition.from_dict({"name": "X", "hp": 1, "attack": 1, "speed": 1, "special_id": 1})
        assert boss.story == ""

    def test_from_dict_missing_stat_raises(self):
        """Test that a missing stat key raises KeyError."""
        with pytest.raises(KeyError):
            CharacterDefinition.from_dict({"name": "X", "hp": 1, "attack": 1, "special_id": 1})

    def test_to_dict_round_trip(self):
        """Test to_dict produces a mapping from_dict accepts."""
        boss = make_boss("Miregeist", hp=80, attack=45, speed=75, special_id=9)
        assert CharacterDefinition.from_dict(boss.to_dict()) == boss


class TestCombatState:
    """Test CombatState functionality."""

    def test_from_definition_copies_base_stats(self):
        """Test the fight-start state mirrors the definition."""
        boss = make_boss(hp=120, attack=40, speed=35, special_id=4)
        state = CombatState.from_definition(boss)

        assert state.definition is boss
        assert state.current_hp == 120
        assert state.current_attack == 40
        assert state.current_speed == 35
        assert state.barrier == 0
        assert not state.used_special
        assert not state.rage_mode
        assert state.max_hp == 120
        assert state.special_move_id == 4

    def test_mutating_state_leaves_definition_untouched(self):
        """Test combat changes never leak into the definition."""
        boss = make_boss(hp=100, attack=50)
        state = CombatState.from_definition(boss)

        state.current_hp = -20
        state.current_attack = 999

        assert boss.max_hp == 100
        assert boss.base_attack == 50

    def test_is_alive_requires_positive_hp(self):
        """Test that zero HP counts as defeated."""
        state = CombatState.from_definition(make_boss())
        state.current_hp = 0
        assert not state.is_alive
        state.current_hp = 1
        assert state.is_alive

    def test_display_hp_clamps_at_zero(self):
        """Test negative HP is shown as zero."""
        state = CombatState.from_definition(make_boss())
        state.current_hp = -30
        assert state.display_hp == 0

    def test_stat_line(self):
        """Test the summary line printed after a special move."""
        state = CombatState.from_definition(make_boss("Beta", hp=100, attack=40))
        state.current_hp = -5
        state.barrier = 20

        assert state.stat_line() == "Beta: HP=0, ATK=40, Barrier=20"


class TestFightOutcome:
    """Test FightOutcome helpers."""

    def _outcome(self, ending: FightEnding = FightEnding.KNOCKOUT) -> FightOutcome:
        a, b = make_boss("A"), make_boss("B")
        log = (
            FightLogEntry(0, "[BATTLE INITIATED] A vs B", LogEntryKind.SETUP),
            FightLogEntry(1, "--- Turn 1 ---", LogEntryKind.TURN),
            FightLogEntry(1, "A attacks for 50 damage! B has 50 HP remaining", LogEntryKind.ATTACK),
            FightLogEntry(1, "[VICTORY] A WINS!", LogEntryKind.RESULT),
        )
        return FightOutcome(winner=a, loser=b, log=log, turns=1, ending=ending, final_hp={"A": 100, "B": 50})

    def test_messages_in_order(self):
        """Test messages returns plain text in log order."""
        messages = self._outcome().messages()
        assert messages[0] == "[BATTLE INITIATED] A vs B"
        assert messages[-1] == "[VICTORY] A WINS!"
        assert len(messages) == 4

    def test_entries_of_kind(self):
        """Test filtering log entries by kind."""
        attacks = self._outcome().entries_of(LogEntryKind.ATTACK)
        assert len(attacks) == 1
        assert attacks[0].turn == 1

    def test_timed_out(self):
        """Test timed_out only reports timeouts."""
        assert not self._outcome().timed_out
        assert self._outcome(FightEnding.TIMEOUT).timed_out
