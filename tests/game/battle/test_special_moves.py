"""
Unit tests for the special move catalog.
"""

import pytest

from bossbattle.game.battle.special_moves import SPECIAL_MOVES, get_special_move
from tests.test_utils import make_state


def _fighters(barrier: int = 0):
    attacker = make_state("Atk", hp=100, attack=40, speed=30)
    defender = make_state("Def", hp=100, attack=40, speed=30, barrier=barrier)
    return attacker, defender


class TestCatalog:
    """Test catalog shape."""

    def test_twelve_moves_keyed_by_id(self):
        """Test ids 1 through 12 are all present and self-consistent."""
        assert sorted(SPECIAL_MOVES) == list(range(1, 13))
        assert all(move.id == move_id for move_id, move in SPECIAL_MOVES.items())

    def test_unknown_id(self):
        """Test lookups outside the catalog return None."""
        assert get_special_move(0) is None
        assert get_special_move(13) is None

    def test_names(self):
        """Test a few canonical names."""
        assert get_special_move(1).name == "OVERLOAD STRIKE"
        assert get_special_move(6).name == "STONE GUARD"
        assert get_special_move(12).name == "ADRENAL SURGE"


class TestMoveEffects:
    """Test each move's effect on the two combat states."""

    @pytest.mark.parametrize("move_id,expected_defender_hp", [
        (1, 40),    # attack + 20
        (2, 20),    # attack * 2
        (3, 85),    # 15 true damage
        (10, 40),   # attack + 10, then attack + 10 damage
        (11, 85),   # 15 true damage
    ])
    def test_damage_moves(self, move_id, expected_defender_hp):
        """Test defender HP after each damaging move."""
        attacker, defender = _fighters()
        get_special_move(move_id).effect(attacker, defender)
        assert defender.current_hp == expected_defender_hp

    def test_damage_moves_respect_barrier(self):
        """Test OVERLOAD STRIKE is partly absorbed."""
        attacker, defender = _fighters(barrier=20)
        get_special_move(1).effect(attacker, defender)

        assert defender.barrier == 0
        assert defender.current_hp == 60

    @pytest.mark.parametrize("move_id", [3, 11])
    def test_true_damage_ignores_barrier(self, move_id):
        """Test TRUE BREAKER and LIFE SIPHON bypass the barrier."""
        attacker, defender = _fighters(barrier=20)
        get_special_move(move_id).effect(attacker, defender)

        assert defender.barrier == 20
        assert defender.current_hp == 85

    def test_second_wind_exceeds_max_hp(self):
        """Test SECOND WIND heals past max HP."""
        attacker, defender = _fighters()
        get_special_move(4).effect(attacker, defender)
        assert attacker.current_hp == 125

    @pytest.mark.parametrize("move_id", [5, 12])
    def test_hp_and_speed_moves(self, move_id):
        """Test IRON SKIN and ADRENAL SURGE."""
        attacker, defender = _fighters()
        get_special_move(move_id).effect(attacker, defender)

        assert attacker.current_hp == 110
        assert attacker.current_speed == 40
        assert defender.current_hp == 100

    def test_stone_guard_stacks(self):
        """Test STONE GUARD adds to any existing barrier."""
        attacker, defender = _fighters()
        attacker.barrier = 5
        get_special_move(6).effect(attacker, defender)
        assert attacker.barrier == 25

    def test_battle_frenzy(self):
        """Test BATTLE FRENZY raises attack for the rest of the fight."""
        attacker, defender = _fighters()
        get_special_move(7).effect(attacker, defender)
        assert attacker.current_attack == 55

    def test_weakening_curse_floors_at_one(self):
        """Test WEAKENING CURSE never drops attack below 1."""
        attacker, defender = _fighters()
        get_special_move(8).effect(attacker, defender)
        assert defender.current_attack == 25

        defender.current_attack = 10
        get_special_move(8).effect(attacker, defender)
        assert defender.current_attack == 1

    def test_shadow_blink(self):
        """Test SHADOW BLINK raises speed."""
        attacker, defender = _fighters()
        get_special_move(9).effect(attacker, defender)
        assert attacker.current_speed == 50

    def test_dual_edge_keeps_attack_boost(self):
        """Test DUAL EDGE's attack boost persists."""
        attacker, defender = _fighters()
        get_special_move(10).effect(attacker, defender)
        assert attacker.current_attack == 50

    def test_life_siphon_heals_attacker(self):
        """Test LIFE SIPHON heals the attacker by 10."""
        attacker, defender = _fighters()
        get_special_move(11).effect(attacker, defender)
        assert attacker.current_hp == 110
