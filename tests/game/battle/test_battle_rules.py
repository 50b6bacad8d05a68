"""
Unit tests for battle rules and their YAML loader.
"""

import pytest

from bossbattle.game.battle.battle_rules import (
    DEFAULT_RULES,
    DEFAULT_RULES_PATH,
    BattleRules,
    load_battle_rules,
)


class TestBattleRules:
    """Test rule defaults and derived values."""

    def test_defaults(self):
        """Test the canonical workshop numbers."""
        assert DEFAULT_RULES.special_move_turn == 3
        assert DEFAULT_RULES.crit_chance == 0.15
        assert DEFAULT_RULES.crit_multiplier == 1.5
        assert DEFAULT_RULES.rage_attack_bonus == 10
        assert DEFAULT_RULES.random_event_chance == 0.75
        assert DEFAULT_RULES.max_turns == 100
        assert DEFAULT_RULES.max_stat_points == 200

    @pytest.mark.parametrize("attacker_speed,defender_speed,expected", [
        (50, 50, 0.05),
        (60, 40, 0.05),
        (40, 60, 0.25),
        (10, 90, 0.30),
    ])
    def test_dodge_chance(self, attacker_speed, defender_speed, expected):
        """Test base chance, speed bonus and cap."""
        assert DEFAULT_RULES.dodge_chance(attacker_speed, defender_speed) == pytest.approx(expected)

    def test_rage_threshold(self):
        """Test rage triggers at or below half HP."""
        assert DEFAULT_RULES.rage_threshold_reached(50, 100)
        assert DEFAULT_RULES.rage_threshold_reached(-5, 100)
        assert not DEFAULT_RULES.rage_threshold_reached(51, 100)

    @pytest.mark.parametrize("overrides", [
        {"crit_chance": 1.5},
        {"random_event_chance": -0.1},
        {"crit_multiplier": 0.5},
        {"max_turns": 0},
        {"special_move_turn": 0},
        {"min_special_move_id": 5, "max_special_move_id": 4},
    ])
    def test_invalid_values_rejected(self, overrides):
        """Test out of range rules raise ValueError."""
        with pytest.raises(ValueError):
            BattleRules(**overrides)


class TestLoadBattleRules:
    """Test loading rules from YAML."""

    def test_none_returns_defaults(self):
        assert load_battle_rules(None) is DEFAULT_RULES

    def test_bundled_file_matches_defaults(self):
        """Test the shipped rules file restates the built-in defaults."""
        assert load_battle_rules(DEFAULT_RULES_PATH) == DEFAULT_RULES

    def test_partial_override(self, tmp_path):
        """Test missing keys keep their defaults."""
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("battle_rules:\n  max_turns: 20\n  random_event_chance: 0.0\n")

        rules = load_battle_rules(rules_file)

        assert rules.max_turns == 20
        assert rules.random_event_chance == 0.0
        assert rules.crit_chance == DEFAULT_RULES.crit_chance

    def test_empty_section(self, tmp_path):
        """Test an empty section yields the defaults."""
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("battle_rules:\n")
        assert load_battle_rules(rules_file) == DEFAULT_RULES

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_battle_rules(tmp_path / "nope.yaml")

    def test_missing_section(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("something_else: 1\n")
        with pytest.raises(KeyError):
            load_battle_rules(rules_file)

    def test_unknown_key(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("battle_rules:\n  crit_chanse: 0.2\n")
        with pytest.raises(KeyError, match="crit_chanse"):
            load_battle_rules(rules_file)

    def test_invalid_value(self, tmp_path):
        rules_file = tmp_path / "rules.yaml"
        rules_file.write_text("battle_rules:\n  max_dodge_chance: 2.0\n")
        with pytest.raises(ValueError):
            load_battle_rules(rules_file)
