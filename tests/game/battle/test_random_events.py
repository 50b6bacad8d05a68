"""
Unit tests for the random event catalog.
"""

from bossbattle.core.data import EventScope
from bossbattle.game.battle.random_events import EVENTS_BY_NAME, RANDOM_EVENTS
from tests.test_utils import make_state


class TestRandomEventCatalog:
    """Test catalog order and scopes."""

    def test_catalog_order(self):
        """Test the draw order of the six events."""
        assert [e.name for e in RANDOM_EVENTS] == [
            "SOLAR FLARE",
            "ADRENALINE RUSH",
            "EARTHQUAKE",
            "HEALING MIST",
            "SPEED BOOST",
            "POWER DRAIN",
        ]

    def test_scopes(self):
        """Test which events hit both sides."""
        both = {e.name for e in RANDOM_EVENTS if e.scope == EventScope.BOTH}
        assert both == {"SOLAR FLARE", "EARTHQUAKE"}

    def test_one_sided_events_announce(self):
        """Test every one-sided event has an announcement template."""
        for event in RANDOM_EVENTS:
            if event.scope == EventScope.ONE_SIDE:
                assert "{name}" in event.announcement


class TestRandomEventEffects:
    """Test the effect of each event on one combat state."""

    def test_solar_flare(self):
        fighter = make_state(hp=100)
        EVENTS_BY_NAME["SOLAR FLARE"].apply(fighter)
        assert fighter.current_hp == 95

    def test_earthquake_can_knock_out(self):
        """Test EARTHQUAKE may drop HP to zero or below."""
        fighter = make_state(hp=100)
        fighter.current_hp = 8
        EVENTS_BY_NAME["EARTHQUAKE"].apply(fighter)
        assert fighter.current_hp == 0
        assert not fighter.is_alive

    def test_adrenaline_rush(self):
        fighter = make_state(attack=40)
        EVENTS_BY_NAME["ADRENALINE RUSH"].apply(fighter)
        assert fighter.current_attack == 45

    def test_healing_mist_caps_at_max(self):
        """Test HEALING MIST never heals past max HP."""
        fighter = make_state(hp=100)
        fighter.current_hp = 95
        EVENTS_BY_NAME["HEALING MIST"].apply(fighter)
        assert fighter.current_hp == 100

    def test_healing_mist_trims_overheal(self):
        """Test HP boosted above max is pulled back to max."""
        fighter = make_state(hp=100)
        fighter.current_hp = 125
        EVENTS_BY_NAME["HEALING MIST"].apply(fighter)
        assert fighter.current_hp == 100

    def test_speed_boost(self):
        fighter = make_state(speed=30)
        EVENTS_BY_NAME["SPEED BOOST"].apply(fighter)
        assert fighter.current_speed == 33

    def test_power_drain_floors_at_one(self):
        """Test POWER DRAIN never drops attack below 1."""
        fighter = make_state(attack=4)
        EVENTS_BY_NAME["POWER DRAIN"].apply(fighter)
        assert fighter.current_attack == 1

        fighter.current_attack = 20
        EVENTS_BY_NAME["POWER DRAIN"].apply(fighter)
        assert fighter.current_attack == 15
