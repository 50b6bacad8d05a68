"""
Basic test fixtures for the boss battle test suite.

Provides shared fixtures for the engine, the event bus and sample bosses.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from bossbattle.core.events.event_manager import EventManager
from bossbattle.game.battle.battle_engine import BattleEngine
from bossbattle.game.battle.battle_rules import DEFAULT_RULES
from tests.test_utils import ScriptedRandom, make_boss


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def rules():
    """The built-in battle rules."""
    return DEFAULT_RULES


@pytest.fixture
def engine():
    """An engine without an event bus."""
    return BattleEngine()


@pytest.fixture
def quiet_rng():
    """Random source where nothing ever triggers: no events, dodges or crits."""
    return ScriptedRandom()


@pytest.fixture
def striker():
    """Slow heavy hitter with OVERLOAD STRIKE."""
    return make_boss("Alpha", hp=100, attack=60, speed=40, special_id=1)


@pytest.fixture
def skirmisher():
    """Fast light hitter with TRUE BREAKER."""
    return make_boss("Beta", hp=100, attack=40, speed=60, special_id=3)


@pytest.fixture
def sample_bosses():
    """Four valid bosses for roster and tournament tests."""
    return [
        make_boss("Gravemaw", hp=100, attack=55, speed=45, special_id=6),
        make_boss("Ashen Regent", hp=90, attack=70, speed=40, special_id=1),
        make_boss("Miregeist", hp=80, attack=45, speed=75, special_id=9),
        make_boss("Iron Widow", hp=120, attack=40, speed=40, special_id=4),
    ]
