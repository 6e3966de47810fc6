"""Shared fixtures: a hand-driven clock and a headless level."""
import pytest

from zilch.config import GameConfig
from zilch.core.level import FrameClock
from zilch.entities.sprites import Sprite, create_enemy
from zilch.main import create_level


class ManualClock:
    """Clock source that only moves when told to."""

    def __init__(self, t: float = 100.0) -> None:
        self.t = t

    def __call__(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += dt


def _place_enemy(level, x, y, radius=4.0, name=""):
    """Add a stationary enemy at (x, y)."""
    entity = create_enemy(level, level.rng, position=(x, y), radius=radius, speed=0.0, name=name)
    sprite = level.entity_manager.get_component(entity, Sprite)
    sprite.vr = 0.0
    return entity


@pytest.fixture
def place_enemy():
    """Factory for stationary enemies: place_enemy(level, x, y, radius=4.0)."""
    return _place_enemy


@pytest.fixture
def manual_clock():
    return ManualClock()


@pytest.fixture
def level(manual_clock):
    """A 320x240 level with no random enemies."""
    return create_level(GameConfig(enemy_count=0, seed=7), clock=FrameClock(manual_clock))
