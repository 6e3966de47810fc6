"""Game constants and configuration.

Arena coordinates are abstract units; the renderer scales them to pixels.
Times are in seconds.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

# Display settings
SCREEN_SCALE = 3  # Pixels per arena unit
FPS = 60
TITLE = "Zilch"

# Arena
ARENA_WIDTH = 320
ARENA_HEIGHT = 240

# Trail settings
DISTANCE_THRESHOLD = 1.0  # Squared distance below which a new trail point replaces the last
TRAIL_TTL = 0.9  # Seconds a trail point survives
TRAIL_FREEZE = 0.25  # Seconds a closed loop stays on screen before clearing

# Spark settings
SPARK_RADIUS = 6.0  # Kill radius and drag grab tolerance

# Enemy settings
ENEMY_COUNT = 6
ENEMY_RADIUS = 4.0
ENEMY_SPEED = 60.0
ENEMY_SPIN_MIN = 60  # Degrees per second
ENEMY_SPIN_MAX = 200
PARTICLES_PER_ENEMY = 0
PARTICLE_RADIUS = 1.0
PARTICLE_SPEED = 50.0

# Enemy palette
ENEMY_COLORS = {
    'silver': (192, 192, 192),
    'white': (255, 255, 255),
    'maroon': (128, 0, 0),
    'red': (255, 0, 0),
    'purple': (128, 0, 128),
    'fuchsia': (255, 0, 255),
    'green': (0, 128, 0),
    'lime': (0, 255, 0),
    'navy': (0, 0, 128),
    'blue': (0, 0, 255),
    'teal': (0, 128, 128),
    'aqua': (0, 255, 255),
}

# Colors
COLORS = {
    'background': (0, 0, 0),
    'trail': (255, 255, 255),
    'trail_fill': (255, 255, 0),
    'spark': (255, 200, 60),
    'spokes': [(255, 0, 0), (255, 255, 0), (255, 165, 0)],
    'game_over': (255, 80, 80),
}


class ConfigError(ValueError):
    """Raised when a GameConfig holds values the engine cannot run with."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid game configuration: " + "; ".join(problems))


@dataclass
class GameConfig:
    """Runtime game configuration."""
    arena_width: float = ARENA_WIDTH
    arena_height: float = ARENA_HEIGHT
    screen_scale: int = SCREEN_SCALE
    fps: int = FPS
    trail_ttl: float = TRAIL_TTL
    trail_freeze: float = TRAIL_FREEZE
    distance_threshold: float = DISTANCE_THRESHOLD
    spark_radius: float = SPARK_RADIUS
    enemy_count: int = ENEMY_COUNT
    enemy_radius: float = ENEMY_RADIUS
    enemy_speed: float = ENEMY_SPEED
    particles_per_enemy: int = PARTICLES_PER_ENEMY
    containment: str = "polygon"  # "polygon" or "hit_test"
    seed: int | None = None

    def validate(self) -> GameConfig:
        """Check the configuration, raising ConfigError listing every problem.

        Returns:
            self, so calls can be chained
        """
        problems = []

        for name in ("arena_width", "arena_height", "trail_ttl", "trail_freeze",
                     "spark_radius", "enemy_radius"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                problems.append(f"{name} must be a positive number, got {value!r}")

        for name in ("distance_threshold", "enemy_speed"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                problems.append(f"{name} must be a non-negative number, got {value!r}")

        if self.fps <= 0:
            problems.append(f"fps must be positive, got {self.fps!r}")
        if self.screen_scale <= 0:
            problems.append(f"screen_scale must be positive, got {self.screen_scale!r}")
        if self.enemy_count < 0:
            problems.append(f"enemy_count must not be negative, got {self.enemy_count!r}")
        if self.particles_per_enemy < 0:
            problems.append(
                f"particles_per_enemy must not be negative, got {self.particles_per_enemy!r}")
        if self.containment not in ("polygon", "hit_test"):
            problems.append(f"containment must be 'polygon' or 'hit_test', got {self.containment!r}")

        if not problems and (self.enemy_radius * 2 >= self.arena_width
                             or self.enemy_radius * 2 >= self.arena_height):
            problems.append("enemy_radius does not fit inside the arena")

        if problems:
            raise ConfigError(problems)
        return self
