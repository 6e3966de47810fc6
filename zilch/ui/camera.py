"""Viewport mapping between arena units and screen pixels."""
from __future__ import annotations
from dataclasses import dataclass

from ..config import ARENA_WIDTH, ARENA_HEIGHT, SCREEN_SCALE


@dataclass
class Viewport:
    """Fixed view of the whole arena, scaled to the window."""
    arena_width: float = ARENA_WIDTH
    arena_height: float = ARENA_HEIGHT
    scale: float = SCREEN_SCALE

    @property
    def screen_size(self) -> tuple[int, int]:
        """Window size in pixels."""
        return (int(self.arena_width * self.scale), int(self.arena_height * self.scale))

    def arena_to_screen(self, x: float, y: float) -> tuple[int, int]:
        """Convert arena coordinates to screen coordinates (pixels)."""
        return (int(round(x * self.scale)), int(round(y * self.scale)))

    def screen_to_arena(self, screen_x: float, screen_y: float) -> tuple[float, float]:
        """Convert screen coordinates (pixels) to arena coordinates."""
        return (screen_x / self.scale, screen_y / self.scale)

    def normalized_to_arena(self, nx: float, ny: float) -> tuple[float, float]:
        """Convert normalized [0, 1] touch coordinates to arena coordinates."""
        return (nx * self.arena_width, ny * self.arena_height)
