"""Pygame presentation layer."""
from __future__ import annotations
import math
import random
from dataclasses import dataclass, field
from typing import Sequence
import pygame

from ..config import COLORS
from ..core.geometry import Point, clamp, distance_squared, point_in_polygon
from ..entities.sprites import Shape, ShapeKind
from .camera import Viewport

SPOKE_COUNT = 8


@dataclass
class Drawable:
    """What the renderer knows about one drawn element."""
    shape: Shape
    x: float = 0.0
    y: float = 0.0
    rotate: float = 0.0
    scale: float = 1.0
    points: list[Point] = field(default_factory=list)
    filled: bool = False


@dataclass
class Spoke:
    """One flickering ray of the spark."""
    inner: float = 2.0
    outer: float = 4.0
    color: tuple[int, int, int] = (255, 255, 0)
    opacity: float = 1.0


class PygameRenderer:
    """Draws the engine's drawables onto a pygame surface.

    Handles are integers; drawing order is creation order, so the trail
    sits under the sprites. Only the spark and a filled trail take part
    in hit-testing.
    """

    def __init__(self, screen: pygame.Surface, viewport: Viewport,
                 rng: random.Random | None = None) -> None:
        self.screen = screen
        self.viewport = viewport
        self.rng = rng or random.Random()
        self._drawables: dict[int, Drawable] = {}
        self._next_handle = 0
        self.spokes = [Spoke() for _ in range(SPOKE_COUNT)]

    # Presentation interface

    def create_shape(self, shape: Shape) -> int:
        self._next_handle += 1
        self._drawables[self._next_handle] = Drawable(shape=shape)
        return self._next_handle

    def set_transform(self, handle: int, x: float, y: float, rotate: float, scale: float) -> None:
        drawable = self._drawables.get(handle)
        if drawable:
            drawable.x, drawable.y = x, y
            drawable.rotate, drawable.scale = rotate, scale

    def set_polyline(self, handle: int, points: Sequence[Point]) -> None:
        drawable = self._drawables.get(handle)
        if drawable:
            drawable.points = list(points)

    def set_fill(self, handle: int, on: bool) -> None:
        drawable = self._drawables.get(handle)
        if drawable:
            drawable.filled = on

    def detach(self, handle: int) -> None:
        self._drawables.pop(handle, None)

    def hit_test(self, x: float, y: float) -> int | None:
        """Return the topmost interactive drawable at an arena point."""
        p = Point(x, y)
        for handle in reversed(list(self._drawables)):
            drawable = self._drawables[handle]
            kind = drawable.shape.kind
            if kind == ShapeKind.SPARK:
                radius = drawable.shape.size * drawable.scale
                if distance_squared(p, Point(drawable.x, drawable.y)) <= radius * radius:
                    return handle
            elif kind == ShapeKind.TRAIL and drawable.filled:
                if point_in_polygon(p, drawable.points):
                    return handle
        return None

    def refresh_decorations(self) -> None:
        """Make the spark's spokes flicker."""
        for spoke in self.spokes:
            spoke.inner = 2 + self.rng.random() * 2
            spoke.outer = 4 + self.rng.random() * 4
            spoke.color = self.rng.choice(COLORS['spokes'])
            spoke.opacity = clamp(self.rng.random() * 1.5, 0, 1)

    # Drawing

    def render(self) -> None:
        """Draw every attached drawable."""
        self.screen.fill(COLORS['background'])
        for drawable in self._drawables.values():
            kind = drawable.shape.kind
            if kind == ShapeKind.TRAIL:
                self._render_trail(drawable)
            elif kind == ShapeKind.SPARK:
                self._render_spark(drawable)
            elif kind == ShapeKind.CIRCLE:
                center = self.viewport.arena_to_screen(drawable.x, drawable.y)
                radius = max(1, int(drawable.shape.size * drawable.scale * self.viewport.scale))
                pygame.draw.circle(self.screen, drawable.shape.color, center, radius)
            else:
                pygame.draw.polygon(self.screen, drawable.shape.color, self._outline(drawable))

    def _render_trail(self, drawable: Drawable) -> None:
        if len(drawable.points) < 2:
            return
        screen_points = [self.viewport.arena_to_screen(p.x, p.y) for p in drawable.points]
        if drawable.filled and len(screen_points) >= 3:
            pygame.draw.polygon(self.screen, COLORS['trail_fill'], screen_points)
        pygame.draw.lines(self.screen, drawable.shape.color, drawable.filled, screen_points, 2)

    def _render_spark(self, drawable: Drawable) -> None:
        scale = self.viewport.scale
        cx, cy = self.viewport.arena_to_screen(drawable.x, drawable.y)
        for i, spoke in enumerate(self.spokes):
            # Faint spokes are skipped rather than alpha-blended
            if spoke.opacity < 0.3:
                continue
            angle = math.radians(drawable.rotate + i * 360 / len(self.spokes))
            dx, dy = math.cos(angle) * scale, math.sin(angle) * scale
            start = (cx + dx * spoke.inner, cy + dy * spoke.inner)
            end = (cx + dx * spoke.outer, cy + dy * spoke.outer)
            pygame.draw.line(self.screen, spoke.color, start, end, 2)
        pygame.draw.circle(self.screen, drawable.shape.color, (cx, cy), max(2, int(scale * 1.5)))

    def _outline(self, drawable: Drawable) -> list[tuple[int, int]]:
        """Vertices of a polygon or star drawable in screen coordinates."""
        shape = drawable.shape
        base = shape.phase * 2 * math.pi + math.radians(drawable.rotate)
        if shape.kind == ShapeKind.STAR:
            count = shape.sides * 2
            radii = [shape.size if i % 2 == 0 else shape.inner for i in range(count)]
        else:
            count = max(3, shape.sides)
            radii = [shape.size] * count

        points = []
        for i in range(count):
            angle = base + i * 2 * math.pi / count
            r = radii[i] * drawable.scale
            points.append(self.viewport.arena_to_screen(
                drawable.x + r * math.cos(angle), drawable.y + r * math.sin(angle)))
        return points
