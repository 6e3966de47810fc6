"""The narrow interface the engine draws through.

The engine keeps every piece of game state itself; a presentation only
receives draw calls and answers hit-test queries.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Any, Protocol, Sequence

if TYPE_CHECKING:
    from ..core.geometry import Point
    from ..entities.sprites import Shape


class Presentation(Protocol):
    """Output side of the game."""

    def create_shape(self, shape: Shape) -> Any:
        """Create a drawable and return an opaque handle for it."""
        ...

    def set_transform(self, handle: Any, x: float, y: float, rotate: float, scale: float) -> None:
        """Place a drawable: translate, then rotate (degrees), then scale."""
        ...

    def set_polyline(self, handle: Any, points: Sequence[Point]) -> None:
        """Set the points of a polyline drawable (the trail)."""
        ...

    def set_fill(self, handle: Any, on: bool) -> None:
        """Show or hide the fill of a polyline drawable."""
        ...

    def detach(self, handle: Any) -> None:
        """Remove a drawable."""
        ...

    def hit_test(self, x: float, y: float) -> Any:
        """Return the topmost drawable at an arena point, or None."""
        ...

    def refresh_decorations(self) -> None:
        """Per-frame cosmetic updates that carry no game state."""
        ...


class NullPresentation:
    """Presentation that draws nothing. Used headless and in tests.

    It still tracks which handles are attached and the last polyline and
    fill state, which is enough to observe what the engine asked for.
    """

    def __init__(self) -> None:
        self._next_handle = 0
        self.attached: set[int] = set()
        self.transforms: dict[int, tuple[float, float, float, float]] = {}
        self.polylines: dict[int, list[Point]] = {}
        self.filled: dict[int, bool] = {}

    def create_shape(self, shape: Shape) -> int:
        self._next_handle += 1
        self.attached.add(self._next_handle)
        return self._next_handle

    def set_transform(self, handle: int, x: float, y: float, rotate: float, scale: float) -> None:
        self.transforms[handle] = (x, y, rotate, scale)

    def set_polyline(self, handle: int, points: Sequence[Point]) -> None:
        self.polylines[handle] = list(points)

    def set_fill(self, handle: int, on: bool) -> None:
        self.filled[handle] = on

    def detach(self, handle: int) -> None:
        self.attached.discard(handle)
        self.transforms.pop(handle, None)

    def hit_test(self, x: float, y: float) -> None:
        return None

    def refresh_decorations(self) -> None:
        pass
