"""Trail component: the decaying polyline drawn by dragging the spark."""
from __future__ import annotations
from dataclasses import dataclass, field

from ..config import TRAIL_TTL, TRAIL_FREEZE, DISTANCE_THRESHOLD
from ..core.ecs import Component
from ..core.geometry import Point, distance_squared, distance_to_segment_squared, intersect


@dataclass
class TrailPoint:
    """A single point in the trail."""
    x: float
    y: float
    added_at: float  # Clock time when the point was recorded


@dataclass(frozen=True)
class Closure:
    """Where the newest trail segment crossed an earlier one."""
    point: Point
    index: int  # First loop vertex, i.e. the end point of the crossed segment


@dataclass
class Trail(Component):
    """The spark's trail.

    Points are kept in append order. Once a loop closes the trail is
    frozen: it neither grows nor ages until the freeze window elapses,
    at which point it is cleared in one step.
    """
    points: list[TrailPoint] = field(default_factory=list)
    frozen_at: float | None = None
    ttl: float = TRAIL_TTL
    freeze_duration: float = TRAIL_FREEZE
    distance_threshold: float = DISTANCE_THRESHOLD

    @property
    def frozen(self) -> bool:
        """True while a closed loop is being held on screen."""
        return self.frozen_at is not None

    @property
    def polygon(self) -> list[Point]:
        """The trail as plain points."""
        return [Point(p.x, p.y) for p in self.points]

    def clear(self) -> None:
        """Drop every point and unfreeze."""
        self.points = []
        self.frozen_at = None

    def append(self, x: float, y: float, now: float) -> Closure | None:
        """Add a point to the trail and check whether it closed a loop.

        A point closer than the distance threshold to the previous one
        replaces it, so near-zero segments never register as crossings.

        Returns:
            The closure if the new segment crossed an earlier one, else None
        """
        if self.frozen:
            return None

        point = TrailPoint(x=x, y=y, added_at=now)
        if self.points and distance_squared(point, self.points[-1]) < self.distance_threshold:
            self.points.pop()
        self.points.append(point)

        closure = self.detect_closure()
        if closure:
            self.frozen_at = now
            self.points = self.points[closure.index:]
            self.points[-1] = TrailPoint(x=closure.point.x, y=closure.point.y, added_at=now)
        return closure

    def detect_closure(self) -> Closure | None:
        """Test the newest segment against every earlier, non-adjacent segment.

        Earlier segments never cross each other: a crossing freezes the
        trail, so only the newest segment needs testing.
        """
        n = len(self.points)
        if n < 4:
            return None

        newest, previous = self.points[n - 1], self.points[n - 2]
        for i in range(n - 3):
            p = intersect(newest, previous, self.points[i], self.points[i + 1])
            if p is not None:
                return Closure(point=p, index=i + 1)
        return None

    def age(self, now: float) -> bool:
        """Drop expired points, or release the trail once its freeze window ends.

        Returns:
            True if a frozen trail was released by this call
        """
        released = False
        if self.frozen_at is not None:
            if now - self.frozen_at <= self.freeze_duration:
                return False
            self.clear()
            released = True

        self.points = [p for p in self.points if now - p.added_at < self.ttl]
        return released

    def cut_by(self, x: float, y: float, radius: float) -> bool:
        """Check whether a circle at (x, y) touches any trail segment."""
        center = Point(x, y)
        limit = radius * radius
        for i in range(len(self.points) - 1):
            if distance_to_segment_squared(center, self.points[i], self.points[i + 1]) < limit:
                return True
        return False
