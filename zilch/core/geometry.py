"""Plane geometry helpers for trails and sprites.

Everything here is pure: points in, numbers or points out. Segment
intersection uses the cross-product form (see
http://stackoverflow.com/questions/563198/).
"""
from __future__ import annotations
from typing import NamedTuple, Protocol, Sequence


class HasXY(Protocol):
    """Anything with x/y coordinates (points, trail points, sprites)."""
    x: float
    y: float


class Point(NamedTuple):
    """An immutable 2D point."""
    x: float
    y: float


def subtract(u: HasXY, v: HasXY) -> Point:
    """Vector from v to u."""
    return Point(u.x - v.x, u.y - v.y)


def cross(u: HasXY, v: HasXY) -> float:
    """2D cross product (z component of u x v)."""
    return u.x * v.y - u.y * v.x


def intersect(p: HasXY, p2: HasXY, q: HasXY, q2: HasXY) -> Point | None:
    """Intersect segment p-p2 with segment q-q2.

    Returns:
        The intersection point, or None if the segments are parallel or
        do not meet within both segments.
    """
    r = subtract(p2, p)
    s = subtract(q2, q)
    rs = cross(r, s)
    if rs == 0:
        return None

    qp = subtract(q, p)
    t = cross(qp, s) / rs
    if t < 0 or t > 1:
        return None
    u = cross(qp, r) / rs
    if u < 0 or u > 1:
        return None

    return Point(p.x + t * r.x, p.y + t * r.y)


def distance_squared(u: HasXY, v: HasXY) -> float:
    """Squared euclidean distance between two points."""
    dx = u.x - v.x
    dy = u.y - v.y
    return dx * dx + dy * dy


def distance_to_segment_squared(p: HasXY, v: HasXY, w: HasXY) -> float:
    """Squared distance from p to the segment v-w."""
    l2 = distance_squared(v, w)
    if l2 == 0:
        return distance_squared(p, v)

    t = ((p.x - v.x) * (w.x - v.x) + (p.y - v.y) * (w.y - v.y)) / l2
    if t < 0:
        return distance_squared(p, v)
    if t > 1:
        return distance_squared(p, w)
    return distance_squared(p, Point(v.x + t * (w.x - v.x), v.y + t * (w.y - v.y)))


def point_in_polygon(p: HasXY, polygon: Sequence[HasXY]) -> bool:
    """Even-odd test of p against the implicitly closed polygon.

    Edges are treated as half-open in y, so a ray through a vertex is
    counted once. Points exactly on an edge may fall either way.
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        a = polygon[i]
        b = polygon[j]
        if (a.y > p.y) != (b.y > p.y):
            x_cross = a.x + (p.y - a.y) * (b.x - a.x) / (b.y - a.y)
            if p.x < x_cross:
                inside = not inside
        j = i
    return inside


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))
