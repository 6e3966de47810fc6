"""Game systems package."""
from .trail_system import TrailSystem
from .kinematics import KinematicsSystem, advance
from .capture import CaptureResolver, PolygonContainment, HitTestContainment

__all__ = [
    "TrailSystem", "KinematicsSystem", "advance",
    "CaptureResolver", "PolygonContainment", "HitTestContainment",
]
