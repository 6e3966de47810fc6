"""System execution priority definitions.

Defines the order in which systems update during a frame.
Lower numbers execute first.
"""
from enum import IntEnum


class SystemPriority(IntEnum):
    """Priority levels for system execution order."""
    # Trail aging runs before sprites move, so cuts test the aged trail
    TRAIL = 10

    # Sprite movement and collisions
    KINEMATICS = 20
