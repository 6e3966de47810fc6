"""Sprite kinematics: integration, wall bounces and contact checks."""
from __future__ import annotations
import math
from typing import TYPE_CHECKING

from ..core.ecs import Entity, EntityManager, System
from ..core.geometry import clamp, distance_squared
from ..core.system_priority import SystemPriority
from ..entities.sprites import Enemy, Sprite

if TYPE_CHECKING:
    from ..core.level import Level


def advance(sprite: Sprite, dt: float, width: float, height: float) -> None:
    """Integrate one step of motion and bounce off the arena walls.

    Only one axis reflects per step: a corner hit flips the horizontal
    heading and leaves the vertical one for the next step.
    """
    sprite.v = clamp(sprite.v + sprite.a * dt, sprite.v_min, sprite.v_max)
    sprite.h += sprite.vh * dt
    sprite.r += sprite.vr * dt

    theta = sprite.heading_radians
    sprite.x += sprite.v * math.cos(theta) * dt
    sprite.y += sprite.v * math.sin(theta) * dt

    radius = sprite.radius
    if sprite.x < radius or sprite.x > width - radius:
        sprite.h = 180 - sprite.h
    elif sprite.y < radius or sprite.y > height - radius:
        sprite.h = -sprite.h

    sprite.x = clamp(sprite.x, radius, width - radius)
    sprite.y = clamp(sprite.y, radius, height - radius)


class KinematicsSystem(System):
    """Moves every enemy sprite and resolves its contacts.

    A full enemy touching the spark ends the round; touching the trail
    cuts it. Particles only move.
    """

    priority = SystemPriority.KINEMATICS

    def __init__(self, level: Level) -> None:
        self.level = level

    def update(self, dt: float, now: float, entity_manager: EntityManager) -> None:
        """Advance every enemy in creation order."""
        for entity, enemy in entity_manager.get_all_components(Enemy):
            if entity_manager.is_pending_destroy(entity):
                continue
            sprite = entity_manager.get_component(entity, Sprite)
            if sprite:
                self.update_sprite(entity, enemy, sprite, dt)

    def update_sprite(self, entity: Entity, enemy: Enemy, sprite: Sprite, dt: float) -> None:
        """Move one sprite, draw it, then check it against the spark and trail."""
        level = self.level
        advance(sprite, dt, level.width, level.height)
        level.presentation.set_transform(sprite.handle, sprite.x, sprite.y, sprite.r, sprite.s)

        if enemy.particle:
            return

        spark = level.spark
        if spark.alive and distance_squared(sprite, level.spark_sprite) < spark.radius * spark.radius:
            level.kill_spark(entity)

        if level.trail.cut_by(sprite.x, sprite.y, sprite.radius):
            level.cut_trail(entity)
