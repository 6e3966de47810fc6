"""Sprite components and factories for the spark and enemies."""
from __future__ import annotations
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..config import (
    ENEMY_COLORS, COLORS, ENEMY_SPIN_MIN, ENEMY_SPIN_MAX,
    PARTICLE_RADIUS, PARTICLE_SPEED,
)
from ..core.ecs import Component, Entity

if TYPE_CHECKING:
    from ..core.level import Level


class ShapeKind(Enum):
    """Drawable shapes the presentation layer knows how to make."""
    CIRCLE = "circle"
    STAR = "star"
    POLYGON = "polygon"
    SPARK = "spark"
    TRAIL = "trail"


@dataclass(frozen=True)
class Shape:
    """Description of a drawable, handed to Presentation.create_shape."""
    kind: ShapeKind
    color: tuple[int, int, int]
    size: float = 4.0  # Outer radius
    sides: int = 0  # Polygon sides or star points
    inner: float = 0.0  # Star inner radius
    phase: float = 0.0  # Starting angle as a fraction of a turn


@dataclass
class Sprite(Component):
    """Position, heading and velocities of a moving body.

    The heading h is in degrees and always normalized to [0, 360).
    """
    x: float = 0.0  # x position
    y: float = 0.0  # y position
    r: float = 0.0  # rotation (degrees)
    s: float = 1.0  # scale
    h: float = 0.0  # heading (degrees)
    a: float = 0.0  # acceleration
    v: float = 0.0  # velocity
    v_min: float = -math.inf  # minimum velocity
    v_max: float = math.inf  # maximum velocity
    vh: float = 0.0  # heading velocity (degrees per second)
    vr: float = 0.0  # rotation velocity (degrees per second)
    radius: float = 0.0
    handle: Any = None  # Presentation drawable, output only

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "h":
            value = value % 360.0
        super().__setattr__(name, value)

    @property
    def heading_radians(self) -> float:
        """Heading in radians."""
        return self.h / 180.0 * math.pi


@dataclass
class Spark(Component):
    """The player-controlled spark. Its death ends the round."""
    radius: float = 6.0  # Kill radius and drag grab tolerance
    alive: bool = True


@dataclass
class Enemy(Component):
    """A roaming sprite that can be captured, kill the spark or cut the trail."""
    color_name: str = "white"
    particle: bool = False  # Decoration only: never kills or cuts


def random_enemy_shape(rng: random.Random, color: tuple[int, int, int], size: float) -> Shape:
    """Pick one of the enemy shapes: a circle, a 5-point star or a 3 to 6 sided polygon."""
    choice = rng.randrange(6)
    if choice == 0:
        return Shape(ShapeKind.CIRCLE, color, size=size)
    if choice == 1:
        return Shape(ShapeKind.STAR, color, size=size + 1, sides=5, inner=size / 2,
                     phase=rng.random())
    return Shape(ShapeKind.POLYGON, color, size=size, sides=choice + 1, phase=rng.random())


def create_spark(level: Level, x: float, y: float, radius: float) -> Entity:
    """Create the spark entity at (x, y)."""
    entity = level.create_entity(name="Spark", tags={"spark"})
    em = level.entity_manager

    sprite = Sprite(x=x, y=y, radius=radius)
    sprite.handle = level.attach_drawable(
        entity, Shape(ShapeKind.SPARK, COLORS['spark'], size=radius))
    em.add_component(entity, sprite)
    em.add_component(entity, Spark(radius=radius))
    level.presentation.set_transform(sprite.handle, x, y, 0.0, 1.0)

    return entity


def create_enemy(
    level: Level,
    rng: random.Random,
    position: tuple[float, float],
    radius: float,
    speed: float,
    name: str = "",
) -> Entity:
    """Create an enemy with a random colour, shape, heading and spin.

    Args:
        level: The level to add the enemy to
        rng: Random source
        position: (x, y) in arena units
        radius: Capture and collision radius
        speed: Initial velocity
        name: Optional entity name

    Returns:
        The created entity
    """
    color_name = rng.choice(list(ENEMY_COLORS))
    shape = random_enemy_shape(rng, ENEMY_COLORS[color_name], radius)

    entity = level.create_entity(name=name or f"Enemy {color_name}", tags={"enemy"})
    em = level.entity_manager

    sprite = Sprite(
        x=position[0], y=position[1],
        h=rng.randint(0, 360),
        v=speed,
        vr=rng.randint(ENEMY_SPIN_MIN, ENEMY_SPIN_MAX),
        radius=radius,
    )
    sprite.handle = level.attach_drawable(entity, shape)
    em.add_component(entity, sprite)
    em.add_component(entity, Enemy(color_name=color_name, particle=radius <= PARTICLE_RADIUS))
    level.presentation.set_transform(sprite.handle, sprite.x, sprite.y, sprite.r, sprite.s)

    return entity


def create_particle(
    level: Level,
    rng: random.Random,
    parent: Entity,
) -> Entity | None:
    """Create a decoration particle trailing from an enemy."""
    em = level.entity_manager
    parent_sprite = em.get_component(parent, Sprite)
    parent_enemy = em.get_component(parent, Enemy)
    if not parent_sprite or not parent_enemy:
        return None

    entity = level.create_entity(name=f"{parent.name} particle", tags={"enemy", "particle"})
    sprite = Sprite(
        x=parent_sprite.x, y=parent_sprite.y,
        h=rng.randint(0, 360),
        v=PARTICLE_SPEED,
        radius=PARTICLE_RADIUS,
    )
    color = ENEMY_COLORS[parent_enemy.color_name]
    sprite.handle = level.attach_drawable(
        entity, Shape(ShapeKind.CIRCLE, color, size=PARTICLE_RADIUS))
    em.add_component(entity, sprite)
    em.add_component(entity, Enemy(color_name=parent_enemy.color_name, particle=True))
    level.presentation.set_transform(sprite.handle, sprite.x, sprite.y, sprite.r, sprite.s)

    return entity
