"""Level state container."""
from __future__ import annotations
import logging
import random
import time
from typing import Any, Callable

from ..config import COLORS, GameConfig
from ..entities.sprites import Enemy, Shape, ShapeKind, Spark, Sprite, create_spark
from ..entities.trails import Closure, Trail
from ..ui.presentation import NullPresentation, Presentation
from .ecs import Entity, EntityManager, System
from .events import (
    EntityCreatedEvent, EntityDestroyedEvent, EventBus, LoopClosedEvent,
    SparkDestroyedEvent, TrailCutEvent,
)

logger = logging.getLogger(__name__)


class FrameClock:
    """Monotonic clock measuring the time between frames."""

    def __init__(self, source: Callable[[], float] = time.monotonic) -> None:
        self._source = source
        self.t0 = source()

    def now(self) -> float:
        """Current clock reading in seconds."""
        return self._source()

    def tick(self) -> tuple[float, float]:
        """Advance to the current time.

        Returns:
            (now, dt) where dt is the time since the previous tick
        """
        now = self._source()
        dt = now - self.t0
        self.t0 = now
        return now, dt


class Level:
    """One round: the arena, the trail, the spark and the enemy sprites.

    Coordinates entities, systems and events, and forwards every visual
    change to the presentation layer.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        presentation: Presentation | None = None,
        clock: FrameClock | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = (config or GameConfig()).validate()
        self.width = self.config.arena_width
        self.height = self.config.arena_height
        self.presentation = presentation or NullPresentation()
        self.clock = clock or FrameClock()
        self.rng = rng or random.Random(self.config.seed)
        self.entity_manager = EntityManager()
        self.event_bus = EventBus()
        self._systems: list[System] = []
        self._drawables: dict[Any, Any] = {}

        self._trail_entity = self.create_entity(name="Trail", tags={"trail"})
        self.entity_manager.add_component(self._trail_entity, Trail(
            ttl=self.config.trail_ttl,
            freeze_duration=self.config.trail_freeze,
            distance_threshold=self.config.distance_threshold,
        ))
        self.trail_handle = self.attach_drawable(
            self._trail_entity, Shape(ShapeKind.TRAIL, COLORS['trail']))

        self._spark_entity = create_spark(
            self, self.width / 2, self.height / 2, self.config.spark_radius)

    def add_system(self, system: System) -> None:
        """Add a per-frame system to the level."""
        self._systems.append(system)
        self._systems.sort(key=lambda s: s.priority)

    def create_entity(self, name: str = "", tags: set[str] | None = None) -> Entity:
        """Create a new entity and fire creation event."""
        entity = self.entity_manager.create_entity(name, tags)
        self.event_bus.publish(EntityCreatedEvent(entity_id=entity.id, entity_name=entity.name))
        return entity

    def attach_drawable(self, entity: Entity, shape: Shape) -> Any:
        """Create the entity's drawable; it is detached when the entity is destroyed."""
        handle = self.presentation.create_shape(shape)
        self._drawables[entity.id] = handle
        return handle

    def destroy_entity(self, entity: Entity) -> None:
        """Destroy an entity, deferred until the end of the frame if one is running."""
        self.entity_manager.destroy_entity(entity)
        if self.entity_manager.get_entity(entity.id) is None:
            self._release(entity)

    def _release(self, entity: Entity) -> None:
        handle = self._drawables.pop(entity.id, None)
        if handle is not None:
            self.presentation.detach(handle)
        self.event_bus.publish(EntityDestroyedEvent(entity_id=entity.id))

    @property
    def trail(self) -> Trail:
        """The level's trail."""
        return self.entity_manager.get_component(self._trail_entity, Trail)

    @property
    def spark(self) -> Spark:
        """The spark's state."""
        return self.entity_manager.get_component(self._spark_entity, Spark)

    @property
    def spark_sprite(self) -> Sprite:
        """The spark's position."""
        return self.entity_manager.get_component(self._spark_entity, Sprite)

    @property
    def sprites(self) -> list[tuple[Entity, Sprite]]:
        """Enemy sprites, particles included, in creation order."""
        em = self.entity_manager
        return [
            (entity, em.get_component(entity, Sprite))
            for entity in em.get_entities_with_tag("enemy")
            if em.has_component(entity, Sprite)
        ]

    @property
    def enemies_left(self) -> int:
        """Enemies still in play, not counting particles or pending removals."""
        em = self.entity_manager
        return sum(
            1 for entity, enemy in em.get_all_components(Enemy)
            if not enemy.particle and not em.is_pending_destroy(entity)
        )

    def move_spark(self, x: float, y: float) -> None:
        """Move the spark, jittering its drawn rotation."""
        sprite = self.spark_sprite
        sprite.x = x
        sprite.y = y
        self.presentation.set_transform(sprite.handle, x, y, self.rng.randint(-15, 15), 1.0)

    def grow_trail(self, x: float, y: float) -> Closure | None:
        """Append a point to the trail and announce a closed loop if it made one."""
        trail = self.trail
        closure = trail.append(x, y, self.clock.now())
        self.sync_trail()
        if closure:
            logger.debug("Loop closed at (%.1f, %.1f) with %d vertices",
                         closure.point.x, closure.point.y, len(trail.points))
            self.event_bus.publish(LoopClosedEvent(
                x=closure.point.x,
                y=closure.point.y,
                start_index=closure.index,
                vertex_count=len(trail.points),
            ))
        return closure

    def clear_trail(self) -> None:
        """Empty and unfreeze the trail."""
        self.trail.clear()
        self.sync_trail()

    def cut_trail(self, enemy: Entity) -> None:
        """An enemy touched the trail: drop its points."""
        self.trail.points = []
        self.sync_trail()
        logger.debug("Trail cut by %s", enemy.name)
        self.event_bus.publish(TrailCutEvent(enemy_id=enemy.id))

    def sync_trail(self) -> None:
        """Push the trail's points and fill state to the presentation."""
        trail = self.trail
        self.presentation.set_polyline(self.trail_handle, trail.polygon)
        self.presentation.set_fill(self.trail_handle, trail.frozen)

    def kill_spark(self, enemy: Entity) -> None:
        """An enemy touched the spark: end the round."""
        spark = self.spark
        if not spark.alive:
            return
        spark.alive = False
        logger.info("Spark destroyed by %s", enemy.name)
        self.event_bus.publish(SparkDestroyedEvent(enemy_id=enemy.id))

    def update(self) -> None:
        """Run one frame: decorations, then every system in priority order."""
        self.presentation.refresh_decorations()
        now, dt = self.clock.tick()

        em = self.entity_manager
        em.begin_pass()
        try:
            for system in self._systems:
                system.update(dt, now, em)
        finally:
            for entity in em.end_pass():
                self._release(entity)

        self.event_bus.process_queue()
        self.sync_trail()
