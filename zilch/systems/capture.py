"""Capture of enemies enclosed by a closed trail loop."""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Protocol, Sequence
from uuid import UUID

from ..core.ecs import Entity
from ..core.events import EnemyCapturedEvent, LoopClosedEvent
from ..core.geometry import Point, point_in_polygon
from ..entities.sprites import Sprite
from ..entities.trails import Trail

if TYPE_CHECKING:
    from ..core.level import Level
    from ..ui.presentation import Presentation

logger = logging.getLogger(__name__)


class Containment(Protocol):
    """Decides whether a sprite's anchor point lies inside a closed loop."""

    def contains(self, polygon: Sequence[Point], sprite: Sprite) -> bool:
        ...


class PolygonContainment:
    """Even-odd point-in-polygon test against the trimmed trail."""

    def contains(self, polygon: Sequence[Point], sprite: Sprite) -> bool:
        return point_in_polygon(Point(sprite.x, sprite.y), polygon)


class HitTestContainment:
    """Asks the presentation which drawable is on top at the sprite's position.

    Depends on draw order. A presentation that fails or answers nothing
    leaves the sprite uncaptured.
    """

    def __init__(self, presentation: Presentation, trail_handle: Any) -> None:
        self.presentation = presentation
        self.trail_handle = trail_handle

    def contains(self, polygon: Sequence[Point], sprite: Sprite) -> bool:
        try:
            hit = self.presentation.hit_test(sprite.x, sprite.y)
        except Exception as e:
            logger.debug("Hit test failed at (%.1f, %.1f): %s", sprite.x, sprite.y, e)
            return False
        return hit is not None and hit == self.trail_handle


class CaptureResolver:
    """Removes every enemy enclosed by a loop, once per closure."""

    def __init__(self, level: Level, containment: Containment | None = None) -> None:
        self.level = level
        self.containment = containment or PolygonContainment()
        level.event_bus.subscribe(LoopClosedEvent, self.on_loop_closed)

    def resolve_captures(self, trail: Trail, sprites: Sequence[tuple[Entity, Sprite]]) -> list[UUID]:
        """Return the ids of the sprites enclosed by the trail.

        Args:
            trail: A trail trimmed to its closed loop
            sprites: (entity, sprite) pairs to test
        """
        polygon = trail.polygon
        if len(polygon) < 3:
            return []

        em = self.level.entity_manager
        return [
            entity.id
            for entity, sprite in sprites
            if not em.is_pending_destroy(entity) and self.containment.contains(polygon, sprite)
        ]

    def on_loop_closed(self, event: LoopClosedEvent) -> None:
        """Capture everything inside the loop that just closed."""
        level = self.level
        em = level.entity_manager
        captured = self.resolve_captures(level.trail, level.sprites)

        for entity_id in reversed(captured):
            entity = em.get_entity(entity_id)
            if entity is None:
                continue
            sprite = em.get_component(entity, Sprite)
            level.destroy_entity(entity)
            logger.info("Captured %s at (%.1f, %.1f)", entity.name, sprite.x, sprite.y)
            level.event_bus.publish(EnemyCapturedEvent(
                entity_id=entity.id,
                entity_name=entity.name,
                x=sprite.x,
                y=sprite.y,
                remaining=level.enemies_left,
            ))
