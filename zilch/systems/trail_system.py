"""Trail system - ages the trail every frame."""
from __future__ import annotations
import logging

from ..core.ecs import System, EntityManager
from ..core.events import EventBus, TrailReleasedEvent
from ..core.system_priority import SystemPriority
from ..entities.trails import Trail

logger = logging.getLogger(__name__)


class TrailSystem(System):
    """Drops expired trail points and releases frozen loops.

    Aging compares clock readings rather than scheduling callbacks, so a
    late frame simply drops more points at once.
    """

    priority = SystemPriority.TRAIL

    def __init__(self, event_bus: EventBus) -> None:
        self.event_bus = event_bus

    def update(self, dt: float, now: float, entity_manager: EntityManager) -> None:
        """Age every trail."""
        for entity, trail in entity_manager.get_all_components(Trail):
            frozen_at = trail.frozen_at
            if trail.age(now):
                logger.debug("Trail released after %.3fs", now - frozen_at)
                self.event_bus.publish(TrailReleasedEvent(frozen_for=now - frozen_at))
