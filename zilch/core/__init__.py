"""Core engine: entities, events and geometry."""
from .ecs import Entity, Component, System, EntityManager
from .events import EventBus, Event
from .geometry import Point, intersect, distance_squared, distance_to_segment_squared, point_in_polygon
from .system_priority import SystemPriority

__all__ = [
    'Entity', 'Component', 'System', 'EntityManager',
    'EventBus', 'Event',
    'Point', 'intersect', 'distance_squared', 'distance_to_segment_squared', 'point_in_polygon',
    'SystemPriority',
]
