"""Event bus for decoupled communication between systems."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable
from uuid import UUID


@dataclass
class Event:
    """Base class for all events."""
    pass


@dataclass
class EntityCreatedEvent(Event):
    """Fired when an entity is created."""
    entity_id: UUID
    entity_name: str


@dataclass
class EntityDestroyedEvent(Event):
    """Fired when an entity is destroyed."""
    entity_id: UUID


@dataclass
class LoopClosedEvent(Event):
    """Fired when the trail's newest segment crosses an earlier one.

    The trail has already been trimmed to the closed polygon.
    """
    x: float
    y: float
    start_index: int  # Index of the first loop vertex in the untrimmed trail
    vertex_count: int


@dataclass
class EnemyCapturedEvent(Event):
    """Fired when an enemy is enclosed by a closed loop and removed."""
    entity_id: UUID
    entity_name: str
    x: float
    y: float
    remaining: int  # Enemies still in play, particles excluded


@dataclass
class SparkDestroyedEvent(Event):
    """Fired when an enemy touches the spark. Ends the round."""
    enemy_id: UUID


@dataclass
class TrailCutEvent(Event):
    """Fired when an enemy touches the trail and clears it."""
    enemy_id: UUID


@dataclass
class TrailReleasedEvent(Event):
    """Fired when a frozen trail's freeze window elapses and it is cleared."""
    frozen_for: float


EventHandler = Callable[[Event], None]


class EventBus:
    """Central event bus for publishing and subscribing to events."""

    def __init__(self) -> None:
        self._handlers: dict[type[Event], list[EventHandler]] = {}
        self._queued_events: list[Event] = []
        self._processing: bool = False

    def subscribe(self, event_type: type[Event], handler: EventHandler) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        If called during event processing, the event is queued.
        """
        if self._processing:
            self._queued_events.append(event)
            return

        self._dispatch(event)

    def _dispatch(self, event: Event) -> None:
        """Dispatch an event to handlers, including handlers of base classes."""
        for registered_type, handlers in list(self._handlers.items()):
            if isinstance(event, registered_type):
                for handler in list(handlers):
                    handler(event)

    def process_queue(self) -> None:
        """Process all queued events."""
        self._processing = True

        while self._queued_events:
            # Process current queue, new events go to a fresh queue
            current_queue = self._queued_events
            self._queued_events = []

            for event in current_queue:
                self._dispatch(event)

        self._processing = False
