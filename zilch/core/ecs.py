"""Entity-Component-System base classes."""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TypeVar, Iterator
from uuid import UUID, uuid4


@dataclass
class Component:
    """Base class for all components. Components are pure data containers."""
    pass


C = TypeVar('C', bound=Component)


@dataclass
class Entity:
    """An entity is a unique identifier that groups components together."""
    id: UUID = field(default_factory=uuid4)
    name: str = ""
    tags: set[str] = field(default_factory=set)

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entity):
            return self.id == other.id
        return False


class EntityManager:
    """Manages entities and their components.

    Entities are kept in creation order, which is the order systems see
    them in. Destruction requested while a system pass is running is
    deferred until flush_pending() so iteration is never disturbed.
    """

    def __init__(self) -> None:
        self._entities: dict[UUID, Entity] = {}
        self._components: dict[type[Component], dict[UUID, Component]] = {}
        self._entity_components: dict[UUID, set[type[Component]]] = {}
        self._pending_destroy: list[Entity] = []
        self._iterating: int = 0

    def create_entity(self, name: str = "", tags: set[str] | None = None) -> Entity:
        """Create a new entity."""
        entity = Entity(name=name, tags=tags or set())
        self._entities[entity.id] = entity
        self._entity_components[entity.id] = set()
        return entity

    def destroy_entity(self, entity: Entity) -> None:
        """Remove an entity and all its components.

        Deferred if a system pass is iterating the entities.
        """
        if entity.id not in self._entities:
            return
        if self._iterating:
            if entity not in self._pending_destroy:
                self._pending_destroy.append(entity)
            return

        for component_type in self._entity_components.get(entity.id, set()).copy():
            self.remove_component(entity, component_type)

        del self._entities[entity.id]
        del self._entity_components[entity.id]

    def is_pending_destroy(self, entity: Entity) -> bool:
        """True if the entity is scheduled for removal after the current pass."""
        return entity in self._pending_destroy

    def begin_pass(self) -> None:
        """Mark the start of a system pass; destruction is deferred until it ends."""
        self._iterating += 1

    def end_pass(self) -> list[Entity]:
        """Mark the end of a system pass and flush deferred destruction.

        Returns:
            The entities that were destroyed by the flush
        """
        self._iterating = max(0, self._iterating - 1)
        if self._iterating:
            return []
        return self.flush_pending()

    def flush_pending(self) -> list[Entity]:
        """Destroy every entity whose removal was deferred."""
        pending = self._pending_destroy
        self._pending_destroy = []
        for entity in pending:
            self.destroy_entity(entity)
        return pending

    def add_component(self, entity: Entity, component: Component) -> None:
        """Add a component to an entity."""
        component_type = type(component)

        if component_type not in self._components:
            self._components[component_type] = {}

        self._components[component_type][entity.id] = component
        self._entity_components[entity.id].add(component_type)

    def remove_component(self, entity: Entity, component_type: type[Component]) -> None:
        """Remove a component from an entity."""
        if component_type in self._components:
            self._components[component_type].pop(entity.id, None)
        self._entity_components[entity.id].discard(component_type)

    def get_component(self, entity: Entity, component_type: type[C]) -> C | None:
        """Get a specific component from an entity."""
        if component_type not in self._components:
            return None
        return self._components[component_type].get(entity.id)  # type: ignore

    def has_component(self, entity: Entity, component_type: type[Component]) -> bool:
        """Check if an entity has a specific component."""
        return component_type in self._entity_components.get(entity.id, set())

    def get_entities_with_tag(self, tag: str) -> Iterator[Entity]:
        """Get all entities with a specific tag, in creation order."""
        for entity in list(self._entities.values()):
            if tag in entity.tags:
                yield entity

    def get_all_components(self, component_type: type[C]) -> Iterator[tuple[Entity, C]]:
        """Get all components of a specific type with their entities, in creation order."""
        for entity in list(self._entities.values()):
            component = self.get_component(entity, component_type)
            if component is not None:
                yield entity, component

    def get_entity(self, entity_id: UUID) -> Entity | None:
        """Get an entity by its ID."""
        return self._entities.get(entity_id)

    @property
    def entity_count(self) -> int:
        """Return the number of entities."""
        return len(self._entities)


class System(ABC):
    """Base class for all systems. Systems contain logic that operates on components."""

    priority: int = 0  # Lower numbers run first

    @abstractmethod
    def update(self, dt: float, now: float, entity_manager: EntityManager) -> None:
        """Update the system. Called once per frame.

        Args:
            dt: Seconds since the previous frame
            now: Current monotonic clock reading in seconds
            entity_manager: The entity manager to query for entities/components
        """
        pass
