"""Pointer input: pygame events to drag commands, and the drag state machine."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Union
import pygame

from ..core.geometry import Point, clamp, distance_squared

if TYPE_CHECKING:
    from .camera import Viewport
    from ..core.level import Level


@dataclass(frozen=True)
class DragStart:
    """Pointer pressed at pos (arena coordinates)."""
    pos: Point


@dataclass(frozen=True)
class DragMove:
    """Pointer moved to pos (arena coordinates)."""
    pos: Point


@dataclass(frozen=True)
class DragEnd:
    """Pointer released."""
    pass


DragCommand = Union[DragStart, DragMove, DragEnd]


class InputAction(Enum):
    """Input actions that can be triggered."""
    DRAG_START = "drag_start"
    DRAG_MOVE = "drag_move"
    DRAG_END = "drag_end"


class PointerAdapter:
    """Converts pygame mouse and touch events into drag commands.

    Mouse positions are mapped through the viewport; touch events arrive
    normalized to [0, 1] and are scaled to the arena.
    """

    def __init__(self, viewport: Viewport) -> None:
        self.viewport = viewport
        self._callbacks: dict[InputAction, list[Callable]] = {}

    def register_callback(self, action: InputAction, callback: Callable) -> None:
        """Register a callback for an input action."""
        if action not in self._callbacks:
            self._callbacks[action] = []
        self._callbacks[action].append(callback)

    def unregister_callback(self, action: InputAction, callback: Callable) -> None:
        """Remove a previously registered callback."""
        callbacks = self._callbacks.get(action, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def has_listeners(self, action: InputAction) -> bool:
        """Check if anything listens for an action."""
        return bool(self._callbacks.get(action))

    def _fire_action(self, action: InputAction, *args) -> None:
        """Fire callbacks for an action."""
        for callback in list(self._callbacks.get(action, [])):
            callback(*args)

    def process_events(self, events: list[pygame.event.Event]) -> bool:
        """Process pygame events and fire drag commands.

        Returns:
            False if quit was requested, True otherwise
        """
        for event in events:
            if event.type == pygame.QUIT:
                return False

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return False

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._fire_action(InputAction.DRAG_START, DragStart(self._mouse_point(event)))

            elif event.type == pygame.MOUSEMOTION:
                # Motion is only converted while someone is dragging
                if self.has_listeners(InputAction.DRAG_MOVE):
                    self._fire_action(InputAction.DRAG_MOVE, DragMove(self._mouse_point(event)))

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._fire_action(InputAction.DRAG_END, DragEnd())

            elif event.type == pygame.FINGERDOWN:
                self._fire_action(InputAction.DRAG_START, DragStart(self._finger_point(event)))

            elif event.type == pygame.FINGERMOTION:
                if self.has_listeners(InputAction.DRAG_MOVE):
                    self._fire_action(InputAction.DRAG_MOVE, DragMove(self._finger_point(event)))

            elif event.type == pygame.FINGERUP:
                self._fire_action(InputAction.DRAG_END, DragEnd())

        return True

    def _mouse_point(self, event: pygame.event.Event) -> Point:
        return Point(*self.viewport.screen_to_arena(event.pos[0], event.pos[1]))

    def _finger_point(self, event: pygame.event.Event) -> Point:
        return Point(*self.viewport.normalized_to_arena(event.x, event.y))


@dataclass
class DragState:
    """An active drag of the spark."""
    grab_offset: Point  # Pointer position minus spark position at drag start


class InputController:
    """Idle/Dragging state machine driving the spark and the trail.

    Move and end listeners are only installed on the adapter while a drag
    is in progress. Nothing happens once the spark is dead.
    """

    def __init__(self, level: Level, adapter: PointerAdapter | None = None) -> None:
        self.level = level
        self.adapter = adapter
        self.drag: DragState | None = None
        if adapter:
            adapter.register_callback(InputAction.DRAG_START, self.handle)

    @property
    def dragging(self) -> bool:
        """True while the spark is being dragged."""
        return self.drag is not None

    def handle(self, command: DragCommand) -> None:
        """Apply one drag command."""
        if not self.level.spark.alive:
            return

        if isinstance(command, DragStart):
            self._start(command.pos)
        elif isinstance(command, DragMove):
            self._move(command.pos)
        elif isinstance(command, DragEnd):
            self._end()

    def _start(self, pos: Point) -> None:
        if self.drag is not None:
            return

        spark = self.level.spark
        spark_pos = self.level.spark_sprite
        if distance_squared(pos, spark_pos) > spark.radius * spark.radius:
            return

        self.drag = DragState(grab_offset=Point(pos.x - spark_pos.x, pos.y - spark_pos.y))
        self.level.clear_trail()
        if self.adapter:
            self.adapter.register_callback(InputAction.DRAG_MOVE, self.handle)
            self.adapter.register_callback(InputAction.DRAG_END, self.handle)

    def _move(self, pos: Point) -> None:
        if self.drag is None:
            return

        level = self.level
        x = clamp(pos.x - self.drag.grab_offset.x, 0, level.width)
        y = clamp(pos.y - self.drag.grab_offset.y, 0, level.height)
        level.move_spark(x, y)
        level.grow_trail(x, y)

    def _end(self) -> None:
        if self.drag is None:
            return

        self.drag = None
        self.level.clear_trail()
        if self.adapter:
            self.adapter.unregister_callback(InputAction.DRAG_MOVE, self.handle)
            self.adapter.unregister_callback(InputAction.DRAG_END, self.handle)
