"""Tests for pointer input and the drag state machine."""
import pygame
import pytest

from zilch.core.geometry import Point
from zilch.ui.camera import Viewport
from zilch.ui.input import (
    DragEnd, DragMove, DragStart, InputAction, InputController, PointerAdapter,
)


def mouse(event_type, pos=(0, 0), button=1):
    if event_type == pygame.MOUSEMOTION:
        return pygame.event.Event(event_type, pos=pos)
    return pygame.event.Event(event_type, pos=pos, button=button)


class TestInputController:
    """Tests for the Idle/Dragging state machine."""

    def test_press_outside_spark_ignored(self, level):
        controller = InputController(level)

        controller.handle(DragStart(Point(160 + 7, 120)))

        assert not controller.dragging

    def test_press_on_spark_starts_drag(self, level):
        controller = InputController(level)

        controller.handle(DragStart(Point(163, 124)))

        assert controller.dragging
        assert controller.drag.grab_offset == Point(3, 4)

    def test_move_keeps_grab_offset(self, level):
        controller = InputController(level)
        controller.handle(DragStart(Point(163, 124)))

        controller.handle(DragMove(Point(103, 54)))

        spark = level.spark_sprite
        assert (spark.x, spark.y) == (100, 50)
        assert level.trail.polygon == [Point(100, 50)]

    def test_move_clamped_to_arena(self, level):
        controller = InputController(level)
        controller.handle(DragStart(Point(160, 120)))

        controller.handle(DragMove(Point(-40, 500)))

        spark = level.spark_sprite
        assert (spark.x, spark.y) == (0, 240)

    def test_move_while_idle_ignored(self, level):
        controller = InputController(level)

        controller.handle(DragMove(Point(10, 10)))

        assert level.trail.points == []
        assert level.spark_sprite.x == 160

    def test_release_clears_trail(self, level):
        controller = InputController(level)
        controller.handle(DragStart(Point(160, 120)))
        controller.handle(DragMove(Point(100, 100)))
        controller.handle(DragMove(Point(120, 100)))

        controller.handle(DragEnd())

        assert not controller.dragging
        assert level.trail.points == []

    def test_new_drag_clears_old_trail(self, level):
        controller = InputController(level)
        now = level.clock.now()
        level.trail.append(10, 10, now)

        controller.handle(DragStart(Point(160, 120)))

        assert level.trail.points == []

    def test_dead_spark_ignores_input(self, level, place_enemy):
        controller = InputController(level)
        enemy = place_enemy(level, 20, 20)
        level.kill_spark(enemy)

        controller.handle(DragStart(Point(160, 120)))
        controller.handle(DragMove(Point(100, 100)))

        assert not controller.dragging
        assert level.trail.points == []

    def test_spark_jitters_when_moved(self, level):
        controller = InputController(level)
        controller.handle(DragStart(Point(160, 120)))

        controller.handle(DragMove(Point(100, 100)))

        _, _, rotate, _ = level.presentation.transforms[level.spark_sprite.handle]
        assert -15 <= rotate <= 15


class TestPointerAdapter:
    """Tests for converting pygame events to drag commands."""

    @pytest.fixture
    def adapter(self):
        return PointerAdapter(Viewport(320, 240, 3))

    def test_mouse_press_mapped_to_arena(self, adapter):
        commands = []
        adapter.register_callback(InputAction.DRAG_START, commands.append)

        adapter.process_events([mouse(pygame.MOUSEBUTTONDOWN, pos=(480, 360))])

        assert commands == [DragStart(Point(160, 120))]

    def test_other_buttons_ignored(self, adapter):
        commands = []
        adapter.register_callback(InputAction.DRAG_START, commands.append)

        adapter.process_events([mouse(pygame.MOUSEBUTTONDOWN, pos=(480, 360), button=3)])

        assert commands == []

    def test_finger_mapped_from_normalized(self, adapter):
        commands = []
        adapter.register_callback(InputAction.DRAG_START, commands.append)

        adapter.process_events([pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5)])

        assert commands == [DragStart(Point(160, 120))]

    def test_quit(self, adapter):
        assert not adapter.process_events([pygame.event.Event(pygame.QUIT)])

    def test_escape_quits(self, adapter):
        assert not adapter.process_events([pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)])

    def test_listeners_only_while_dragging(self, level, adapter):
        controller = InputController(level, adapter)
        assert not adapter.has_listeners(InputAction.DRAG_MOVE)

        adapter.process_events([mouse(pygame.MOUSEBUTTONDOWN, pos=(480, 360))])

        assert controller.dragging
        assert adapter.has_listeners(InputAction.DRAG_MOVE)
        assert adapter.has_listeners(InputAction.DRAG_END)

        adapter.process_events([mouse(pygame.MOUSEBUTTONUP, pos=(480, 360))])

        assert not controller.dragging
        assert not adapter.has_listeners(InputAction.DRAG_MOVE)
        assert not adapter.has_listeners(InputAction.DRAG_END)

    def test_full_drag_through_events(self, level, adapter):
        InputController(level, adapter)

        adapter.process_events([
            mouse(pygame.MOUSEBUTTONDOWN, pos=(480, 360)),
            mouse(pygame.MOUSEMOTION, pos=(300, 300)),
        ])

        spark = level.spark_sprite
        assert (spark.x, spark.y) == (100, 100)
        assert level.trail.polygon == [Point(100, 100)]

    def test_motion_ignored_while_idle(self, level, adapter):
        InputController(level, adapter)

        adapter.process_events([mouse(pygame.MOUSEMOTION, pos=(300, 300))])

        assert level.spark_sprite.x == 160
        assert level.trail.points == []
