"""Tests for capturing enemies with a closed loop."""
import pytest

from zilch.core.events import EnemyCapturedEvent, LoopClosedEvent
from zilch.core.geometry import Point
from zilch.entities.sprites import Sprite
from zilch.entities.trails import Trail
from zilch.systems.capture import CaptureResolver, HitTestContainment, PolygonContainment
from zilch.ui.input import DragMove, DragStart, InputController


# A loop around (50, 50): the final stroke crosses the first segment at (38, 30)
LOOP = [(30, 30), (70, 30), (70, 70), (30, 70), (40, 20)]


def drag_loop(level, points=LOOP):
    """Grab the spark and drag it along points."""
    controller = InputController(level)
    spark = level.spark_sprite
    controller.handle(DragStart(Point(spark.x, spark.y)))
    for x, y in points:
        controller.handle(DragMove(Point(x, y)))
    return controller


class FakeHitTest:
    """Presentation stub answering hit tests with a fixed result."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def hit_test(self, x, y):
        if self.error:
            raise self.error
        return self.result


class TestLoopCapture:
    """Tests for capture through dragging the spark."""

    def test_loop_trimmed_at_crossing(self, level):
        closures = []
        level.event_bus.subscribe(LoopClosedEvent, closures.append)

        drag_loop(level)

        assert len(closures) == 1
        assert closures[0].start_index == 1
        assert (closures[0].x, closures[0].y) == pytest.approx((38, 30))
        assert level.trail.polygon[:3] == [Point(70, 30), Point(70, 70), Point(30, 70)]
        assert level.trail.polygon[-1] == pytest.approx(Point(38, 30))

    def test_enclosed_enemy_captured(self, level, place_enemy):
        """Test the enemy survives the open trail and goes on the closing move."""
        enemy = place_enemy(level, 50, 50, name="Target")
        controller = drag_loop(level, LOOP[:-1])

        assert not level.trail.frozen
        assert [e.id for e, _ in level.sprites] == [enemy.id]

        controller.handle(DragMove(Point(*LOOP[-1])))

        assert level.trail.frozen
        assert level.entity_manager.get_entity(enemy.id) is None
        assert level.sprites == []

    def test_enemy_outside_loop_survives(self, level, place_enemy):
        inside = place_enemy(level, 50, 50)
        outside = place_enemy(level, 200, 200)

        drag_loop(level)

        assert [e.id for e, _ in level.sprites] == [outside.id]
        assert level.entity_manager.get_entity(inside.id) is None

    def test_capture_detaches_drawable(self, level, place_enemy):
        enemy = place_enemy(level, 50, 50)
        handle = level.entity_manager.get_component(enemy, Sprite).handle
        assert handle in level.presentation.attached

        drag_loop(level)

        assert handle not in level.presentation.attached

    def test_capture_event_published(self, level, place_enemy):
        captured = []
        level.event_bus.subscribe(EnemyCapturedEvent, captured.append)
        enemy = place_enemy(level, 50, 50, name="Target")
        place_enemy(level, 200, 200)

        drag_loop(level)

        assert len(captured) == 1
        assert captured[0].remaining == 1
        assert captured[0].entity_id == enemy.id
        assert captured[0].entity_name == "Target"
        assert (captured[0].x, captured[0].y) == (50, 50)

    def test_loop_filled_while_frozen(self, level):
        drag_loop(level)

        assert level.presentation.filled[level.trail_handle]
        assert level.presentation.polylines[level.trail_handle] == level.trail.polygon


class TestResolveCaptures:
    """Tests for CaptureResolver.resolve_captures."""

    def test_returns_enclosed_ids(self, level, place_enemy):
        resolver = CaptureResolver(level)
        a = place_enemy(level, 5, 5)
        b = place_enemy(level, 20, 20)
        trail = Trail()
        for x, y in [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]:
            trail.append(x, y, now=0.0)

        assert resolver.resolve_captures(trail, level.sprites) == [a.id]
        assert b.id not in resolver.resolve_captures(trail, level.sprites)

    def test_degenerate_trail_captures_nothing(self, level, place_enemy):
        resolver = CaptureResolver(level)
        place_enemy(level, 5, 5)
        trail = Trail()
        trail.append(0, 0, now=0.0)
        trail.append(10, 0, now=0.0)

        assert resolver.resolve_captures(trail, level.sprites) == []

    def test_pending_destroy_skipped(self, level, place_enemy):
        resolver = CaptureResolver(level)
        enemy = place_enemy(level, 5, 5)
        trail = Trail()
        for x, y in [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]:
            trail.append(x, y, now=0.0)

        level.entity_manager.begin_pass()
        level.destroy_entity(enemy)

        assert resolver.resolve_captures(trail, level.sprites) == []
        level.entity_manager.end_pass()


class TestContainment:
    """Tests for the containment strategies."""

    square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]

    def test_polygon_containment(self):
        containment = PolygonContainment()

        assert containment.contains(self.square, Sprite(x=5, y=5))
        assert not containment.contains(self.square, Sprite(x=15, y=5))

    def test_hit_test_on_trail(self):
        containment = HitTestContainment(FakeHitTest(result="trail"), "trail")

        assert containment.contains(self.square, Sprite(x=50, y=50))

    def test_hit_test_on_other_drawable(self):
        containment = HitTestContainment(FakeHitTest(result="spark"), "trail")

        assert not containment.contains(self.square, Sprite(x=5, y=5))

    def test_hit_test_miss(self):
        containment = HitTestContainment(FakeHitTest(result=None), "trail")

        assert not containment.contains(self.square, Sprite(x=5, y=5))

    def test_hit_test_failure_is_not_contained(self):
        containment = HitTestContainment(FakeHitTest(error=RuntimeError("no surface")), "trail")

        assert not containment.contains(self.square, Sprite(x=5, y=5))
