"""Frame scheduling for the game loop."""
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .level import Level

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameQueue:
    """Callbacks waiting for the next display refresh.

    A callback scheduled while the queue is running waits for the
    following frame, never the current one.
    """

    def __init__(self) -> None:
        self._pending: list[FrameCallback] = []

    def schedule(self, callback: FrameCallback) -> None:
        """Run callback on the next frame."""
        self._pending.append(callback)

    def run_pending(self) -> int:
        """Run every callback scheduled before this call.

        Returns:
            Number of callbacks run
        """
        callbacks = self._pending
        self._pending = []
        for callback in callbacks:
            callback()
        return len(callbacks)

    def __len__(self) -> int:
        return len(self._pending)


class GameLoop:
    """Ticks the level once per frame for as long as the spark is alive."""

    def __init__(self, level: Level, schedule: Callable[[FrameCallback], None]) -> None:
        self.level = level
        self._schedule = schedule
        self.frames = 0
        self.running = False

    def start(self) -> GameLoop:
        """Schedule the first tick."""
        self.running = True
        self._schedule(self.tick)
        return self

    def tick(self) -> None:
        """Advance the level one frame and schedule the next while the spark lives."""
        self.level.update()
        self.frames += 1

        if self.level.spark.alive:
            self._schedule(self.tick)
        else:
            self.running = False
            logger.info("Round over after %d frames", self.frames)
