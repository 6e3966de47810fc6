"""Entry point and game loop."""
from __future__ import annotations
import logging
import random
import sys

import pygame

from .config import TITLE, GameConfig
from .core.events import EnemyCapturedEvent
from .core.level import Level
from .core.loop import FrameQueue, GameLoop
from .entities.sprites import create_enemy, create_particle
from .systems.capture import CaptureResolver, HitTestContainment, PolygonContainment
from .systems.kinematics import KinematicsSystem
from .systems.trail_system import TrailSystem
from .ui.camera import Viewport
from .ui.input import InputController, PointerAdapter
from .ui.presentation import Presentation
from .ui.renderer import PygameRenderer

logger = logging.getLogger(__name__)


def create_level(
    config: GameConfig | None = None,
    presentation: Presentation | None = None,
    rng: random.Random | None = None,
    **level_kwargs,
) -> Level:
    """Set up a level with its systems and a scattering of enemies.

    Args:
        config: Game configuration (validated here)
        presentation: Where to draw; headless if omitted
        rng: Random source for enemy placement
        **level_kwargs: Passed to Level (e.g. a test clock)

    Returns:
        The ready-to-run level
    """
    config = (config or GameConfig()).validate()
    rng = rng or random.Random(config.seed)
    level = Level(config, presentation, rng=rng, **level_kwargs)

    level.add_system(TrailSystem(level.event_bus))
    level.add_system(KinematicsSystem(level))

    if config.containment == "hit_test":
        containment = HitTestContainment(level.presentation, level.trail_handle)
    else:
        containment = PolygonContainment()
    CaptureResolver(level, containment)

    for i in range(config.enemy_count):
        enemy = create_enemy(
            level, rng,
            position=(rng.randint(0, int(level.width)), rng.randint(0, int(level.height))),
            radius=config.enemy_radius,
            speed=config.enemy_speed,
            name=f"Enemy {i + 1}",
        )
        for _ in range(config.particles_per_enemy):
            create_particle(level, rng, enemy)

    logger.info("Level ready: %dx%d arena, %d enemies, %d entities",
                level.width, level.height, level.enemies_left, level.entity_manager.entity_count)
    return level


def main(config: GameConfig | None = None) -> None:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = (config or GameConfig()).validate()

    # Initialize Pygame
    pygame.init()
    viewport = Viewport(config.arena_width, config.arena_height, config.screen_scale)
    screen = pygame.display.set_mode(viewport.screen_size)
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()

    renderer = PygameRenderer(screen, viewport)
    level = create_level(config, renderer)

    def on_capture(event: EnemyCapturedEvent) -> None:
        if event.remaining == 0:
            logger.info("Arena cleared")

    level.event_bus.subscribe(EnemyCapturedEvent, on_capture)

    adapter = PointerAdapter(viewport)
    InputController(level, adapter)

    frames = FrameQueue()
    loop = GameLoop(level, frames.schedule).start()

    running = True
    round_over_shown = False
    while running:
        running = adapter.process_events(pygame.event.get())

        frames.run_pending()
        if not loop.running and not round_over_shown:
            pygame.display.set_caption(f"{TITLE} - round over")
            round_over_shown = True

        renderer.render()
        pygame.display.flip()
        clock.tick(config.fps)

    # Cleanup
    pygame.quit()
    sys.exit(0)


if __name__ == "__main__":
    main()
