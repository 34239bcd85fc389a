from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from falling_blocks.game import Command, GameConfig, GameController
from .renderer import Renderer

logger = logging.getLogger(__name__)

TICK_EVENT = pygame.USEREVENT + 1

KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
}


class PygameTickTimer:
    """Tick source that posts TICK_EVENT into the pygame event queue."""

    def __init__(self, event_type: int = TICK_EVENT) -> None:
        self.event_type = event_type

    def arm(self, interval_ms: int) -> None:
        pygame.time.set_timer(self.event_type, interval_ms)

    def cancel(self) -> None:
        pygame.time.set_timer(self.event_type, 0)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play falling-blocks in a pygame window")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=1000)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="WARNING")
    return p


def run(config: Optional[GameConfig] = None, cell_size: int = 28) -> None:
    config = config or GameConfig()
    pygame.init()
    controller = GameController(config, PygameTickTimer())
    try:
        clock = pygame.time.Clock()
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(config.width, config.height))
        pygame.display.set_caption("Falling Blocks")
        font = pygame.font.SysFont(None, 28)

        controller.start()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == TICK_EVENT:
                    controller.tick()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and controller.state.is_over:
                        controller.start()
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            controller.dispatch(command)

            renderer.draw(screen, controller.state.observation())
            if controller.state.is_over:
                text = font.render("Game Over - R to restart, ESC to quit", True, (255, 255, 255))
                rect = text.get_rect(center=(screen.get_width() // 2, renderer.margin // 2 + 4))
                screen.blit(text, rect)
            pygame.display.flip()
            clock.tick(60)
    finally:
        controller.shutdown()
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = GameConfig(tick_interval_ms=args.tick_ms, random_seed=args.seed)
    run(config, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
