from __future__ import annotations

import argparse
import logging
from typing import Optional

import pygame

from blockfall.game import Action, GameConfig, GameSession, action_for_key
from .renderer import Renderer

logger = logging.getLogger(__name__)


def run(config: Optional[GameConfig] = None, cell_size: int = 28) -> None:
    config = config or GameConfig()
    pygame.init()
    try:
        clock = pygame.time.Clock()
        session = GameSession(config)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(config.width, config.height))
        pygame.display.set_caption("blockfall")

        last_tick = pygame.time.get_ticks()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and session.game_over:
                        session.reset()
                        last_tick = pygame.time.get_ticks()
                    elif not session.game_over:
                        action = action_for_key(pygame.key.name(event.key))
                        if action is not None:
                            session.step(action)

            # Gravity runs at a fixed period and stops with the game.
            now = pygame.time.get_ticks()
            if not session.game_over and now - last_tick >= config.tick_ms:
                session.step(Action.TICK)
                last_tick = now

            renderer.draw(screen, session.state)
            clock.tick(60)
        logger.info("final score %d", session.score)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play blockfall with the keyboard.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=500)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(GameConfig(seed=args.seed, tick_ms=args.tick_ms), cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
