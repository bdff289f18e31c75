from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, GameConfig, TetrisGame
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_d: Action.ROTATE_CW,
    pygame.K_a: Action.ROTATE_CCW,
    pygame.K_s: Action.HOLD,
    pygame.K_SPACE: Action.HARD_DROP,
}

QUIT_KEYS = (pygame.K_q, pygame.K_ESCAPE)


def _wait_for_restart() -> bool:
    while True:
        event = pygame.event.wait()
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if event.key in QUIT_KEYS:
                return False
            if event.key == pygame.K_r:
                return True


def dispatch(game: TetrisGame, event: pygame.event.Event) -> bool:
    """Apply one event to the game. Returns False when the player asked to quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key in QUIT_KEYS:
            return False
        action = KEY_TO_ACTION.get(event.key)
        if action is not None:
            game.apply(action)
            return True
    # Anything else that arrives after the timer ran out must not hold back gravity
    if event.type == pygame.NOEVENT or game.get_timeout() == 0:
        game.handle_timeout()
    return True


def run(seed: Optional[int] = None, cell_size: int = 24) -> None:
    pygame.init()
    try:
        game = TetrisGame(GameConfig(random_seed=seed), clock=pygame.time.get_ticks)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Falling Blocks")
        pygame.event.set_blocked(None)
        pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN])

        running = True
        while running:
            renderer.draw(screen, game)

            # Block on input for at most the time left until gravity acts
            event = pygame.event.wait(max(1, game.get_timeout()))
            running = dispatch(game, event)

            if running and game.is_over():
                renderer.draw(screen, game)
                renderer.draw_game_over(screen, game)
                if _wait_for_restart():
                    game.reset()
                else:
                    running = False

        logger.info("final score %d", game.score)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell_size", type=int, default=24)
    p.add_argument("--log-level", default="WARNING")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
