# src/toroid_snake/main.py
from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from typing import Optional, Sequence, Tuple

import pygame # type: ignore

from .config import (
    WIDTH, HEIGHT, CELL_SIZE, GRID_W, GRID_H,
    BG, WHITE, GRAY, RED, GREEN, TEXT,
    CFG,
)
from .game import Game, Position, State, UP, DOWN, LEFT, RIGHT
from .logging_setup import setup_logging

logger = logging.getLogger(__name__)

# ----- Key bindings -----
DIRECTION_KEYS = {
    pygame.K_UP: UP,    pygame.K_w: UP,
    pygame.K_DOWN: DOWN, pygame.K_s: DOWN,
    pygame.K_LEFT: LEFT, pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT, pygame.K_d: RIGHT,
}

# Board color per lifecycle state; Quit draws nothing.
STATE_COLORS = {
    State.RUNNING: WHITE,
    State.START: GRAY,
    State.PAUSED: GRAY,
    State.LOSS: RED,
    State.WIN: GREEN,
}

# ---------- Input ----------
def handle_event(game: Game, event: pygame.event.Event, now_ms: int) -> None:
    """Translate one pygame event into a core request."""
    if event.type == pygame.QUIT:
        game.on_quit()
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            game.on_reset()
        elif event.key == pygame.K_SPACE:
            game.on_toggle_pause(now_ms)
        elif event.key in DIRECTION_KEYS:
            game.try_change_direction(DIRECTION_KEYS[event.key])

# ---------- Draw ----------
def cell_rect(p: Position) -> pygame.Rect:
    return pygame.Rect(p.x * CELL_SIZE, p.y * CELL_SIZE, CELL_SIZE, CELL_SIZE)

def darker(color: Tuple[int, int, int], k: float = 0.9) -> Tuple[int, int, int]:
    return tuple(int(c * k) for c in color)

def draw_game(screen: pygame.Surface, font: pygame.font.Font, game: Game) -> None:
    screen.fill(BG)
    color = STATE_COLORS.get(game.state)
    if color is None:
        return

    # food
    if game.food is not None:
        r = cell_rect(game.food)
        pygame.draw.circle(screen, color, r.center, min(r.w, r.h) // 2)
    # snake, head slightly darker so the heading is readable
    for part in game.parts:
        pygame.draw.rect(screen, color, cell_rect(part))
    pygame.draw.rect(screen, darker(color), cell_rect(game.head))

    txt = font.render(f"Length: {len(game.parts)}  Speed: {game.speed}", True, TEXT)
    screen.blit(txt, (8, 6))

# ---------- Entry point ----------
def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Snake on a toroidal grid")
    parser.add_argument("--seed", type=int, default=CFG.seed, help="seed for food placement")
    parser.add_argument(
        "--log-level", type=str, default=CFG.log_level,
        choices=["DEBUG", "INFO", "WARNING"],
    )
    return parser

def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _build_parser().parse_args(argv)
    cfg = replace(CFG, seed=args.seed, log_level=args.log_level)
    setup_logging(cfg.log_level)

    pygame.init()
    font = pygame.font.SysFont(None, 24)
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Snake")
    clock = pygame.time.Clock()

    game = Game(GRID_W, GRID_H, config=cfg)
    logger.info("Board %dx%d tiles, press Space to start", GRID_W, GRID_H)

    while game.state is not State.QUIT:
        # 1) input
        now = pygame.time.get_ticks()
        for event in pygame.event.get():
            handle_event(game, event, now)

        # 2) update
        game.on_update(now)

        # 3) render
        draw_game(screen, font, game)
        pygame.display.flip()
        clock.tick(cfg.fps)

    pygame.quit()

if __name__ == "__main__":
    main()
