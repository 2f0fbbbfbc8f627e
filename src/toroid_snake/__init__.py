# src/toroid_snake/__init__.py
"""Snake on a toroidal grid: simulation core plus a pygame front end."""

from toroid_snake.game import (
    DIRECTIONS,
    DOWN,
    LEFT,
    RIGHT,
    UP,
    Direction,
    Game,
    HitTarget,
    Position,
    PreconditionError,
    State,
)

__all__ = [
    "Game", "State", "HitTarget", "Position", "Direction", "PreconditionError",
    "UP", "DOWN", "LEFT", "RIGHT", "DIRECTIONS",
]
