# src/toroid_snake/config.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# ----- Window & grid -----
WIDTH, HEIGHT = 480, 480
CELL_SIZE = 12
GRID_W, GRID_H = WIDTH // CELL_SIZE, HEIGHT // CELL_SIZE

if WIDTH % CELL_SIZE or HEIGHT % CELL_SIZE:
    raise ValueError("window size must be an integral number of tiles")

# ----- Colors -----
BG    = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY  = (100, 100, 100)
RED   = (255, 50, 50)
GREEN = (50, 255, 50)
TEXT  = (220, 220, 230)

# ----- Tunables -----
@dataclass
class Config:
    seed: Optional[int] = None     # None -> fresh entropy on every run
    initial_speed: int = 5         # tiles per second after a reset
    max_speed: int = 30            # speed ramp stops here
    direction_queue_size: int = 3  # buffered turns between tile-steps
    fps: int = 60
    log_level: str = "INFO"

CFG = Config()
