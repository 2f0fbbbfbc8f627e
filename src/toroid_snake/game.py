# src/toroid_snake/game.py
"""
Simulation core for snake on a toroidal grid.

The ``Game`` object owns the whole session state (body, food, heading, speed,
lifecycle) and is advanced by the presentation layer once per frame:

    events -> try_change_direction / on_toggle_pause / on_reset / on_quit
           -> on_update(now_ms)
           -> read head / parts / food / state / speed

Nothing in here knows about pygame.
"""
from __future__ import annotations

import logging
import random
from collections import deque
from enum import Enum, auto
from typing import Deque, List, NamedTuple, Optional, Tuple

from .config import CFG, Config

logger = logging.getLogger(__name__)


class PreconditionError(AssertionError):
    """The caller broke the core's contract (clock went backwards, full board, ...)."""


class State(Enum):
    START = auto()
    RUNNING = auto()
    PAUSED = auto()
    LOSS = auto()
    WIN = auto()
    QUIT = auto()


class HitTarget(Enum):
    NONE = auto()
    SNAKE = auto()
    FOOD = auto()


class Position(NamedTuple):
    x: int
    y: int


class Direction(NamedTuple):
    dx: int
    dy: int

    def opposite(self) -> Direction:
        return Direction(-self.dx, -self.dy)


# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = Direction(0, -1), Direction(0, 1), Direction(-1, 0), Direction(1, 0)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)


# ---------- Helpers ----------
def wrap_delta(delta: int, size: int) -> int:
    """
    Normalize the coordinate difference of two adjacent cells on a ring of
    ``size`` cells to -1, 0 or +1. A jump across the seam (``size - 1``) is a
    single step the other way.
    """
    if delta == 0:
        return 0
    if delta == size - 1:
        return -1
    if delta == -(size - 1):
        return 1
    if delta not in (-1, 1):
        raise PreconditionError(f"cells are not adjacent (delta={delta}, size={size})")
    return delta


# ---------- Core ----------
class Game:
    """One snake session on a fixed ``width x height`` torus."""

    def __init__(
        self,
        width: int,
        height: int,
        rng: Optional[random.Random] = None,
        config: Config = CFG,
    ) -> None:
        if width < 1 or height < 1 or width * height < 2:
            raise ValueError(f"grid must hold at least two cells, got {width}x{height}")

        self._width = width
        self._height = height
        self._config = config
        # Private stream: food placement never touches the global `random` state.
        self._rng = rng if rng is not None else random.Random(config.seed)

        self._state = State.START
        self._parts: List[Position] = []       # tail at index 0, head last
        self._food: Optional[Position] = None
        self._last_move_ms = 0
        self._speed = config.initial_speed     # tiles per second
        self._direction = RIGHT                # committed heading
        self._directions: Deque[Direction] = deque()

        self.on_reset()

    # ---------- Accessors ----------
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def capacity(self) -> int:
        return self._width * self._height

    @property
    def head(self) -> Position:
        if not self._parts:
            raise PreconditionError("snake has no body")
        return self._parts[-1]

    @property
    def parts(self) -> Tuple[Position, ...]:
        """Body cells, tail first and head last."""
        return tuple(self._parts)

    @property
    def food(self) -> Optional[Position]:
        return self._food

    @property
    def state(self) -> State:
        return self._state

    @property
    def speed(self) -> int:
        return self._speed

    @property
    def direction(self) -> Direction:
        return self._direction

    # ---------- Requests ----------
    def on_update(self, now_ms: int) -> None:
        """Advance the snake by however many whole tiles elapsed since the last move."""
        if self._state is not State.RUNNING:
            return

        hit = self._on_move(now_ms)
        if hit is HitTarget.NONE:
            return
        if hit is HitTarget.SNAKE:
            self._set_state(State.LOSS)
            return

        # HitTarget.FOOD
        self._set_state(self._consume_food())
        if self._state is State.RUNNING:
            self._change_speed()

    def try_change_direction(self, direction: Tuple[int, int]) -> None:
        """
        Queue a turn for a later tile-step.

        Repeats of the intended heading are dropped here. Reversals are queued
        and discarded when consumed, see ``_commit_next_direction``.
        """
        if direction not in DIRECTIONS:
            raise ValueError(f"not a unit direction: {direction!r}")
        if self._state is not State.RUNNING:
            return

        d = Direction(*direction)
        if d == self._intended_direction():
            return
        if len(self._directions) >= self._config.direction_queue_size:
            logger.debug("Direction queue full, dropping %s", d)
            return
        self._directions.append(d)

    def on_toggle_pause(self, now_ms: int) -> None:
        if self._state is State.START:
            self._reinitialize()
            self._food = self._generate_new_food()
            self._last_move_ms = now_ms
            self._set_state(State.RUNNING)
        elif self._state is State.PAUSED:
            # Restart the clock so the pause does not turn into a jump.
            self._last_move_ms = now_ms
            self._set_state(State.RUNNING)
        elif self._state is State.RUNNING:
            self._set_state(State.PAUSED)
        elif self._state in (State.LOSS, State.WIN, State.QUIT):
            logger.debug("Pause ignored in state %s", self._state.name)

    def on_reset(self) -> None:
        self._reinitialize()
        self._set_state(State.START)

    def on_quit(self) -> None:
        self._reinitialize()
        self._set_state(State.QUIT)

    # ---------- State machine ----------
    def _set_state(self, new_state: State) -> None:
        old_state = self._state
        self._state = new_state
        if old_state is new_state:
            return

        if {old_state, new_state} == {State.RUNNING, State.PAUSED}:
            logger.debug("%s -> %s", old_state.name, new_state.name)
        elif new_state in (State.LOSS, State.WIN):
            logger.info(
                "%s -> %s (length=%d, speed=%d)",
                old_state.name, new_state.name, len(self._parts), self._speed,
            )
        else:
            logger.info("%s -> %s", old_state.name, new_state.name)

    def _reinitialize(self) -> None:
        self._last_move_ms = 0
        self._speed = self._config.initial_speed

        self._direction = RIGHT
        self._directions.clear()

        self._parts = [Position(self._width // 2, self._height // 2)]
        self._food = None
        logger.debug("Board reset to %dx%d, head at %s", self._width, self._height, self._parts[-1])

    # ---------- Movement ----------
    def _on_move(self, now_ms: int) -> HitTarget:
        if not self._parts:
            raise PreconditionError("snake has no body")

        tiles = self._get_move_delta(now_ms)
        if tiles == 0:
            return HitTarget.NONE

        self._commit_next_direction()
        self._last_move_ms = now_ms

        hit = HitTarget.NONE
        for i in range(tiles):
            new_head = self._make_tile_in_direction(self._parts[-1], self._direction)
            self._parts.append(new_head)

            # The i + 1 oldest cells are vacated by this move and are not obstacles.
            if self._is_inside_snake(new_head, skip_head=1, skip_tail=i + 1):
                hit = HitTarget.SNAKE
            elif new_head == self._food and hit is HitTarget.NONE:
                hit = HitTarget.FOOD

        del self._parts[:tiles]
        return hit

    def _get_move_delta(self, now_ms: int) -> int:
        """Whole tiles covered since the last committed move, rounded half up."""
        if now_ms < self._last_move_ms:
            raise PreconditionError(
                f"clock went backwards: {now_ms} ms < last move at {self._last_move_ms} ms"
            )
        dt = now_ms - self._last_move_ms
        return (2 * self._speed * dt + 1000) // 2000

    def _intended_direction(self) -> Direction:
        if self._directions:
            return self._directions[0]
        return self._direction

    def _commit_next_direction(self) -> None:
        if not self._directions:
            return
        d = self._directions.popleft()
        if d == self._direction.opposite():
            logger.debug("Discarding reversal %s while heading %s", d, self._direction)
            return
        self._direction = d

    def _make_tile_in_direction(self, p: Position, d: Direction) -> Position:
        return Position((p.x + d.dx) % self._width, (p.y + d.dy) % self._height)

    def _is_inside_snake(self, p: Position, skip_head: int = 0, skip_tail: int = 0) -> bool:
        if skip_head + skip_tail > len(self._parts):
            raise PreconditionError(
                f"cannot skip {skip_tail}+{skip_head} cells of a {len(self._parts)}-cell body"
            )
        return p in self._parts[skip_tail:len(self._parts) - skip_head]

    # ---------- Growth ----------
    def _consume_food(self) -> State:
        tail = self._find_new_tail()
        if self._is_inside_snake(tail):
            return State.LOSS

        self._parts.insert(0, tail)
        if len(self._parts) == self.capacity:
            return State.WIN

        self._food = self._generate_new_food()
        return State.RUNNING

    def _find_new_tail(self) -> Position:
        """
        Cell for the extra segment gained by eating.

        The old tail cell was already vacated by the trim, so the new segment
        goes one tile behind it, against the tail's direction of travel. When
        that cell is taken (typically across the wrap seam) the two sideways
        neighbours are tried; if everything is taken the naive cell is
        returned and the caller reports the overlap.
        """
        old_tail = self._parts[0]
        if len(self._parts) >= 2:
            tail_direction = self._find_tail_direction(self._parts[1], old_tail)
        else:
            tail_direction = self._direction

        naive = self._make_tile_in_direction(old_tail, tail_direction.opposite())
        if not self._is_inside_snake(naive):
            return naive

        sideways = (LEFT, RIGHT) if tail_direction.dy != 0 else (UP, DOWN)
        for d in sideways:
            candidate = self._make_tile_in_direction(old_tail, d)
            if not self._is_inside_snake(candidate):
                return candidate
        return naive

    def _find_tail_direction(self, before_tail: Position, tail: Position) -> Direction:
        dx = wrap_delta(before_tail.x - tail.x, self._width)
        dy = wrap_delta(before_tail.y - tail.y, self._height)
        if (dx == 0) == (dy == 0):
            raise PreconditionError(f"tail cells {tail} and {before_tail} are not neighbours")
        return Direction(dx, dy)

    # ---------- Food & speed ----------
    def _generate_new_food(self) -> Position:
        if len(self._parts) >= self.capacity:
            raise PreconditionError("no free cell left for food")

        while True:
            food = Position(self._rng.randrange(self._width), self._rng.randrange(self._height))
            if not self._is_inside_snake(food):
                logger.debug("Food placed at %s", food)
                return food

    def _change_speed(self) -> None:
        if self._speed < self._config.max_speed:
            self._speed += 1
            logger.debug("Speed is now %d tiles/s", self._speed)
