"""Tests for buffered direction changes: dedupe, reversal guard, FIFO consumption."""

import random

import pytest

from toroid_snake.config import Config
from toroid_snake.game import DOWN, LEFT, RIGHT, UP, Game, Position, State


def _running(config: Config = Config()) -> Game:
    game = Game(10, 10, rng=random.Random(2), config=config)
    game.on_toggle_pause(0)
    game._food = Position(0, 0)
    return game


class TestAcceptance:
    def test_turn_applies_on_next_step(self):
        game = _running()
        game.try_change_direction(UP)
        assert game.direction == RIGHT

        game.on_update(200)
        assert game.direction == UP
        assert game.head == Position(5, 4)

    def test_plain_tuples_accepted(self):
        game = _running()
        game.try_change_direction((0, 1))
        game.on_update(200)
        assert game.direction == DOWN

    def test_ignored_while_paused(self):
        game = _running()
        game.on_toggle_pause(0)
        game.try_change_direction(UP)
        assert not game._directions

        game.on_toggle_pause(0)
        game.on_update(200)
        assert game.head == Position(6, 5)

    def test_ignored_before_start(self):
        game = Game(10, 10)
        game.try_change_direction(UP)
        assert game.state is State.START
        assert not game._directions

    def test_repeat_of_intended_heading_dropped(self):
        game = _running()
        game.try_change_direction(RIGHT)
        assert not game._directions

        game.try_change_direction(UP)
        game.try_change_direction(UP)
        assert list(game._directions) == [UP]

    def test_queue_is_bounded(self):
        game = _running(Config(direction_queue_size=3))
        for d in (UP, DOWN, LEFT, RIGHT):
            game.try_change_direction(d)
        assert list(game._directions) == [UP, DOWN, LEFT]

    @pytest.mark.parametrize("bad", [(1, 1), (0, 0), (2, 0), "up"])
    def test_non_unit_direction_rejected(self, bad):
        game = _running()
        with pytest.raises(ValueError):
            game.try_change_direction(bad)


class TestConsumption:
    def test_reversal_never_applied(self):
        game = _running()
        game.try_change_direction(LEFT)
        game.on_update(200)
        assert game.direction == RIGHT
        assert game.head == Position(6, 5)
        assert not game._directions

    def test_turn_then_turn_on_successive_steps(self):
        """Up then Left while heading Right makes a U-turn over two steps."""
        game = _running()
        game.try_change_direction(UP)
        game.try_change_direction(LEFT)

        game.on_update(200)
        assert game.direction == UP
        assert game.head == Position(5, 4)

        game.on_update(400)
        assert game.direction == LEFT
        assert game.head == Position(4, 4)

    def test_one_direction_per_move_even_for_multi_tile_steps(self):
        game = _running()
        game.try_change_direction(DOWN)
        game.try_change_direction(LEFT)

        game.on_update(600)  # three tiles, all heading down
        assert game.direction == DOWN
        assert game.head == Position(5, 8)
        assert list(game._directions) == [LEFT]

    def test_zero_tile_frame_keeps_the_queue(self):
        game = _running()
        game.try_change_direction(UP)
        game.on_update(50)
        assert game.direction == RIGHT
        assert list(game._directions) == [UP]

        # still deduplicated against the queued heading
        game.try_change_direction(UP)
        assert list(game._directions) == [UP]

        game.on_update(200)
        assert game.direction == UP
