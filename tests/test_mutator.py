import math

import numpy as np
import pytest

from lifeevo.evolution import all_dead_board, flip_count, mutate, random_board
from lifeevo.exceptions import ConfigurationError


@pytest.mark.parametrize("fraction", [0.1, 0.25, 0.5, 1.0])
def test_mutate_flips_exact_count(rng, fraction):
    board = rng.random((7, 5)) < 0.5
    child = mutate(board, fraction, rng)

    assert np.count_nonzero(board ^ child) == math.floor(35 * fraction)
    assert flip_count(board, fraction) == math.floor(35 * fraction)


def test_mutate_leaves_input_untouched(rng):
    board = np.zeros((6, 6), dtype=bool)
    child = mutate(board, 0.5, rng)

    assert not board.any()
    assert np.count_nonzero(child) == 18


def test_zero_target_returns_unchanged_copy(rng):
    board = np.eye(3, dtype=bool)
    child = mutate(board, 0.1, rng)

    assert np.array_equal(child, board)
    assert child is not board


@pytest.mark.parametrize("fraction", [0.0, -0.1, 1.5])
def test_invalid_fraction_is_reported(rng, fraction):
    with pytest.raises(ConfigurationError):
        mutate(np.zeros((3, 3), dtype=bool), fraction, rng)


def test_random_board_is_half_alive(rng):
    board = random_board(5, rng)

    assert board.shape == (5, 5)
    assert board.dtype == bool
    assert np.count_nonzero(board) == 12


def test_all_dead_board_shapes():
    assert all_dead_board(3).shape == (3, 3)
    assert all_dead_board(2, 4).shape == (2, 4)
    assert not all_dead_board(4).any()


def test_all_dead_board_rejects_non_positive_size():
    with pytest.raises(ConfigurationError):
        all_dead_board(0)
