from __future__ import annotations

import math

from loguru import logger
import numpy as np

from lifeevo.exceptions import ConfigurationError

__all__ = ["all_dead_board", "flip_count", "mutate", "random_board"]


def _check_fraction(fraction: float) -> None:
    if not 0.0 < fraction <= 1.0:
        raise ConfigurationError(f"fraction must be in (0, 1], got {fraction}")


def flip_count(board: np.ndarray, fraction: float) -> int:
    """Number of cells :func:`mutate` flips for ``board`` at ``fraction``."""
    _check_fraction(fraction)
    rows, cols = board.shape
    return math.floor(rows * cols * fraction)


def all_dead_board(rows: int, cols: int | None = None) -> np.ndarray:
    cols = rows if cols is None else cols
    if rows <= 0 or cols <= 0:
        raise ConfigurationError(f"board dimensions must be positive, got {rows}x{cols}")
    return np.zeros((rows, cols), dtype=bool)


def mutate(board: np.ndarray, fraction: float, rng: np.random.Generator) -> np.ndarray:
    """Return a copy of ``board`` with exactly ``floor(rows*cols*fraction)``
    distinct cells flipped.

    Positions are drawn uniformly and redrawn on duplicates, so no cell is
    ever flipped twice.
    """
    target = flip_count(board, fraction)
    child = board.copy()
    if target == 0:
        return child

    rows, cols = board.shape
    flipped: set[tuple[int, int]] = set()
    while len(flipped) < target:
        pos = (int(rng.integers(rows)), int(rng.integers(cols)))
        if pos in flipped:
            continue
        flipped.add(pos)
        child[pos] = not child[pos]

    logger.trace("[mutate] Flipped {} of {} cells", target, rows * cols)
    return child


def random_board(
    size: int, rng: np.random.Generator, fraction: float = 0.5
) -> np.ndarray:
    """A ``size`` x ``size`` board with ``floor(size*size*fraction)`` live cells."""
    return mutate(all_dead_board(size, size), fraction, rng)
