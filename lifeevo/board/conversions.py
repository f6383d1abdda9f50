"""Conversions between sparse :data:`BoardState` and dense boolean grids.

Dense boards (``numpy.ndarray`` of ``bool``) are only used where a board
enters or leaves the population: seeding, mutation and reporting. The
simulation itself always works on the sparse form.
"""

from __future__ import annotations

import numpy as np

from lifeevo.board.cell import BoardState, Cell
from lifeevo.exceptions import EmptyBoardError

__all__ = [
    "dense_to_state",
    "state_to_dense",
    "state_to_dense_or_empty",
    "bounding_box",
]


def dense_to_state(board: np.ndarray) -> BoardState:
    rows, cols = np.nonzero(board)
    return frozenset(Cell(int(r), int(c)) for r, c in zip(rows, cols))


def bounding_box(state: BoardState) -> tuple[int, int, int, int]:
    """Return ``(min_row, min_col, max_row, max_col)`` of the live cells.

    Raises:
        EmptyBoardError: if ``state`` has no live cells.
    """
    if not state:
        raise EmptyBoardError("cannot compute the extent of an empty board")
    rows = [cell.row for cell in state]
    cols = [cell.column for cell in state]
    return min(rows), min(cols), max(rows), max(cols)


def state_to_dense(state: BoardState) -> np.ndarray:
    """Lay ``state`` out on the smallest grid covering its live cells.

    The occupied extent is translated so its top-left corner sits at
    ``(0, 0)``; converting back with :func:`dense_to_state` therefore yields
    the same shape, shifted by that offset.

    Raises:
        EmptyBoardError: if ``state`` has no live cells.
    """
    min_row, min_col, max_row, max_col = bounding_box(state)
    board = np.zeros((max_row - min_row + 1, max_col - min_col + 1), dtype=bool)
    for cell in state:
        board[cell.row - min_row, cell.column - min_col] = True
    return board


def state_to_dense_or_empty(state: BoardState) -> np.ndarray:
    """Like :func:`state_to_dense` but an empty state becomes a 0x0 board."""
    try:
        return state_to_dense(state)
    except EmptyBoardError:
        return np.zeros((0, 0), dtype=bool)
