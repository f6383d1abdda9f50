from __future__ import annotations

from collections import Counter
from typing import NamedTuple

from lifeevo.board.cell import BoardState, Cell


class Bound(NamedTuple):
    """Simulation window: cells with ``abs(row) >= max_row`` or
    ``abs(column) >= max_col`` are dropped after every tick."""

    max_row: int
    max_col: int

    def contains(self, cell: Cell) -> bool:
        return abs(cell.row) < self.max_row and abs(cell.column) < self.max_col


def default_bound(max_ticks: int) -> Bound:
    """Window used when none is configured: a tenth of the tick budget."""
    extent = max_ticks // 10
    return Bound(extent, extent)


def step(state: BoardState, bound: Bound | None = None) -> BoardState:
    """Apply one Game-of-Life tick (B3/S23) to ``state``.

    Only live cells and their neighbours are visited. With ``bound`` set,
    cells outside the window are discarded regardless of the rule outcome.
    """
    counts: Counter[Cell] = Counter()
    for cell in state:
        counts.update(cell.neighbors())

    born_or_kept = (
        cell
        for cell, n in counts.items()
        if n == 3 or (n == 2 and cell in state)
    )
    if bound is None:
        return frozenset(born_or_kept)
    return frozenset(cell for cell in born_or_kept if bound.contains(cell))


def advance(state: BoardState, ticks: int, bound: Bound | None = None) -> BoardState:
    if ticks < 1:
        raise ValueError(f"ticks must be at least 1, got {ticks}")
    for _ in range(ticks):
        state = step(state, bound)
    return state
