from __future__ import annotations

from typing import FrozenSet, NamedTuple


class Cell(NamedTuple):
    """A single position on the unbounded Life plane."""

    row: int
    column: int

    def neighbors(self) -> tuple[Cell, ...]:
        r, c = self.row, self.column
        return (
            Cell(r - 1, c - 1),
            Cell(r - 1, c),
            Cell(r - 1, c + 1),
            Cell(r, c - 1),
            Cell(r, c + 1),
            Cell(r + 1, c - 1),
            Cell(r + 1, c),
            Cell(r + 1, c + 1),
        )


# Live cells at one tick. Absence means dead.
BoardState = FrozenSet[Cell]

EMPTY_STATE: BoardState = frozenset()
