from lifeevo.board.cell import EMPTY_STATE, BoardState, Cell
from lifeevo.board.conversions import (
    bounding_box,
    dense_to_state,
    state_to_dense,
    state_to_dense_or_empty,
)

__all__ = [
    "BoardState",
    "Cell",
    "EMPTY_STATE",
    "bounding_box",
    "dense_to_state",
    "state_to_dense",
    "state_to_dense_or_empty",
]
