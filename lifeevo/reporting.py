from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from lifeevo.evolution.models import Trial

ALIVE = "*"
DEAD = " "


def render_board(board: np.ndarray) -> str:
    """ASCII picture of ``board``: ``*`` alive, space dead. 0x0 renders as ""."""
    return "\n".join("".join(ALIVE if v else DEAD for v in row) for row in board)


def format_report(trials: Sequence[Trial], top_n: int = 101) -> str:
    """Render the first ``top_n`` trials, each board followed by its survival tick.

    ``trials`` is expected to be ranked already.
    """
    blocks: list[str] = []
    for trial in trials[:top_n]:
        picture = render_board(trial.board)
        blocks.append(f"{picture}\n{trial.survival_ticks}" if picture else str(trial.survival_ticks))
    return "\n".join(blocks)
