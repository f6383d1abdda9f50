from __future__ import annotations

from enum import Enum

import numpy as np
from pydantic import BaseModel, Field

from lifeevo.board.cell import BoardState
from lifeevo.board.conversions import dense_to_state
from lifeevo.exceptions import ConfigurationError
from lifeevo.simulation.cache import SurvivalCache
from lifeevo.simulation.step import Bound, default_bound, step

__all__ = ["FitnessEvaluator", "FitnessResult", "TerminationReason", "evaluate"]


class TerminationReason(str, Enum):
    EXTINCT = "extinct"
    CYCLE = "cycle"
    CACHED = "cached"
    BUDGET_EXHAUSTED = "budget_exhausted"


class FitnessResult(BaseModel):
    """Outcome of evolving one seed until it dies, cycles or runs out of ticks."""

    termination_tick: int = Field(ge=0, description="Tick at which the run ended")
    total_live_cells: int = Field(
        ge=0, description="Live cells summed over the seed and every tick"
    )
    cells_created: int = Field(
        ge=0, description="Cells alive in a tick that were dead in the previous one"
    )
    reason: TerminationReason
    ticks_simulated: int = Field(ge=0, description="Steps actually computed")
    ticks_saved: int = Field(
        default=0, ge=0, description="Ticks skipped thanks to a cache hit"
    )

    @property
    def still_alive(self) -> bool:
        return self.reason is TerminationReason.BUDGET_EXHAUSTED


def evaluate(
    seed: BoardState,
    max_ticks: int,
    bound: Bound | None = None,
    cache: SurvivalCache | None = None,
) -> FitnessResult:
    """Run ``seed`` for at most ``max_ticks`` steps.

    Tick 0 is the first applied step; the seed itself only contributes its
    live cells to ``total_live_cells``. The run ends on extinction, on a
    state already produced earlier in this run, on a state whose remaining
    lifetime is known from ``cache``, or when the budget is spent.

    Every state visited here is then offered to ``cache`` with its own
    remaining lifetime; existing entries are left alone.
    """
    if max_ticks < 0:
        raise ConfigurationError(f"max_ticks must be >= 0, got {max_ticks}")

    current = seed
    total_live_cells = len(seed)
    cells_created = 0
    # state -> tick that produced it; insertion order is tick order
    visited: dict[BoardState, int] = {}

    termination_tick = max_ticks
    reason = TerminationReason.BUDGET_EXHAUSTED
    ticks_simulated = max_ticks
    ticks_saved = 0

    for tick in range(max_ticks):
        nxt = step(current, bound)
        total_live_cells += len(nxt)
        cells_created += len(nxt - current)

        if not nxt:
            termination_tick, reason = tick, TerminationReason.EXTINCT
        elif nxt in visited:
            termination_tick, reason = tick, TerminationReason.CYCLE
        elif cache is not None and (remaining := cache.get(nxt)) is not None:
            termination_tick = min(tick + remaining, max_ticks)
            reason = TerminationReason.CACHED
            ticks_saved = termination_tick - tick
        else:
            visited[nxt] = tick
            current = nxt
            continue

        ticks_simulated = tick + 1
        break

    if cache is not None:
        for state, tick in visited.items():
            cache.insert_if_absent(state, termination_tick - tick)

    return FitnessResult(
        termination_tick=termination_tick,
        total_live_cells=total_live_cells,
        cells_created=cells_created,
        reason=reason,
        ticks_simulated=ticks_simulated,
        ticks_saved=ticks_saved,
    )


class FitnessEvaluator:
    """Binds a tick budget, window and shared cache to :func:`evaluate`."""

    def __init__(
        self,
        max_ticks: int,
        bound: Bound | None = None,
        cache: SurvivalCache | None = None,
    ) -> None:
        if max_ticks <= 0:
            raise ConfigurationError(f"max_ticks must be positive, got {max_ticks}")
        self.max_ticks = max_ticks
        self.bound = bound if bound is not None else default_bound(max_ticks)
        self.cache = cache

    def __call__(self, seed: BoardState) -> FitnessResult:
        return evaluate(seed, self.max_ticks, self.bound, self.cache)

    def evaluate_board(self, board: np.ndarray) -> FitnessResult:
        return self(dense_to_state(board))
