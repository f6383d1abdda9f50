from __future__ import annotations

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from lifeevo.simulation.fitness import FitnessResult, TerminationReason


class Trial(BaseModel):
    """One evaluated seed board: the row handed to reporting."""

    board: np.ndarray
    survival_ticks: int = Field(ge=0)
    total_live_cells: int = Field(default=0, ge=0)
    cells_created: int = Field(default=0, ge=0)
    reason: TerminationReason = TerminationReason.BUDGET_EXHAUSTED

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def from_result(cls, board: np.ndarray, result: FitnessResult) -> Trial:
        return cls(
            board=board,
            survival_ticks=result.termination_tick,
            total_live_cells=result.total_live_cells,
            cells_created=result.cells_created,
            reason=result.reason,
        )


class EvolutionSummary(BaseModel):
    """Where a multi-generation run ended and why."""

    generations_completed: int = Field(default=0, ge=0)
    exhausted: bool = Field(
        default=False, description="A generation produced no survivors"
    )
    stopped: bool = Field(default=False, description="stop() was requested")
    population: list[np.ndarray] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)
