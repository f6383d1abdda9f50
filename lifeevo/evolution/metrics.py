from __future__ import annotations

from pydantic import BaseModel, Field, computed_field

from lifeevo.simulation.fitness import FitnessResult, TerminationReason


class SearchMetrics(BaseModel):
    """Running counters for one search run."""

    trials_completed: int = Field(default=0, description="Trials evaluated")
    trials_skipped: int = Field(
        default=0, description="Trials not started because a stop was requested"
    )
    total_ticks: int = Field(default=0, description="Sum of termination ticks")
    ticks_simulated: int = Field(default=0, description="Steps actually computed")
    ticks_saved: int = Field(default=0, description="Ticks skipped by cache hits")
    cache_hits: int = Field(default=0, description="Runs ended by a cached state")
    extinct: int = Field(default=0, description="Runs ended by extinction")
    cycles: int = Field(default=0, description="Runs ended by a repeated state")
    budget_exhausted: int = Field(default=0, description="Runs alive at the budget")
    total_generations: int = Field(default=0, description="Generations completed")
    survivors_selected: int = Field(default=0, description="Boards above threshold")
    children_spawned: int = Field(default=0, description="Mutated offspring created")

    def record_trial(self, result: FitnessResult) -> None:
        self.trials_completed += 1
        self.total_ticks += result.termination_tick
        self.ticks_simulated += result.ticks_simulated
        self.ticks_saved += result.ticks_saved
        if result.reason is TerminationReason.CACHED:
            self.cache_hits += 1
        elif result.reason is TerminationReason.EXTINCT:
            self.extinct += 1
        elif result.reason is TerminationReason.CYCLE:
            self.cycles += 1
        else:
            self.budget_exhausted += 1

    def record_generation(self, survivors: int, children: int) -> None:
        self.total_generations += 1
        self.survivors_selected += survivors
        self.children_spawned += children

    @computed_field
    @property
    def savings_ratio(self) -> float:
        """Share of ticks that the cache spared us."""
        if self.total_ticks == 0:
            return 0.0
        return self.ticks_saved / self.total_ticks

    model_config = {"extra": "forbid"}
