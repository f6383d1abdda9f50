from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lifeevo.simulation.step import Bound, default_bound


class SearchConfig(BaseModel):
    """Configuration options controlling a search run."""

    board_size: int = Field(default=5, gt=0, description="Side of random seed boards")
    trials: int = Field(
        default=10000, gt=0, description="Random boards per batch search / population size"
    )
    max_ticks: int = Field(default=10000, gt=0, description="Tick budget per evaluation")
    window: int | None = Field(
        default=None,
        gt=0,
        description="Half-width of the simulation window (None = max_ticks // 10)",
    )
    workers: int = Field(
        default_factory=lambda: os.cpu_count() or 1,
        gt=0,
        description="Threads evaluating trials concurrently",
    )
    seed_fraction: float = Field(
        default=0.5, gt=0, le=1, description="Share of cells flipped on a dead board"
    )
    mutation_fraction: float = Field(
        default=0.1, gt=0, le=1, description="Share of cells flipped in each child"
    )
    generations: int = Field(
        default=0, ge=0, description="Evolutionary generations to run after the batch search"
    )
    top_n: int = Field(default=101, ge=0, description="Ranked trials to report")
    log_interval: int = Field(
        default=1000, gt=0, description="Trials between progress diagnostics"
    )
    cache_shards: int = Field(default=64, gt=0)
    seed: int | None = Field(default=None, description="RNG seed (None = fresh entropy)")

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _validate_window(self) -> SearchConfig:
        if self.window is None and self.max_ticks // 10 == 0:
            raise ValueError(
                f"max_ticks={self.max_ticks} leaves an empty default window; "
                "set window explicitly"
            )
        return self

    def bound_for(self, max_ticks: int | None = None) -> Bound:
        if self.window is not None:
            return Bound(self.window, self.window)
        return default_bound(max_ticks if max_ticks is not None else self.max_ticks)
