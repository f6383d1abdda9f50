from lifeevo.evolution.config import SearchConfig
from lifeevo.evolution.metrics import SearchMetrics
from lifeevo.evolution.models import EvolutionSummary, Trial
from lifeevo.evolution.mutator import all_dead_board, flip_count, mutate, random_board
from lifeevo.evolution.population import (
    PopulationManager,
    rank_trials,
    reproduction_counts,
)

__all__ = [
    "EvolutionSummary",
    "PopulationManager",
    "SearchConfig",
    "SearchMetrics",
    "Trial",
    "all_dead_board",
    "flip_count",
    "mutate",
    "random_board",
    "rank_trials",
    "reproduction_counts",
]
