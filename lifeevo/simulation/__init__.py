from lifeevo.simulation.cache import SurvivalCache
from lifeevo.simulation.fitness import (
    FitnessEvaluator,
    FitnessResult,
    TerminationReason,
    evaluate,
)
from lifeevo.simulation.step import Bound, advance, default_bound, step

__all__ = [
    "Bound",
    "FitnessEvaluator",
    "FitnessResult",
    "SurvivalCache",
    "TerminationReason",
    "advance",
    "default_bound",
    "evaluate",
    "step",
]
