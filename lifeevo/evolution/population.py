from __future__ import annotations

import asyncio
from collections.abc import Sequence
import threading
import time

from loguru import logger
import numpy as np

from lifeevo.board.conversions import dense_to_state, state_to_dense
from lifeevo.evolution.config import SearchConfig
from lifeevo.evolution.metrics import SearchMetrics
from lifeevo.evolution.models import EvolutionSummary, Trial
from lifeevo.evolution.mutator import mutate, random_board
from lifeevo.exceptions import (
    ConfigurationError,
    EmptyBoardError,
    EvolutionError,
    LifeEvoError,
)
from lifeevo.simulation.cache import SurvivalCache
from lifeevo.simulation.fitness import FitnessEvaluator, FitnessResult
from lifeevo.simulation.step import Bound, advance
from lifeevo.utils.worker_pool import WorkerPool

__all__ = ["PopulationManager", "rank_trials", "reproduction_counts"]


def reproduction_counts(live_totals: Sequence[int], deficit: int) -> list[int]:
    """Children per survivor: ``floor(share * deficit) + 1``.

    ``share`` is the survivor's part of the summed live-cell totals. Every
    survivor gets at least one child.
    """
    if deficit < 0:
        raise ValueError(f"deficit must be >= 0, got {deficit}")
    total = sum(live_totals)
    if total <= 0:
        return [1] * len(live_totals)
    return [cells * deficit // total + 1 for cells in live_totals]


def rank_trials(trials: Sequence[Trial]) -> list[Trial]:
    """Sort by survival tick, longest first. Ties keep no particular order."""
    return sorted(trials, key=lambda t: t.survival_ticks, reverse=True)


class PopulationManager:
    """
    Drives trials through the fitness evaluator:
    - batch search: rank many independent random boards,
    - evolutionary steps: threshold, reproduce and mutate a population.

    Evaluations under the same tick budget and window share one
    SurvivalCache; a different budget or window gets its own, since cached
    lifetimes only hold for the budget they were computed under.
    Evaluations run on a thread pool; RNG draws and metric updates stay on the event-loop thread.
    """

    def __init__(
        self,
        config: SearchConfig,
        cache: SurvivalCache | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config
        self.cache = cache if cache is not None else SurvivalCache(config.cache_shards)
        # (max_ticks, bound) -> cache; the configured budget uses self.cache
        self._caches: dict[tuple[int, Bound], SurvivalCache] = {
            (config.max_ticks, config.bound_for()): self.cache
        }
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.metrics = SearchMetrics()

        self._pool = WorkerPool(config.workers)
        self._stop = threading.Event()
        self._last_log_time = time.perf_counter()
        self._last_logged = self.metrics.model_copy()

        logger.info(
            "[PopulationManager] Init | board_size={}, max_ticks={}, window={}, workers={}",
            config.board_size,
            config.max_ticks,
            config.bound_for().max_row,
            config.workers,
        )

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def stop(self) -> None:
        """Ask the run to finish; trials already running complete normally."""
        if not self._stop.is_set():
            logger.info("[PopulationManager] Stop requested")
        self._stop.set()

    def is_stopped(self) -> bool:
        return self._stop.is_set()

    def shutdown(self) -> None:
        self._pool.shutdown()

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def cache_for(self, max_ticks: int, bound: Bound) -> SurvivalCache:
        key = (max_ticks, bound)
        cache = self._caches.get(key)
        if cache is None:
            cache = SurvivalCache(self.config.cache_shards)
            self._caches[key] = cache
            logger.debug(
                "[PopulationManager] New survival cache for max_ticks={}, bound={}",
                max_ticks,
                bound,
            )
        return cache

    def cache_size(self) -> int:
        return sum(len(cache) for cache in self._caches.values())

    def _evaluator(self, max_ticks: int) -> FitnessEvaluator:
        bound = self.config.bound_for(max_ticks)
        return FitnessEvaluator(max_ticks, bound, self.cache_for(max_ticks, bound))

    def _run_trial(
        self, evaluator: FitnessEvaluator, board: np.ndarray
    ) -> FitnessResult | None:
        # Runs on a worker thread. The stop flag is only checked here,
        # between trials, never inside the tick loop.
        if self._stop.is_set():
            return None
        return evaluator.evaluate_board(board)

    async def _trial(
        self, evaluator: FitnessEvaluator, board: np.ndarray
    ) -> FitnessResult | None:
        result = await self._pool.run(self._run_trial, evaluator, board)
        if result is None:
            self.metrics.trials_skipped += 1
        else:
            self.metrics.record_trial(result)
            if self.metrics.trials_completed % self.config.log_interval == 0:
                self._log_progress()
        return result

    async def evaluate_boards(
        self, boards: Sequence[np.ndarray], max_ticks: int | None = None
    ) -> list[FitnessResult | None]:
        """Evaluate ``boards`` concurrently; ``None`` marks a skipped trial."""
        max_ticks = self._resolve_max_ticks(max_ticks)
        evaluator = self._evaluator(max_ticks)
        return list(await asyncio.gather(*(self._trial(evaluator, b) for b in boards)))

    def _resolve_max_ticks(self, max_ticks: int | None) -> int:
        if max_ticks is None:
            return self.config.max_ticks
        if max_ticks <= 0:
            raise ConfigurationError(f"max_ticks must be positive, got {max_ticks}")
        return max_ticks

    def _log_progress(self) -> None:
        now = time.perf_counter()
        last, cur = self._last_logged, self.metrics
        total = cur.total_ticks - last.total_ticks
        saved = cur.ticks_saved - last.ticks_saved
        logger.info(
            "[PopulationManager] {} trials in {:.2f}s | cache_hits={} ticks_saved={}/{} ({:.1f}%) cache_size={}",
            cur.trials_completed - last.trials_completed,
            now - self._last_log_time,
            cur.cache_hits - last.cache_hits,
            saved,
            total,
            100.0 * saved / total if total else 0.0,
            self.cache_size(),
        )
        self._last_log_time = now
        self._last_logged = cur.model_copy()

    # ------------------------------------------------------------------
    # Batch search
    # ------------------------------------------------------------------

    def initial_population(self, count: int, size: int | None = None) -> list[np.ndarray]:
        size = self.config.board_size if size is None else size
        if count < 0:
            raise ConfigurationError(f"count must be >= 0, got {count}")
        if size <= 0:
            raise ConfigurationError(f"size must be positive, got {size}")
        return [
            random_board(size, self.rng, self.config.seed_fraction) for _ in range(count)
        ]

    async def run_trials(
        self,
        count: int,
        size: int | None = None,
        max_ticks: int | None = None,
    ) -> list[Trial]:
        """Evaluate ``count`` random boards and rank them, longest-lived first."""
        boards = self.initial_population(count, size)
        if not boards:
            logger.info("[PopulationManager] No trials requested")
            return []

        logger.info("[PopulationManager] Running {} trials", len(boards))
        results = await self.evaluate_boards(boards, max_ticks)

        trials = [
            Trial.from_result(board, result)
            for board, result in zip(boards, results)
            if result is not None
        ]
        if len(trials) < len(boards):
            logger.warning(
                "[PopulationManager] Stopped early: {}/{} trials evaluated",
                len(trials),
                len(boards),
            )
        logger.info(
            "[PopulationManager] Trials done | evaluated={}, cache_size={}, savings={:.1%}",
            len(trials),
            self.cache_size(),
            self.metrics.savings_ratio,
        )
        return rank_trials(trials)

    # ------------------------------------------------------------------
    # Evolutionary steps
    # ------------------------------------------------------------------

    def _grow(self, board: np.ndarray) -> np.ndarray:
        """Advance ``board`` one tick unless it already doubled in size."""
        if max(board.shape) >= 2 * self.config.board_size:
            return board
        try:
            return state_to_dense(advance(dense_to_state(board), 1))
        except EmptyBoardError:
            logger.debug("[PopulationManager] Survivor died while growing; reusing it")
            return board

    async def next_generation(
        self, current: Sequence[np.ndarray], max_ticks: int | None = None
    ) -> list[np.ndarray]:
        """Produce the next population from ``current``.

        Boards surviving more than half of ``max_ticks`` reproduce in
        proportion to their live-cell totals; the rest leave no offspring.
        An empty return value means the search is exhausted.
        """
        try:
            return await self._next_generation(current, max_ticks)
        except LifeEvoError:
            raise
        except Exception as exc:
            raise EvolutionError(f"Evolution step failed: {exc}") from exc

    async def _next_generation(
        self, current: Sequence[np.ndarray], max_ticks: int | None
    ) -> list[np.ndarray]:
        max_ticks = self._resolve_max_ticks(max_ticks)
        if not current:
            logger.warning("[PopulationManager] Empty population, nothing to evolve")
            return []

        results = await self.evaluate_boards(current, max_ticks)
        if self.is_stopped():
            logger.info(
                "[PopulationManager] Stopped during generation; {}/{} boards evaluated",
                sum(r is not None for r in results),
                len(current),
            )
            return []

        threshold = max_ticks // 2
        survivors = [
            (board, result)
            for board, result in zip(current, results)
            if result is not None and result.termination_tick > threshold
        ]
        if not survivors:
            logger.warning(
                "[PopulationManager] No board survived past tick {}; search exhausted",
                threshold,
            )
            self.metrics.record_generation(0, 0)
            return []

        deficit = len(current) - len(survivors)
        counts = reproduction_counts([r.total_live_cells for _, r in survivors], deficit)

        children: list[np.ndarray] = []
        for (board, _), n_children in zip(survivors, counts):
            grown = self._grow(board)
            children.extend(
                mutate(grown, self.config.mutation_fraction, self.rng)
                for _ in range(n_children)
            )

        self.metrics.record_generation(len(survivors), len(children))
        logger.info(
            "[PopulationManager] Generation {} | survivors={}/{}, children={}",
            self.metrics.total_generations,
            len(survivors),
            len(current),
            len(children),
        )
        return children

    async def run_generations(
        self,
        initial: Sequence[np.ndarray] | None = None,
        generations: int | None = None,
        max_ticks: int | None = None,
    ) -> EvolutionSummary:
        """Apply :meth:`next_generation` repeatedly.

        Stops early when a generation comes back empty (reported as
        ``exhausted``) or when :meth:`stop` was called.
        """
        generations = self.config.generations if generations is None else generations
        if generations < 0:
            raise ConfigurationError(f"generations must be >= 0, got {generations}")
        population = (
            list(initial)
            if initial is not None
            else self.initial_population(self.config.trials)
        )

        summary = EvolutionSummary(population=population)
        for _ in range(generations):
            if self.is_stopped():
                summary.stopped = True
                break
            population = await self.next_generation(population, max_ticks)
            summary.population = population
            summary.generations_completed += 1
            if not population and self.is_stopped():
                summary.stopped = True
                break
            if not population:
                summary.exhausted = True
                logger.warning(
                    "[PopulationManager] Search exhausted after {} generation(s)",
                    summary.generations_completed,
                )
                break

        return summary
