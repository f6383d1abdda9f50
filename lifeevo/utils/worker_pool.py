"""Thread pool for CPU-bound trial evaluation.

`WorkerPool` lets async callers hand a plain synchronous function to a
shared executor instead of juggling ``asyncio.to_thread`` themselves.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from loguru import logger

__all__ = ["WorkerPool"]

T = TypeVar("T")


class WorkerPool:
    def __init__(self, max_workers: int, thread_name_prefix: str = "lifeevo-trial"):
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self._thread_name_prefix = thread_name_prefix
        self._executor: ThreadPoolExecutor | None = None

    # ------------------------------------------------------------------
    # Executor management
    # ------------------------------------------------------------------

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.max_workers,
                thread_name_prefix=self._thread_name_prefix,
            )
            logger.debug(
                "[WorkerPool] Created ThreadPoolExecutor with {} workers",
                self.max_workers,
            )
        return self._executor

    async def run(self, fn: Callable[..., T], *args: Any) -> T:
        """Off-load ``fn(*args)`` to the pool and await its result."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._get_executor(), fn, *args)

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait, cancel_futures=not wait)
            self._executor = None
            logger.debug("[WorkerPool] Executor shut down")
