"""Cross-trial memo of board states to their remaining lifetime.

The cache lives for one search run and is shared by every trial, possibly
from several worker threads. It is lock-striped: each key hashes to one
shard and all access to a shard goes through that shard's lock, so an
``insert_if_absent`` is a single atomic check-and-set.

NOT bounded - entries are never evicted.
"""

from __future__ import annotations

import threading

from loguru import logger

from lifeevo.board.cell import BoardState

__all__ = ["SurvivalCache"]


class _Shard:
    __slots__ = ("lock", "data")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.data: dict[BoardState, int] = {}


class SurvivalCache:
    """Thread-safe ``BoardState -> remaining ticks`` map, first writer wins."""

    def __init__(self, shards: int = 64) -> None:
        if shards < 1:
            raise ValueError(f"shards must be at least 1, got {shards}")
        self._shards = [_Shard() for _ in range(shards)]
        logger.debug("[SurvivalCache] Created with {} shards", shards)

    def _shard(self, state: BoardState) -> _Shard:
        return self._shards[hash(state) % len(self._shards)]

    def get(self, state: BoardState) -> int | None:
        shard = self._shard(state)
        with shard.lock:
            return shard.data.get(state)

    def insert_if_absent(self, state: BoardState, remaining: int) -> bool:
        """Store ``remaining`` for ``state`` unless a value is already present.

        Returns:
            True if this call stored the value, False if another writer got
            there first.
        """
        if remaining < 0:
            raise ValueError(f"remaining ticks must be >= 0, got {remaining}")
        shard = self._shard(state)
        with shard.lock:
            if state in shard.data:
                return False
            shard.data[state] = remaining
            return True

    def __contains__(self, state: object) -> bool:
        if not isinstance(state, frozenset):
            return False
        shard = self._shard(state)
        with shard.lock:
            return state in shard.data

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.data)
        return total

    def clear(self) -> int:
        """Drop every entry. Returns the number of entries removed."""
        removed = 0
        for shard in self._shards:
            with shard.lock:
                removed += len(shard.data)
                shard.data.clear()
        logger.debug("[SurvivalCache] Cleared {} entries", removed)
        return removed
