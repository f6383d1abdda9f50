from concurrent.futures import ThreadPoolExecutor
import threading

import pytest

from lifeevo.board import Cell
from lifeevo.simulation import SurvivalCache


def _state(*cells):
    return frozenset(Cell(r, c) for r, c in cells)


def test_get_missing_returns_none():
    assert SurvivalCache().get(_state((0, 0))) is None


def test_first_writer_wins():
    cache = SurvivalCache()
    key = _state((0, 0), (0, 1))

    assert cache.insert_if_absent(key, 7) is True
    assert cache.insert_if_absent(key, 9) is False
    assert cache.get(key) == 7


def test_contains_and_len():
    cache = SurvivalCache(shards=4)
    for i in range(10):
        cache.insert_if_absent(_state((i, 0)), i)

    assert len(cache) == 10
    assert _state((3, 0)) in cache
    assert _state((30, 0)) not in cache
    assert "not a board" not in cache


def test_equal_states_share_an_entry():
    cache = SurvivalCache()
    cache.insert_if_absent(_state((0, 0), (1, 1)), 3)
    assert cache.get(_state((1, 1), (0, 0))) == 3


def test_clear():
    cache = SurvivalCache()
    cache.insert_if_absent(_state((0, 0)), 1)
    cache.insert_if_absent(_state((1, 0)), 1)

    assert cache.clear() == 2
    assert len(cache) == 0


def test_rejects_negative_remaining():
    with pytest.raises(ValueError):
        SurvivalCache().insert_if_absent(_state((0, 0)), -1)


def test_rejects_zero_shards():
    with pytest.raises(ValueError):
        SurvivalCache(shards=0)


def test_concurrent_inserts_have_exactly_one_winner():
    cache = SurvivalCache(shards=2)
    key = _state((5, 5), (5, 6), (6, 5))
    workers = 16
    barrier = threading.Barrier(workers)

    def insert(value):
        barrier.wait()
        return value, cache.insert_if_absent(key, value)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(insert, range(workers)))

    winners = [value for value, won in outcomes if won]
    assert len(winners) == 1
    assert cache.get(key) == winners[0]
    assert len(cache) == 1
