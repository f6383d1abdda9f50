from loguru import logger
import numpy as np
import pytest

from lifeevo.board import Cell
from lifeevo.evolution import SearchConfig


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def block():
    return frozenset({Cell(0, 0), Cell(0, 1), Cell(1, 0), Cell(1, 1)})


@pytest.fixture
def blinker():
    return frozenset({Cell(0, -1), Cell(0, 0), Cell(0, 1)})


@pytest.fixture
def glider():
    return frozenset({Cell(0, 1), Cell(1, 2), Cell(2, 0), Cell(2, 1), Cell(2, 2)})


@pytest.fixture
def small_config():
    return SearchConfig(
        board_size=4,
        trials=20,
        max_ticks=200,
        window=20,
        workers=2,
        log_interval=5,
        seed=7,
    )


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
