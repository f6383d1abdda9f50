import sys
import threading

from loguru import logger
import pytest

from lifeevo.utils.logger_setup import setup_logger
from lifeevo.utils.worker_pool import WorkerPool


@pytest.mark.asyncio
async def test_run_executes_off_the_event_loop_thread():
    pool = WorkerPool(2)
    main_thread = threading.get_ident()
    try:
        thread_id = await pool.run(threading.get_ident)
        total = await pool.run(sum, [1, 2, 3])
    finally:
        pool.shutdown()

    assert thread_id != main_thread
    assert total == 6


def test_shutdown_without_work_is_harmless():
    pool = WorkerPool(1)
    pool.shutdown()
    pool.shutdown()


def test_rejects_empty_pool():
    with pytest.raises(ValueError):
        WorkerPool(0)


def test_setup_logger_writes_to_file(tmp_path):
    try:
        log_file = setup_logger(log_dir=str(tmp_path), level="DEBUG")
        logger.info("hello from the test")
        logger.complete()
        assert log_file.startswith(str(tmp_path))
        with open(log_file, encoding="utf-8") as fh:
            assert "hello from the test" in fh.read()
    finally:
        logger.remove()
        logger.add(sys.stderr)
