import asyncio
from datetime import datetime, timezone
import signal
import sys
import time

import hydra
from loguru import logger
from omegaconf import DictConfig

from lifeevo.config import load_config, register_resolvers
from lifeevo.evolution import PopulationManager, SearchConfig
from lifeevo.exceptions import ConfigurationError
from lifeevo.reporting import format_report
from lifeevo.utils.logger_setup import setup_logger


async def run_search(config: SearchConfig) -> None:
    start_time = time.time()

    logger.info("Game-of-Life survival search")
    logger.info(
        f"Creating {config.trials} boards of size {config.board_size}, "
        f"max_ticks={config.max_ticks}"
    )
    logger.info(f"Start time: {datetime.now(timezone.utc).isoformat()}")

    manager = PopulationManager(config)
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, manager.stop)
    loop.add_signal_handler(signal.SIGTERM, manager.stop)
    try:
        trials = await manager.run_trials(config.trials)
        print(format_report(trials, config.top_n))

        if config.generations:
            logger.info(f"Running {config.generations} evolutionary generation(s)")
            summary = await manager.run_generations()
            logger.info(
                "Evolution finished | generations={}, population={}, exhausted={}, stopped={}",
                summary.generations_completed,
                len(summary.population),
                summary.exhausted,
                summary.stopped,
            )
        logger.info("Metrics: {}", manager.metrics.model_dump())
    finally:
        loop.remove_signal_handler(signal.SIGINT)
        loop.remove_signal_handler(signal.SIGTERM)
        manager.shutdown()
        duration = time.time() - start_time
        logger.info(f"Total search duration: {duration:.2f} seconds")


@hydra.main(version_base=None, config_path="config", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entrypoint with Hydra configuration management."""
    log_file_path = setup_logger(
        log_dir=cfg.logging.log_dir,
        level=cfg.logging.level,
        rotation=cfg.logging.rotation,
        retention=cfg.logging.retention,
    )
    logger.info(f"Log file: {log_file_path}")

    try:
        config = load_config(cfg)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(2)

    asyncio.run(run_search(config))


if __name__ == "__main__":
    register_resolvers()
    main()
