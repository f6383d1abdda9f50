from datetime import datetime, timezone
from pathlib import Path
import sys

from loguru import logger

# loguru strips the color tags when the sink is not a terminal
LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <7}</level> | "
    "<cyan>{name}</cyan> | <level>{message}</level>"
)


def setup_logger(
    log_dir: str = "logs",
    level: str = "INFO",
    rotation: str = "50 MB",
    retention: str = "30 days",
) -> str:
    """Log to stderr and to a rotating ``search_<utc timestamp>.log``.

    stdout is left to the ranked report. Returns the log file path.
    """
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    log_file = str(Path(log_dir) / f"search_{stamp}.log")

    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
    logger.add(
        log_file,
        level=level,
        format=LOG_FORMAT,
        colorize=False,
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
    )

    logger.debug("Logging at {} to stderr and {}", level, log_file)
    return log_file
