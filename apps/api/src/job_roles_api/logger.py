from pathlib import Path
import sys

from loguru import logger

_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logger(log_level: str = "INFO", log_file: str | None = None) -> None:
    """Route loguru to a single sink: ``log_file`` when given, stderr otherwise."""
    logger.remove()

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, format=_FORMAT, level=log_level, rotation="100 MB", enqueue=True)
    else:
        logger.add(sys.stderr, format=_FORMAT, level=log_level)
