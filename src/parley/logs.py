"""Logging setup.

All modules log through ``loguru.logger``. This module only decides
where records go.
"""

import sys
from pathlib import Path

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function} - {message}"


def configure_logging(level: str = "WARNING", log_file: str | Path | None = None) -> None:
    """Replace loguru's default sink.

    Args:
        level: Minimum level written to stderr
        log_file: Optional file receiving DEBUG and above, rotated at 1 MB
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    if log_file is not None:
        logger.add(
            Path(log_file).expanduser(),
            level="DEBUG",
            rotation="1 MB",
            retention=3,
        )
