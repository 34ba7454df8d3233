"""Loguru configuration for cv-studio.

Library modules log through ``loguru.logger`` directly; only the CLI
calls :func:`setup_logger` to decide where records go.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <7}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{line} | {message}"


def setup_logger(level: str = "WARNING", log_file: Path | None = None) -> None:
    """Replace loguru's default sink with cv-studio's sinks.

    The stderr sink honours *level*.  When *log_file* is given, a second
    sink captures everything from DEBUG upwards.
    """
    logger.remove()

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
        logger.debug(f"Logging to {log_file}")
