"""
Logging configuration for the profiler.

All modules log through children of the ``tabular_profiler`` logger, so
configuring that one logger controls the whole package.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from tabular_profiler.core.constants import LOG_FORMAT, LOG_DATE_FORMAT

ROOT_LOGGER_NAME = "tabular_profiler"


def setup_logging(level: Union[str, int] = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure package logging.

    Replaces any handlers installed by a previous call, so repeated CLI
    invocations in one process do not duplicate output.

    Args:
        level: Logging level name or number (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path of a log file to write alongside stderr

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a module logger."""
    return logging.getLogger(name)
