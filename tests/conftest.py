"""Shared pytest fixtures."""

import logging

import pytest

from tabular_profiler.core.logging_config import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog sees package records in every test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a file under tmp_path and return its path as a string."""
    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return str(path)
    return _write
