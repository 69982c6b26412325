"""Tests for package logging configuration."""

import io
import logging

import pytest

from magic_cookie.config import LoggingSettings
from magic_cookie.log import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def _restore_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_configure_logging_sets_level_and_single_handler() -> None:
    stream = io.StringIO()

    logger = configure_logging(LoggingSettings(level="debug"), stream=stream)
    configure_logging(LoggingSettings(level="DEBUG"), stream=stream)
    logging.getLogger("magic_cookie.cookie").debug("opened %s", "cookie")

    assert logger.level == logging.DEBUG
    assert sum(isinstance(handler, logging.StreamHandler) for handler in logger.handlers) == 1
    assert "opened cookie" in stream.getvalue()


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_logging(LoggingSettings(level="chatty"))
