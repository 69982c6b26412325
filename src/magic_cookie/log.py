"""Logging helpers for magic-cookie."""

from __future__ import annotations

import logging
from typing import IO

from magic_cookie.config.models import LoggingSettings

PACKAGE_LOGGER = "magic_cookie"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    settings: LoggingSettings | None = None,
    *,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach a stream handler to the package logger at the configured level.

    Calling this more than once only updates the level; a second handler is
    never added.

    Args:
        settings: Logging settings; defaults to :class:`LoggingSettings`.
        stream: Destination stream; defaults to ``sys.stderr``.

    Returns:
        logging.Logger: The configured package logger.
    """
    settings = settings or LoggingSettings()
    logger = logging.getLogger(PACKAGE_LOGGER)
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {settings.level!r}")
    logger.setLevel(level)

    if not any(getattr(handler, "_magic_cookie", False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._magic_cookie = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["PACKAGE_LOGGER", "configure_logging"]
