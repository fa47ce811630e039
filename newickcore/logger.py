"""Logging setup for newickcore."""

import logging
from typing import Optional, Union

from newickcore.config import Config

PACKAGE_LOGGER_NAME = "newickcore"


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    The package installs no handlers on import; applications call this once
    if they want newickcore's records on stderr.

    Args:
        level: Logging level name or number. Defaults to ``Config.LOG_LEVEL``.

    Returns:
        The configured ``newickcore`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    # Only add a handler once, repeated calls just update the level
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False

    if level is None:
        level = Config.LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)
    return logger
