"""
Package logging helpers.

All tapegrad modules log through children of the ``tapegrad`` logger. The
package logger receives a single stream handler the first time it is
requested, and its level follows `Settings.log_level`.
"""

from __future__ import annotations

import logging

from ._config import get_settings

PACKAGE_LOGGER_NAME = "tapegrad"

_FORMAT = "[%(asctime)s][%(levelname)s][%(name)s] %(message)s"


def _package_logger() -> logging.Logger:
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(get_settings().log_level_value)
    return logger


def apply_log_level(level: int) -> None:
    """Set the level of the package logger."""
    _package_logger().setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger for a tapegrad module.

    Parameters
    ----------
    name : str
        Usually the calling module's ``__name__``. Names outside the
        ``tapegrad`` namespace are nested under it.

    Returns
    -------
    logging.Logger
        A logger that propagates to the configured package logger.
    """
    _package_logger()
    if name != PACKAGE_LOGGER_NAME and not name.startswith(PACKAGE_LOGGER_NAME + "."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
