"""
Runtime configuration for tapegrad.

Settings are held in a frozen dataclass. The initial values come from the
environment:

- ``TAPEGRAD_DTYPE``: floating dtype for values entering the graph
  (``float16``, ``float32`` or ``float64``; default ``float32``).
- ``TAPEGRAD_LOG_LEVEL``: level name for the ``tapegrad`` logger
  (default ``WARNING``).

`configure()` replaces individual fields at runtime. Values already recorded
in a graph keep the dtype they were created with.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any

import numpy as np

from ..domain._errors import ConfigurationError

_SUPPORTED_DTYPES = {
    "float16": np.float16,
    "float32": np.float32,
    "float64": np.float64,
}


def _level_name(level: Any) -> str:
    """
    Normalize a log level to its upper-case name.

    Accepts a level name in any case (``"debug"``) or a standard integer
    level (``logging.DEBUG``).

    Raises
    ------
    ConfigurationError
        If `level` does not name a known logging level.
    """
    if isinstance(level, str):
        name = level.upper()
        if isinstance(logging.getLevelName(name), int):
            return name
    elif isinstance(level, int) and not isinstance(level, bool):
        name = logging.getLevelName(level)
        if not name.startswith("Level "):
            return name
    raise ConfigurationError(f"Unknown log level {level!r}")


@dataclass(frozen=True)
class Settings:
    """
    Immutable package settings.

    Attributes
    ----------
    dtype : str
        Name of the floating dtype applied to raw values entering the graph.
    log_level : str
        Level name for the package logger. Integer levels such as
        ``logging.DEBUG`` are accepted and stored by name.
    """

    dtype: str = "float32"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.dtype not in _SUPPORTED_DTYPES:
            raise ConfigurationError(
                f"Unsupported dtype {self.dtype!r}; "
                f"expected one of {sorted(_SUPPORTED_DTYPES)}"
            )
        object.__setattr__(self, "log_level", _level_name(self.log_level))

    @property
    def np_dtype(self) -> np.dtype:
        """Return the configured dtype as a NumPy dtype."""
        return np.dtype(_SUPPORTED_DTYPES[self.dtype])

    @property
    def log_level_value(self) -> int:
        """Return the configured log level as a `logging` integer level."""
        return logging.getLevelName(self.log_level)


def settings_from_env() -> Settings:
    """
    Build settings from the process environment.

    Returns
    -------
    Settings
        Settings populated from ``TAPEGRAD_DTYPE`` and ``TAPEGRAD_LOG_LEVEL``,
        falling back to the dataclass defaults.

    Raises
    ------
    ConfigurationError
        If an environment variable holds an invalid value.
    """
    return Settings(
        dtype=os.getenv("TAPEGRAD_DTYPE", Settings.dtype),
        log_level=os.getenv("TAPEGRAD_LOG_LEVEL", Settings.log_level),
    )


_settings: Settings = settings_from_env()


def get_settings() -> Settings:
    """Return the active settings."""
    return _settings


def configure(**overrides: Any) -> Settings:
    """
    Replace one or more settings fields.

    Parameters
    ----------
    **overrides : Any
        Field values to replace (``dtype``, ``log_level``).

    Returns
    -------
    Settings
        The new active settings.

    Raises
    ------
    ConfigurationError
        If a field name is unknown or a value is invalid. The active settings
        are left unchanged in that case.
    """
    global _settings

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"Unknown setting(s): {', '.join(unknown)}")

    _settings = replace(_settings, **overrides)

    # local import: the logging module reads settings at import time
    from ._logging import apply_log_level

    apply_log_level(_settings.log_level_value)
    return _settings
