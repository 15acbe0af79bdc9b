"""
Configuration classes for the logging system.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..exceptions import LoggingError
from .constants import LogConstants


def resolve_level(level: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Args:
        level: Log level as string name, numeric value, or False to disable logging

    Returns:
        Numeric log level or False to disable logging

    Raises:
        LoggingError: If the log level is invalid
    """
    if isinstance(level, bool):
        return logging.INFO if level else False
    if isinstance(level, int):
        return level
    if level.isnumeric():
        return int(level)
    name = level.lower()
    if name in LogConstants.LEVEL_NAMES:
        return LogConstants.LEVEL_NAMES[name]
    raise LoggingError(f"Invalid log level: {level}")


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable configuration for root loggers.

    Attributes:
        level: Numeric level, or False to disable logging
        micros: Show microseconds instead of milliseconds in timestamps
    """

    level: int | bool = logging.INFO
    micros: bool = False

    @classmethod
    def from_params(cls, level: str | int | bool, micros: bool = False) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (string name, numeric value, or False to disable logging)
            micros: Whether to show microsecond precision

        Returns:
            LogConfig instance
        """
        return cls(level=resolve_level(level), micros=micros)
