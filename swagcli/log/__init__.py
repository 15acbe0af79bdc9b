"""
Logging for swagcli.

Extends Python's standard logging with:
- A custom TRACE level below DEBUG
- Structured extra fields rendered as ``[key:value]``
- Hierarchical "/"-separated logger names derived from a root logger
- Output on stderr only, so stdout stays clean for the document

Log Level Control:
- Use standard levels: debug, info, warning, error, critical
- Use custom level: trace
- Disable logging completely: False or "false"
"""

import logging

from .config import LogConfig, resolve_level
from .constants import LogConstants
from .factory import LoggerFactory
from .formatters import LogFormatter
from .logger import Logger

logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")


def create_root_lg(level: str | int | bool = "info") -> Logger:
    """
    Create a root logger writing to stderr.

    Args:
        level: Log level name, number, or False to disable logging

    Returns:
        Configured root logger
    """
    return LoggerFactory.create_root(LogConfig.from_params(level))


__all__ = [
    "LogConfig",
    "LogConstants",
    "LogFormatter",
    "Logger",
    "LoggerFactory",
    "create_root_lg",
    "resolve_level",
]
