"""
Factory for creating and configuring loggers.

All handlers write to stderr: standard output is reserved for the retrieved
document and the file confirmation line.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO, cast

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger

# Module-level loggers (logging.getLogger(__name__)) live under this name
PACKAGE_LOGGER = "swagcli"


def _effective_level(config: LogConfig) -> int:
    """Numeric level for a config, mapping False to "nothing passes"."""
    return logging.CRITICAL + 1 if config.level is False else int(config.level)


def _make_handler(config: LogConfig, stream: TextIO | None) -> logging.Handler:
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(LogFormatter(config))
    return handler


def _replace_handlers(lg: logging.Logger, handler: logging.Handler) -> None:
    for old in list(lg.handlers):
        lg.removeHandler(old)
    lg.addHandler(handler)


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(config: LogConfig, stream: TextIO | None = None) -> Logger:
        """
        Create the root ("/") logger with the specified configuration.

        The ``swagcli`` package logger used by module-level loggers is
        configured with the same level and stream.

        Args:
            config: Logger configuration
            stream: Output stream (defaults to sys.stderr)

        Returns:
            Configured root logger

        Example:
            >>> config = LogConfig.from_params(level="info")
            >>> lg = LoggerFactory.create_root(config)
            >>> lg.info("started")
            [12:34:56,789] [I] started [/]
        """
        package = logging.getLogger(PACKAGE_LOGGER)
        package.setLevel(_effective_level(config))
        _replace_handlers(package, _make_handler(config, stream))
        package.propagate = False

        return LoggerFactory.create("/", config, stream)

    @staticmethod
    def create(name: str, config: LogConfig, stream: TextIO | None = None) -> Logger:
        """
        Create (or reconfigure) a logger with its own stderr handler.

        Args:
            name: Logger name
            config: Logger configuration
            stream: Output stream (defaults to sys.stderr)

        Returns:
            Configured logger instance
        """
        existing = logging.root.manager.loggerDict.get(name)
        lg = existing if isinstance(existing, Logger) else Logger(name, config.level)
        lg.disabled = config.level is False
        lg.setLevel(_effective_level(config))
        _replace_handlers(lg, _make_handler(config, stream))
        lg.propagate = False

        logging.root.manager.loggerDict[name] = lg
        return lg

    @staticmethod
    def derive(parent: Logger, tags: str | list[str]) -> Logger:
        """
        Derive a child logger that shares the parent's handlers.

        Examples:
            >>> derived = LoggerFactory.derive(root, "tofile")
            >>> derived.name
            '/tofile'
            >>> LoggerFactory.derive(root, ["hosting", "bootstrap"]).name
            '/hosting/bootstrap'

        Args:
            parent: Parent logger instance
            tags: Single tag string OR list of tag strings to form hierarchy

        Returns:
            Derived logger instance
        """
        if isinstance(tags, str):
            tags = [tags]

        prefix = parent.name if parent.name == "/" else parent.name + "/"
        name = prefix + "/".join(tags)

        existing = logging.root.manager.loggerDict.get(name)
        if isinstance(existing, Logger) and existing.parent is parent:
            return cast(Logger, existing)

        lg = Logger(name, logging.NOTSET)
        lg.disabled = parent.disabled
        lg.parent = parent
        lg.propagate = True
        logging.root.manager.loggerDict[name] = lg
        return lg
