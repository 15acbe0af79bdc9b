"""
Logger class with structured extra fields.

Extra fields passed via ``extra={...}`` are kept together on the record so
the formatter can render them as ``[key:value]`` after the message.
"""

from __future__ import annotations

import logging
from typing import Any

from .constants import LogConstants


class Logger(logging.Logger):
    """
    Logger that keeps per-call ``extra`` fields as one structured mapping.

    Adds a ``trace`` method for the custom TRACE level and supports
    disabling all output with a level of ``False``.
    """

    def __init__(self, name: str, level: int | bool = logging.INFO) -> None:
        """
        Initialize the logger.

        Args:
            name: Logger name
            level: Numeric level, or False to disable logging
        """
        if level is False:
            super().__init__(name, logging.CRITICAL + 1)
            self._logging_disabled = True
        else:
            super().__init__(name, level)
            self._logging_disabled = False

    @property
    def disabled(self) -> bool:  # type: ignore[override]
        """Check if logging is disabled."""
        return self._logging_disabled

    @disabled.setter
    def disabled(self, value: bool) -> None:
        self._logging_disabled = value

    def makeRecord(
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: dict[str, Any] | None = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create log record, attaching extra fields as a single mapping."""
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        setattr(record, LogConstants.EXTRA_ATTR, dict(extra) if extra else {})
        return record

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a TRACE level message.

        Args:
            msg: Log message
            *args: Message format arguments
            **kwargs: Additional keyword arguments including 'extra' for structured data
        """
        level = LogConstants.CUSTOM_LEVELS["TRACE"]
        if self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)
