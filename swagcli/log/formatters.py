"""
Log formatter rendering ``[time] [L] message [key:value] [/name]`` lines.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from .config import LogConfig
from .constants import LogConstants


def _format_value(value: Any) -> str:
    """Format an extra field value."""
    if isinstance(value, BaseException):
        return value.__class__.__name__
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


# Attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def record_extra(record: logging.LogRecord) -> dict[str, Any]:
    """Return the structured extra fields of a record."""
    extra = getattr(record, LogConstants.EXTRA_ATTR, None)
    if extra is not None:
        return extra
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


def format_extra(extra: dict[str, Any]) -> str:
    """Render extra fields in sorted key order, or an empty string."""
    if not extra:
        return ""
    parts = [f"[{key}:{_format_value(extra[key])}]" for key in sorted(extra)]
    return " " + " ".join(parts)


class LogFormatter(logging.Formatter):
    """
    Formatter for swagcli log records.

    Example output:
        [12:34:56,789] [I] loading startup module [path:/srv/app.py] [/tofile]
    """

    def __init__(self, config: LogConfig | None = None) -> None:
        super().__init__()
        self._config = config or LogConfig()

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        """Format timestamp with millisecond or microsecond precision."""
        base = time.strftime(LogConstants.TIME_FORMAT, self.converter(record.created))
        if self._config.micros:
            return f"{base},{int((record.created % 1) * 1_000_000):06d}"
        return f"{base},{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        """Format a record, appending extra fields, logger name and any traceback."""
        level = logging.getLevelName(record.levelno)[:1]
        extra = record_extra(record)
        line = (
            f"[{self.formatTime(record)}] [{level}] {record.getMessage()}"
            f"{format_extra(extra)} [{record.name}]"
        )
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
