"""
Constants for the logging system.
"""

import logging


class LogConstants:
    """Constants for the logging system."""

    # Timestamp format (milliseconds are appended by the formatter)
    TIME_FORMAT: str = "%H:%M:%S"

    # Custom log levels
    CUSTOM_LEVELS: dict[str, int] = {"TRACE": 5}

    # Log level names for resolution
    LEVEL_NAMES: dict[str, int | bool] = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
        "trace": 5,
        "false": False,  # Special value to disable all logging
    }

    # Attribute used to carry structured extra fields on log records
    EXTRA_ATTR: str = "__swagcli__extra"
