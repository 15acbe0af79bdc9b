"""
Environment-derived settings and shared constants.

Per-application configuration lives in the runtime descriptor files next to
the startup module (see ``swagcli.runtime.descriptors``). The tool's own
settings come from ``SWAGCLI_*`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

# Environment variables
ENV_LOG_LEVEL = "SWAGCLI_LOG_LEVEL"
ENV_ENVIRONMENT = "SWAGCLI_ENVIRONMENT"

DEFAULT_LOG_LEVEL = "info"
DEFAULT_ENVIRONMENT = "Production"

# Maximum descriptor file size (10MB)
MAX_DESCRIPTOR_SIZE_BYTES = 10 * 1024 * 1024

# Command names. The internal command is the public one with a leading
# underscore and is only ever invoked by the relauncher.
PUBLIC_COMMAND = "tofile"
INTERNAL_COMMAND = "_" + PUBLIC_COMMAND


@dataclass(frozen=True)
class Settings:
    """
    Tool settings gathered from the environment.

    Attributes:
        log_level: Log level name used when --log-level is not given
        environment: Host environment name exposed to the target application
    """

    log_level: str = DEFAULT_LOG_LEVEL
    environment: str = DEFAULT_ENVIRONMENT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """
        Build settings from environment variables.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Settings with unset or empty variables falling back to defaults
        """
        env = os.environ if environ is None else environ
        return cls(
            log_level=env.get(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL,
            environment=env.get(ENV_ENVIRONMENT) or DEFAULT_ENVIRONMENT,
        )
