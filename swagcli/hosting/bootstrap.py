"""
Host construction for a loaded startup module.
"""

from __future__ import annotations

import logging
from types import ModuleType

from ..config import Settings
from .factory import SwaggerHostFactory
from .host import WebHost, create_default_builder

logger = logging.getLogger(__name__)


class HostBootstrapper:
    """
    Builds the host a document is retrieved from.

    A resolved SwaggerHostFactory takes over construction entirely;
    otherwise the default builder runs the module's startup hook.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings

    def build(
        self, module: ModuleType, factory: SwaggerHostFactory | None = None
    ) -> WebHost:
        """
        Build a host for the startup module.

        Args:
            module: Loaded startup module
            factory: Custom host factory resolved from the module (optional)

        Returns:
            The built host
        """
        if factory is not None:
            return factory.build_host()

        logger.debug("building default host", extra={"startup": module.__name__})
        builder = create_default_builder(self._settings)
        return builder.use_startup(module.__name__).build()
