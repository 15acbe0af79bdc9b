"""
Host factory capability.

A startup module may define exactly one public, concrete subclass of
``SwaggerHostFactory`` to take over host construction, for example to run
the application against test settings while its document is extracted:

    from swagcli.hosting import SwaggerHostFactory, create_default_builder

    class SwaggerHost(SwaggerHostFactory):
        def build_host(self):
            return (create_default_builder()
                .use_setting("database_url", "sqlite://")
                .use_startup(__name__)
                .build())
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .host import WebHost


class SwaggerHostFactory(ABC):
    """Builds the host a Swagger document is retrieved from."""

    @abstractmethod
    def build_host(self) -> WebHost:
        """
        Build a ready-to-use host.

        Returns:
            WebHost whose services include a SwaggerProvider
        """
        pass
