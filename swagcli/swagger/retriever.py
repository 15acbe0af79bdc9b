"""
Retrieval of a named document from a built host.
"""

from __future__ import annotations

import logging

from ..hosting.host import WebHost
from .document import OpenApiDocument
from .provider import SwaggerProvider

logger = logging.getLogger(__name__)


class DocumentRetriever:
    """Asks the host's SwaggerProvider for a document."""

    def get(
        self,
        host: WebHost,
        document_name: str,
        host_override: str | None = None,
        base_path_override: str | None = None,
    ) -> OpenApiDocument:
        """
        Retrieve a document.

        Args:
            host: Built host whose services include a SwaggerProvider
            document_name: Registered document name
            host_override: Host to describe in the document (optional)
            base_path_override: Base path to describe in the document (optional)

        Returns:
            The retrieved document

        Raises:
            ServiceNotRegisteredError: If no SwaggerProvider is registered
            UnknownSwaggerDocumentError: If the document name is unknown
        """
        provider = host.services.get_required_service(SwaggerProvider)
        logger.debug(
            "retrieving document",
            extra={"document": document_name, "provider": type(provider).__name__},
        )
        document = provider.get_swagger(
            document_name, host=host_override, base_path=base_path_override
        )
        # Providers may ignore the overrides; applying them again is a no-op
        return document.with_overrides(
            host=host_override, base_path=base_path_override
        )
