"""
Swagger provider capability.

A target application registers a SwaggerProvider in its host services; the
retrieval pipeline resolves it and asks for a named document.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .document import OpenApiDocument


class SwaggerProvider(ABC):
    """Produces OpenAPI documents on demand."""

    @property
    def document_names(self) -> list[str]:
        """Names of the documents this provider knows about."""
        return []

    @abstractmethod
    def get_swagger(
        self,
        document_name: str,
        host: str | None = None,
        base_path: str | None = None,
    ) -> OpenApiDocument:
        """
        Produce a document.

        Args:
            document_name: Registered document name, e.g. "v1"
            host: Host to describe in the document (optional)
            base_path: Base path to describe in the document (optional)

        Returns:
            The generated document

        Raises:
            UnknownSwaggerDocumentError: If the name is not registered
        """
        pass
