"""
Swagger provider for FastAPI applications.

Installation:
    pip install swagcli[fastapi]

Example (in the application's startup module):
    from fastapi import FastAPI
    from swagcli.swagger.fastapi import add_swagger_gen

    app = FastAPI(title="Orders API")

    class Startup:
        def configure_services(self, services):
            add_swagger_gen(services, app, name="v1", version="1.0")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi.openapi.utils import get_openapi

from ..exceptions import UnknownSwaggerDocumentError
from .document import OpenApiDocument
from .provider import SwaggerProvider

if TYPE_CHECKING:
    from fastapi import FastAPI

    from ..hosting.services import ServiceCollection


@dataclass(frozen=True)
class SwaggerDoc:
    """
    A registered document: the app it describes and its info overrides.

    Attributes:
        name: Document name used on the command line
        app: FastAPI application
        title: Title override (defaults to app.title)
        version: Version override (defaults to app.version)
        description: Description override (defaults to app.description)
    """

    name: str
    app: FastAPI
    title: str | None = None
    version: str | None = None
    description: str | None = None


class FastAPISwaggerProvider(SwaggerProvider):
    """
    Generates documents from FastAPI route tables.

    Documents are generated fresh on each call with
    ``fastapi.openapi.utils.get_openapi`` so info overrides never leak into
    the application's own cached ``app.openapi()`` schema.
    """

    def __init__(self) -> None:
        self._docs: dict[str, SwaggerDoc] = {}

    @property
    def document_names(self) -> list[str]:
        return list(self._docs)

    def add_document(
        self,
        name: str,
        app: FastAPI,
        *,
        title: str | None = None,
        version: str | None = None,
        description: str | None = None,
    ) -> FastAPISwaggerProvider:
        """Register (or replace) a named document for a FastAPI app."""
        self._docs[name] = SwaggerDoc(name, app, title, version, description)
        return self

    def _generate(self, doc: SwaggerDoc) -> dict:
        app = doc.app
        description = app.description if doc.description is None else doc.description
        return get_openapi(
            title=doc.title or app.title,
            version=doc.version or app.version,
            openapi_version=app.openapi_version,
            summary=app.summary,
            description=description,
            routes=app.routes,
            webhooks=app.webhooks.routes,
            tags=app.openapi_tags,
            servers=app.servers,
            terms_of_service=app.terms_of_service,
            contact=app.contact,
            license_info=app.license_info,
            separate_input_output_schemas=app.separate_input_output_schemas,
        )

    def get_swagger(
        self,
        document_name: str,
        host: str | None = None,
        base_path: str | None = None,
    ) -> OpenApiDocument:
        """Generate the named document with the given overrides."""
        doc = self._docs.get(document_name)
        if doc is None:
            raise UnknownSwaggerDocumentError(document_name, self.document_names)
        document = OpenApiDocument(name=document_name, spec=self._generate(doc))
        return document.with_overrides(host=host, base_path=base_path)


def add_swagger_gen(
    services: ServiceCollection,
    app: FastAPI,
    name: str = "v1",
    *,
    title: str | None = None,
    version: str | None = None,
    description: str | None = None,
) -> FastAPISwaggerProvider:
    """
    Register a FastAPI document in a service collection.

    Repeated calls add documents to the same provider.

    Args:
        services: Service collection of the host being built
        app: FastAPI application to describe
        name: Document name (default: "v1")
        title: Title override (optional)
        version: Version override (optional)
        description: Description override (optional)

    Returns:
        The provider registered as SwaggerProvider
    """
    provider = services.find_instance(SwaggerProvider)
    if not isinstance(provider, FastAPISwaggerProvider):
        provider = FastAPISwaggerProvider()
        services.add_singleton(SwaggerProvider, provider)
    provider.add_document(
        name, app, title=title, version=version, description=description
    )
    return provider
