"""
Swagger documents: provider capability, retrieval and serialization.

The FastAPI provider lives in ``swagcli.swagger.fastapi`` and is imported
explicitly, since it requires the optional ``fastapi`` dependency.
"""

from .converter import SwaggerV2Converter, convert_to_v2, rewrite_ref
from .document import OpenApiDocument
from .provider import SwaggerProvider
from .retriever import DocumentRetriever
from .writer import DocumentSerializer, OpenApiSpecVersion, OutputFormat, open_sink

__all__ = [
    "DocumentRetriever",
    "DocumentSerializer",
    "OpenApiDocument",
    "OpenApiSpecVersion",
    "OutputFormat",
    "SwaggerProvider",
    "SwaggerV2Converter",
    "convert_to_v2",
    "open_sink",
    "rewrite_ref",
]
