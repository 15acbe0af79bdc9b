"""
Serialization of retrieved documents to an output sink.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from io import StringIO
from pathlib import Path
from typing import Any, TextIO

import yaml  # type: ignore[import-untyped]

from ..exceptions import SerializationError
from .converter import convert_to_v2
from .document import OpenApiDocument

logger = logging.getLogger(__name__)


class OpenApiSpecVersion(Enum):
    """Supported serialization schema versions."""

    V2 = "2.0"  # legacy: Swagger 2.0
    V3 = "3.0"  # current: OpenAPI 3.x, as produced by the provider


class OutputFormat(str, Enum):
    """Textual encodings of the serialized document."""

    JSON = "json"
    YAML = "yaml"


def _with_servers(data: dict[str, Any], url: str | None) -> dict[str, Any]:
    """Place a single server entry right after "info" (or first)."""
    if url is None:
        return data
    out: dict[str, Any] = {}
    inserted = False
    for key, value in data.items():
        if key == "servers":
            continue
        out[key] = value
        if key == "info":
            out["servers"] = [{"url": url}]
            inserted = True
    if not inserted:
        out = {"servers": [{"url": url}], **out}
    return out


class DocumentSerializer:
    """
    Writes an OpenApiDocument in one schema version and format.

    Example:
        serializer = DocumentSerializer(OpenApiSpecVersion.V2)
        with open_sink(Path("swagger.json")) as sink:
            serializer.write(document, sink)
    """

    def __init__(
        self,
        spec_version: OpenApiSpecVersion = OpenApiSpecVersion.V3,
        fmt: OutputFormat = OutputFormat.JSON,
    ) -> None:
        self.spec_version = spec_version
        self.fmt = fmt

    def to_dict(self, document: OpenApiDocument) -> dict[str, Any]:
        """Build the mapping to serialize, with overrides applied."""
        if self.spec_version is OpenApiSpecVersion.V2:
            return convert_to_v2(
                document.spec, host=document.host, base_path=document.base_path
            )
        return _with_servers(document.to_dict(), document.server_url())

    def write(self, document: OpenApiDocument, stream: TextIO) -> None:
        """
        Serialize a document to an open text stream.

        Raises:
            SerializationError: If the document cannot be encoded or written
        """
        try:
            data = self.to_dict(document)
            if self.fmt is OutputFormat.YAML:
                yaml.safe_dump(
                    data, stream, sort_keys=False, allow_unicode=True, width=120
                )
            else:
                json.dump(data, stream, indent=2, ensure_ascii=False)
                stream.write("\n")
        except (TypeError, ValueError, OSError, yaml.YAMLError) as e:
            raise SerializationError(
                f"Cannot serialize document: {e}",
                document=document.name,
                version=self.spec_version.value,
            ) from e

        logger.debug(
            "document serialized",
            extra={
                "document": document.name,
                "version": self.spec_version.value,
                "format": self.fmt.value,
            },
        )

    def dumps(self, document: OpenApiDocument) -> str:
        """Serialize a document to a string."""
        buffer = StringIO()
        self.write(document, buffer)
        return buffer.getvalue()


@contextmanager
def open_sink(
    output_path: Path | None, stdout: TextIO | None = None
) -> Iterator[TextIO]:
    """
    Acquire the output sink for one write.

    With a path, the file is created fresh (truncating existing content) and
    closed on exit; if the block raises, the partially written file is
    removed before the exception propagates. Without a path, standard output
    is used and only flushed, never closed.

    Args:
        output_path: File to write, or None for standard output
        stdout: Stream used instead of sys.stdout (optional)

    Yields:
        Writable text stream

    Raises:
        SerializationError: If the output file cannot be opened
    """
    if output_path is None:
        stream = stdout if stdout is not None else sys.stdout
        try:
            yield stream
        finally:
            stream.flush()
        return

    try:
        f = output_path.open("w", encoding="utf-8")
    except OSError as e:
        raise SerializationError(
            f"Cannot open output file: {e}", path=str(output_path)
        ) from e

    try:
        with f:
            yield f
    except Exception:
        output_path.unlink(missing_ok=True)
        raise
