"""
Invocation request for the document retrieval commands.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from .swagger.writer import OpenApiSpecVersion, OutputFormat


@dataclass(frozen=True)
class InvocationRequest:
    """
    Immutable request built once from the parsed command line.

    Attributes:
        startup_module_path: Path of the target application's startup module
        document_name: Name of the Swagger document to retrieve (e.g. "v1")
        output_path: Absolute output file path, or None for standard output
        host_override: Host to describe in the document (optional)
        base_path_override: Base path to describe in the document (optional)
        use_legacy_schema: Serialize as Swagger 2.0 instead of OpenAPI 3
        as_yaml: Serialize as YAML instead of JSON
    """

    startup_module_path: str
    document_name: str
    output_path: Path | None = None
    host_override: str | None = None
    base_path_override: str | None = None
    use_legacy_schema: bool = False
    as_yaml: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> InvocationRequest:
        """
        Build a request from parsed arguments.

        A relative output path is resolved against the current working
        directory.
        """
        output = getattr(args, "output", None)
        return cls(
            startup_module_path=args.startup_module,
            document_name=args.document_name,
            output_path=Path.cwd() / output if output else None,
            host_override=getattr(args, "host", None),
            base_path_override=getattr(args, "basepath", None),
            use_legacy_schema=bool(getattr(args, "serializeasv2", False)),
            as_yaml=bool(getattr(args, "yaml", False)),
        )

    @property
    def spec_version(self) -> OpenApiSpecVersion:
        if self.use_legacy_schema:
            return OpenApiSpecVersion.V2
        return OpenApiSpecVersion.V3

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat.YAML if self.as_yaml else OutputFormat.JSON
