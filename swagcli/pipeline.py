"""
In-process document retrieval pipeline run by the internal command.

The steps run strictly in order, each consuming the previous one's output:
load the startup module, resolve an optional host factory, build the host,
retrieve the document, then serialize it to the sink. Any failure aborts the
pipeline; nothing is retried.
"""

from __future__ import annotations

import logging
from typing import TextIO

from .cli.output import ConsoleOutput, OutputWriter
from .config import Settings
from .hosting import HostBootstrapper, HostFactoryResolver
from .request import InvocationRequest
from .runtime import ModuleLoader
from .swagger import (
    DocumentRetriever,
    DocumentSerializer,
    OpenApiDocument,
    OutputFormat,
    open_sink,
)

logger = logging.getLogger(__name__)


class RetrievalPipeline:
    """
    Retrieves one Swagger document and writes it to a file or stdout.

    Example:
        pipeline = RetrievalPipeline()
        pipeline.run(InvocationRequest("build/app.py", "v1"))
    """

    def __init__(
        self,
        settings: Settings | None = None,
        out: OutputWriter | None = None,
        stdout: TextIO | None = None,
        loader: ModuleLoader | None = None,
        resolver: HostFactoryResolver | None = None,
        bootstrapper: HostBootstrapper | None = None,
        retriever: DocumentRetriever | None = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            settings: Environment settings (defaults to Settings.from_env())
            out: Writer for the confirmation line (defaults to stdout)
            stdout: Stream the document goes to without an output file
            loader: Module load context (a fresh one per pipeline by default)
            resolver: Host factory resolver
            bootstrapper: Host builder
            retriever: Document retriever
        """
        self._settings = settings if settings is not None else Settings.from_env()
        self._stdout = stdout
        self._out = out if out is not None else ConsoleOutput(stdout)
        self._loader = loader if loader is not None else ModuleLoader()
        self._resolver = resolver if resolver is not None else HostFactoryResolver()
        self._bootstrapper = (
            bootstrapper
            if bootstrapper is not None
            else HostBootstrapper(self._settings)
        )
        self._retriever = retriever if retriever is not None else DocumentRetriever()

    def retrieve(self, request: InvocationRequest) -> OpenApiDocument:
        """
        Load the startup module, build its host and retrieve the document.

        The host is disposed once the document has been obtained, whether
        retrieval succeeded or not.
        """
        module = self._loader.load(request.startup_module_path)
        factory = self._resolver.resolve(module)
        with self._bootstrapper.build(module, factory) as host:
            return self._retriever.get(
                host,
                request.document_name,
                host_override=request.host_override,
                base_path_override=request.base_path_override,
            )

    def write(self, request: InvocationRequest, document: OpenApiDocument) -> None:
        """Serialize a document to the request's sink."""
        serializer = DocumentSerializer(request.spec_version, request.output_format)
        with open_sink(request.output_path, self._stdout) as sink:
            serializer.write(document, sink)

        if request.output_path is not None:
            kind = "YAML" if request.output_format is OutputFormat.YAML else "JSON"
            self._out.write(
                f"Swagger {kind} successfully written to {request.output_path}"
            )

    def run(self, request: InvocationRequest) -> OpenApiDocument:
        """
        Run the whole pipeline for one request.

        Returns:
            The retrieved document

        Raises:
            SwagCliError: If any step fails
        """
        document = self.retrieve(request)
        self.write(request, document)
        logger.debug(
            "document written",
            extra={
                "document": request.document_name,
                "version": request.spec_version.value,
                "sink": str(request.output_path or "<stdout>"),
            },
        )
        return document
