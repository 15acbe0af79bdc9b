"""
The ``tofile`` command and the internal ``_tofile`` command it relaunches.

``tofile`` never loads the target application itself: it starts a child
interpreter configured by the startup module's runtime descriptors and runs
``_tofile`` there with the same arguments. ``_tofile`` performs the actual
retrieval and serialization.
"""

from __future__ import annotations

import argparse
from typing import Any

from swagcli.app.tools import Tool, ToolConfig
from swagcli.config import INTERNAL_COMMAND, PUBLIC_COMMAND
from swagcli.pipeline import RetrievalPipeline
from swagcli.request import InvocationRequest
from swagcli.runtime import ProcessRelauncher


def add_retrieval_args(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by both commands."""
    parser.add_argument(
        "startup_module",
        metavar="startupmodule",
        help="path of the application's startup module (e.g. build/app.py)",
    )
    parser.add_argument(
        "document_name",
        metavar="swaggerdoc",
        help="name of the Swagger document to retrieve (e.g. v1)",
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        help="file to write the document to (default: standard output)",
    )
    parser.add_argument(
        "--host", help="host to include in the document (e.g. api.example.com)"
    )
    parser.add_argument(
        "--basepath", help="base path to include in the document (e.g. /v1)"
    )
    parser.add_argument(
        "--serializeasv2",
        action="store_true",
        help="serialize as Swagger 2.0 instead of OpenAPI 3",
    )
    parser.add_argument(
        "--yaml", action="store_true", help="serialize as YAML instead of JSON"
    )


class ToFileTool(Tool):
    """Retrieves a Swagger document by relaunching under the app's runtime."""

    def __init__(self, parent: Any | None = None):
        config = ToolConfig(
            name=PUBLIC_COMMAND,
            help_text="retrieve a Swagger document from a startup module",
            description=(
                "Retrieve a Swagger document from a web application's startup "
                "module without starting its server, and write it to a file or "
                "standard output. The module is loaded in a child process "
                "configured by its .deps.yaml and .runtimeconfig.yaml files."
            ),
        )
        super().__init__(parent, config)

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        add_retrieval_args(parser)

    def run(self, **kwargs: Any) -> int:
        """Relaunch and return the child's exit code."""
        request = InvocationRequest.from_args(self.args)
        relauncher = ProcessRelauncher(log_level=self.app.log_level)
        exit_code = relauncher.relaunch(
            self.app.command_args(self.name), request.startup_module_path
        )
        if exit_code != 0:
            self.lg.debug("retrieval failed in child", extra={"code": exit_code})
        return exit_code


class InternalToFileTool(Tool):
    """Runs the retrieval pipeline in the current process."""

    def __init__(self, parent: Any | None = None):
        config = ToolConfig(name=INTERNAL_COMMAND, hidden=True)
        super().__init__(parent, config)

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        add_retrieval_args(parser)

    def run(self, **kwargs: Any) -> int:
        request = InvocationRequest.from_args(self.args)
        self.lg.debug(
            "retrieving document",
            extra={
                "startup": request.startup_module_path,
                "document": request.document_name,
            },
        )
        RetrievalPipeline(settings=self.app.settings).run(request)
        return 0
