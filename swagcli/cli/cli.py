#!/usr/bin/env python3
"""
swagcli - retrieve Swagger documents from web applications.

Usage:
    swagcli tofile build/app.py v1
    swagcli tofile build/app.py v1 --output swagger.json --serializeasv2
    swagcli --help
"""

from __future__ import annotations

from collections.abc import Sequence

import swagcli
from swagcli.app import App
from swagcli.cli.tools import InternalToFileTool, ToFileTool

# All CLI tools
_TOOLS = [ToFileTool, InternalToFileTool]


def _build_app() -> App:
    """Build the CLI application with all tools registered."""
    app = App(
        "swagcli",
        description="Retrieve Swagger documents from web applications",
        version=swagcli.__version__,
    )
    for tool_cls in _TOOLS:
        app.add_tool(tool_cls())
    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the swagcli CLI."""
    return _build_app().main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
