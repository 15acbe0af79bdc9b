"""
Core app class for the command line.

Parses the global options, configures the root logger, selects the tool
named by the subcommand and runs it. ``SwagCliError`` raised by a tool is
logged once here and turned into exit code 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

from ..config import Settings
from ..exceptions import LoggingError, SwagCliError
from ..log import Logger, LogConfig, LoggerFactory
from .tools import Tool, ToolRegistry

LOG_LEVEL_CHOICES = ["trace", "debug", "info", "warning", "error", "critical", "false"]


class DefaultsHelpFormatter(argparse.HelpFormatter):
    """Help formatter that appends default values to help text."""

    def _get_help_string(self, action: argparse.Action) -> str:
        help_text = action.help or ""
        if action.default is not argparse.SUPPRESS and action.default not in (
            None,
            False,
        ):
            return help_text + f" (default: {action.default})"
        return help_text


class App:
    """
    Command-line application made of tools.

    Example:
        app = App("swagcli", version="1.0.0")
        app.add_tool(ToFileTool())
        sys.exit(app.main())
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        version: str | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Initialize the app.

        Args:
            name: Program name shown in usage output
            description: Program description shown in help output
            version: Version reported by --version (optional)
            settings: Environment settings (defaults to Settings.from_env())
        """
        self.name = name
        self.description = description
        self.version = version
        self.settings = settings if settings is not None else Settings.from_env()
        self.registry = ToolRegistry()
        self.parser: argparse.ArgumentParser | None = None
        self._parsed_args: argparse.Namespace | None = None
        self._argv: list[str] = []
        self._logger: Logger | None = None

    def add_tool(self, tool: Tool) -> None:
        """Register a tool, attaching it to this app."""
        if tool.parent is None:
            tool.set_parent(self)
        self.registry.register(tool)

    @property
    def args(self) -> argparse.Namespace:
        if self._parsed_args is None:
            raise RuntimeError("Arguments not parsed. Call setup() first.")
        return self._parsed_args

    @property
    def lg(self) -> Logger | None:
        return self._logger

    @property
    def log_level(self) -> str:
        """Effective log level name (--log-level, else the environment)."""
        if self._parsed_args is not None and self._parsed_args.log_level:
            return str(self._parsed_args.log_level)
        return self.settings.log_level

    def command_args(self, name: str) -> list[str]:
        """Raw arguments following a subcommand token, as given."""
        if name not in self._argv:
            return []
        return self._argv[self._argv.index(name) + 1 :]

    def create_args(self) -> argparse.ArgumentParser:
        """Create the argument parser with global options and subcommands."""
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.description,
            formatter_class=DefaultsHelpFormatter,
        )
        parser.add_argument(
            "-l",
            "--log-level",
            default=None,
            choices=LOG_LEVEL_CHOICES,
            metavar="LEVEL",
            help=f"log level, one of {', '.join(LOG_LEVEL_CHOICES)} "
            f"(default: ${{SWAGCLI_LOG_LEVEL}} or '{self.settings.log_level}')",
        )
        if self.version:
            parser.add_argument(
                "--version",
                action="version",
                version=f"{self.name} {self.version}",
            )

        public = self.registry.list_public_tools()
        subparsers = parser.add_subparsers(
            dest="tool", metavar="{" + ",".join(public) + "}"
        )
        for tool_name in self.registry.list_tools():
            tool = self.registry.get_tool(tool_name)
            if tool is None:
                continue
            cmd_args, cmd_kwargs = tool.cmd
            sub_parser = subparsers.add_parser(
                *cmd_args, formatter_class=DefaultsHelpFormatter, **cmd_kwargs
            )
            tool.set_args(sub_parser)

        self.parser = parser
        return parser

    def setup_logging(self) -> Logger:
        """
        Create the root logger at the effective level.

        Raises:
            LoggingError: If the level from the environment is invalid
        """
        try:
            config = LogConfig.from_params(self.log_level)
        except LoggingError:
            self._logger = LoggerFactory.create_root(LogConfig())
            raise
        self._logger = LoggerFactory.create_root(config)
        return self._logger

    def setup(self, argv: Sequence[str] | None = None) -> None:
        """Parse arguments and configure logging."""
        self._argv = list(sys.argv[1:] if argv is None else argv)
        parser = self.create_args()
        self._parsed_args = parser.parse_args(self._argv)
        self.setup_logging()

    def run(self) -> int:
        """Run the selected tool."""
        tool_name = self.args.tool
        if not tool_name:
            assert self.parser is not None
            self.parser.print_usage(sys.stderr)
            if self._logger is not None:
                self._logger.error("no tool selected")
            return 1

        tool = self.registry.get_tool(tool_name)
        if tool is None:
            raise SwagCliError(f"Tool '{tool_name}' not found")

        tool.setup()
        tool.lg.trace("running tool")
        return_code = tool.run()
        return int(return_code) if return_code is not None else 0

    def main(self, argv: Sequence[str] | None = None) -> int:
        """
        Main application entry point.

        Args:
            argv: Command-line arguments without the program name
                (defaults to sys.argv[1:])

        Returns:
            int: Exit code (0 for success, non-zero for error)
        """
        try:
            self.setup(argv)
            return self.run()
        except SwagCliError as e:
            lg: Any = self._logger or logging.getLogger("swagcli")
            lg.error(str(e), extra={"error": type(e).__name__})
            return 1
