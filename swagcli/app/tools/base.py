"""
Base tool class for command-line applications.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ...exceptions import ToolError
from ...log import Logger, LoggerFactory, create_root_lg

if TYPE_CHECKING:
    from ..core import App


@dataclass
class ToolConfig:
    """
    Configuration for a tool.

    Hidden tools get a subcommand but are left out of help output and the
    command listing.
    """

    name: str
    aliases: list[str] = field(default_factory=list)
    help_text: str = ""
    description: str = ""
    hidden: bool = False


class Tool:
    """
    Base class for CLI tools.

    Subclasses provide a config (passed to ``__init__`` or returned by
    ``_create_config``), register their arguments in ``add_args`` and do their
    work in ``run``.
    """

    def __init__(self, parent: Any | None = None, config: ToolConfig | None = None):
        """
        Initialize the tool.

        Args:
            parent: Owning application (set on registration if omitted)
            config: Tool configuration (optional)
        """
        self.parent = parent
        self.config = config or self._create_config()
        self._logger: Logger | None = None
        self._initialized = False

    def _create_config(self) -> ToolConfig:
        """Create default configuration. Override in subclasses."""
        raise ToolError(f"Tool {self.__class__.__name__} does not define a name")

    def set_parent(self, parent: Any) -> None:
        self.parent = parent

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def hidden(self) -> bool:
        return self.config.hidden

    @property
    def cmd(self) -> tuple[list[str], dict[str, Any]]:
        """
        Get command configuration for argument parsing.

        Hidden tools get no ``help`` entry, which keeps argparse from listing
        them among the subcommands.

        Returns:
            tuple: (command_args, command_kwargs) for argparse
        """
        kwargs: dict[str, Any] = {
            "aliases": self.config.aliases,
            "description": self.config.description,
        }
        if not self.hidden:
            kwargs["help"] = self.config.help_text
        return [self.name], kwargs

    @property
    def lg(self) -> Logger:
        """
        Get the logger instance.

        Raises:
            ToolError: If accessed before setup() is called
        """
        if self._logger is None:
            raise ToolError(
                f"Logger not initialized for tool '{self.name}'. "
                "Ensure setup() has been called before accessing lg."
            )
        return self._logger

    @property
    def args(self) -> argparse.Namespace:
        """Parsed command-line arguments of the owning application."""
        return self.app.args

    @property
    def app(self) -> App:
        """
        Get the owning App instance.

        Raises:
            ToolError: If the tool is not attached to an App
        """
        from ..core import App

        if isinstance(self.parent, App):
            return self.parent
        raise ToolError(f"Tool '{self.name}' is not attached to an App")

    @property
    def initialized(self) -> bool:
        return self._initialized

    def set_args(self, parser: argparse.ArgumentParser) -> None:
        """Set up the argument parser for this tool."""
        self.add_args(parser)

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        """
        Add arguments to the parser.

        Override this method in subclasses to add tool-specific arguments.
        """
        pass

    def setup(self, **kwargs: Any) -> None:
        """Set up logging and run ``configure`` once."""
        if self._initialized:
            return
        self.setup_lg()
        self.configure()
        self._initialized = True

    def setup_lg(self) -> None:
        """Derive this tool's logger from the parent's, or create a root one."""
        parent_lg = getattr(self.parent, "lg", None)
        if isinstance(parent_lg, Logger):
            self._logger = LoggerFactory.derive(parent_lg, self.name)
        else:
            self._logger = create_root_lg()

    def configure(self) -> None:
        """
        Configure the tool after setup.

        Override this method in subclasses to perform custom configuration.
        """
        pass

    def run(self, **kwargs: Any) -> int:
        """
        Run the tool.

        Returns:
            int: Exit code
        """
        raise ToolError(f"Tool '{self.name}' does not implement run()")
