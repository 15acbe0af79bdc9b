"""
Tool registration and lookup.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ...exceptions import ToolRegistrationError

if TYPE_CHECKING:
    from .base import Tool

MAX_TOOL_COUNT = 100  # Maximum number of tools that can be registered
MAX_TOOL_NAME_LENGTH = 64  # Maximum length for tool names

_NAME_RE = re.compile(r"^[a-z][a-z0-9_-]*$")
_HIDDEN_NAME_RE = re.compile(r"^_?[a-z][a-z0-9_-]*$")


def _validate_tool_name(tool_name: str, hidden: bool) -> None:
    """Validate tool name format."""
    if not tool_name:
        raise ToolRegistrationError("", "Tool must have a name")

    if len(tool_name) > MAX_TOOL_NAME_LENGTH:
        raise ToolRegistrationError(
            tool_name,
            f"Tool name exceeds maximum length of {MAX_TOOL_NAME_LENGTH} characters",
        )

    pattern = _HIDDEN_NAME_RE if hidden else _NAME_RE
    if not pattern.match(tool_name):
        raise ToolRegistrationError(
            tool_name,
            "Tool name must start with a lowercase letter (hidden tools may "
            "prefix it with '_') and contain only lowercase letters, numbers, "
            "underscores, and hyphens",
        )


class ToolRegistry:
    """Registered tools, by name and alias."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._aliases: dict[str, str] = {}

    def register(self, tool: Tool) -> None:
        """
        Register a tool with its aliases.

        Args:
            tool: Tool instance to register

        Raises:
            ToolRegistrationError: If the name or an alias is invalid or taken,
                or the tool count limit is reached
        """
        if len(self._tools) >= MAX_TOOL_COUNT:
            raise ToolRegistrationError(
                tool.name,
                f"Cannot register tool: maximum tool count ({MAX_TOOL_COUNT}) exceeded",
            )
        _validate_tool_name(tool.name, tool.hidden)

        if tool.name in self._tools or tool.name in self._aliases:
            raise ToolRegistrationError(tool.name, "Tool is already registered")

        for alias in tool.config.aliases:
            if not _NAME_RE.match(alias):
                raise ToolRegistrationError(tool.name, f"Invalid alias '{alias}'")
            if alias in self._aliases or alias in self._tools:
                raise ToolRegistrationError(
                    tool.name, f"Alias '{alias}' is already registered"
                )

        self._tools[tool.name] = tool
        for alias in tool.config.aliases:
            self._aliases[alias] = tool.name

    def get_tool(self, name: str) -> Tool | None:
        """Get tool by name or alias."""
        if name in self._tools:
            return self._tools[name]
        if name in self._aliases:
            return self._tools[self._aliases[name]]
        return None

    def list_tools(self) -> list[str]:
        """List all registered tool names."""
        return list(self._tools.keys())

    def list_public_tools(self) -> list[str]:
        """List registered tool names that are not hidden."""
        return [name for name, tool in self._tools.items() if not tool.hidden]

    def list_aliases(self) -> dict[str, str]:
        """List all tool aliases."""
        return self._aliases.copy()

    def is_registered(self, name: str) -> bool:
        """Check if a tool name or alias is registered."""
        return name in self._tools or name in self._aliases
