"""
Application framework for the swagcli command line.

Provides the ``App`` class that parses global options, configures logging and
dispatches to registered tools (one subcommand each).
"""

from .core import App
from .tools import Tool, ToolConfig, ToolRegistry

__all__ = ["App", "Tool", "ToolConfig", "ToolRegistry"]
