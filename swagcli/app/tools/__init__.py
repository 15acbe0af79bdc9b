"""
Tool framework: base class and registry.
"""

from .base import Tool, ToolConfig
from .registry import ToolRegistry

__all__ = ["Tool", "ToolConfig", "ToolRegistry"]
