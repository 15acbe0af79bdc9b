"""
Tools registered by the swagcli command line.
"""

from .tofile_tool import InternalToFileTool, ToFileTool

__all__ = ["InternalToFileTool", "ToFileTool"]
