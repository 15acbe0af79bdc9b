"""
Runtime handling: descriptor resolution, process relaunch and module loading.
"""

from .descriptors import (
    DependencyManifest,
    RuntimeConfig,
    RuntimeDescriptors,
    derive_descriptors,
)
from .loader import ModuleLoader, module_name_for
from .relaunch import ProcessRelauncher, escape_path, format_command_line

__all__ = [
    "DependencyManifest",
    "ModuleLoader",
    "ProcessRelauncher",
    "RuntimeConfig",
    "RuntimeDescriptors",
    "derive_descriptors",
    "escape_path",
    "format_command_line",
    "module_name_for",
]
