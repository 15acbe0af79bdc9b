"""
swagcli - retrieve OpenAPI (Swagger) documents from Python web applications.

The tool loads an application's startup module in a child interpreter that
matches the application's own runtime descriptors, builds a minimal host,
asks it for a registered Swagger provider and writes the resulting document
to a file or to standard output.

Usage:
    swagcli tofile app.py v1
    swagcli tofile app.py v1 --output swagger.json --serializeasv2
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    ConfigurationError,
    LaunchError,
    ModuleLoadError,
    RetrievalError,
    SerializationError,
    SwagCliError,
)

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("swagcli")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

__all__ = [
    "__version__",
    "ConfigurationError",
    "LaunchError",
    "ModuleLoadError",
    "RetrievalError",
    "SerializationError",
    "SwagCliError",
]
