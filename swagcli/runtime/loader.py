"""
Loading of a startup module into the current interpreter.

Each ``ModuleLoader`` is a dedicated load context: it owns the modules it
loaded, keyed by absolute path, and loads each path at most once. The loaded
module is registered in ``sys.modules`` under its file stem so the default
host builder (and the module's own imports) can find it by name.
"""

from __future__ import annotations

import importlib.util
import logging
import sys
from importlib.machinery import BYTECODE_SUFFIXES, SOURCE_SUFFIXES
from pathlib import Path
from types import ModuleType

from ..exceptions import ModuleLoadError

logger = logging.getLogger(__name__)

_SUPPORTED_SUFFIXES = (*SOURCE_SUFFIXES, *BYTECODE_SUFFIXES)


def module_name_for(path: Path) -> str:
    """Module name a startup file is registered under (its stem)."""
    return path.name[: -len(path.suffix)] if path.suffix else path.name


class ModuleLoader:
    """
    Load context for startup modules.

    Example:
        loader = ModuleLoader()
        module = loader.load("build/app.py")
        assert loader.load("build/app.py") is module
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        """
        Initialize the loader.

        Args:
            base_dir: Directory relative paths are resolved against
                (defaults to the current working directory at load time)
        """
        self._base_dir = base_dir
        self._modules: dict[Path, ModuleType] = {}

    @property
    def modules(self) -> dict[Path, ModuleType]:
        """Modules loaded by this context, keyed by absolute path."""
        return dict(self._modules)

    def resolve(self, path: str | Path) -> Path:
        """Resolve a module path against the base directory."""
        base = self._base_dir if self._base_dir is not None else Path.cwd()
        return (base / path).resolve()

    def load(self, path: str | Path) -> ModuleType:
        """
        Load a startup module, or return it if this context already loaded it.

        Args:
            path: Module path, relative to the base directory or absolute

        Returns:
            The executed module

        Raises:
            ModuleLoadError: If the file is missing, has an unsupported suffix,
                clashes with an unrelated imported module, or fails to execute
        """
        abs_path = self.resolve(path)
        cached = self._modules.get(abs_path)
        if cached is not None:
            return cached

        module = self._load_new(abs_path)
        self._modules[abs_path] = module
        return module

    def _check_loadable(self, abs_path: Path, name: str) -> ModuleType | None:
        """Validate the path; return an already-imported module for the same file."""
        if not abs_path.is_file():
            raise ModuleLoadError("Startup module not found", path=str(abs_path))
        if abs_path.suffix not in _SUPPORTED_SUFFIXES:
            raise ModuleLoadError(
                "Unsupported startup module type", path=str(abs_path)
            )
        existing = sys.modules.get(name)
        if existing is not None:
            existing_file = getattr(existing, "__file__", None)
            if existing_file is None or Path(existing_file).resolve() != abs_path:
                raise ModuleLoadError(
                    f"Module name '{name}' is already in use by another module",
                    path=str(abs_path),
                )
            return existing
        return None

    def _load_new(self, abs_path: Path) -> ModuleType:
        name = module_name_for(abs_path)
        existing = self._check_loadable(abs_path, name)
        if existing is not None:
            return existing

        spec = importlib.util.spec_from_file_location(name, abs_path)
        if spec is None or spec.loader is None:
            raise ModuleLoadError("Cannot create module spec", path=str(abs_path))

        module_dir = str(abs_path.parent)
        if module_dir not in sys.path:
            sys.path.insert(0, module_dir)

        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        logger.debug(
            "loading startup module", extra={"startup": name, "path": abs_path}
        )
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            sys.modules.pop(name, None)
            raise ModuleLoadError(
                f"Failed to load startup module: {e.__class__.__name__}: {e}",
                path=str(abs_path),
            ) from e

        return module
