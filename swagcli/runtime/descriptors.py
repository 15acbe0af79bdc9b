"""
Runtime descriptors of a startup module.

A startup module ``app.py`` is accompanied by two sibling YAML files that
describe the runtime it must be loaded under:

    app.deps.yaml           dependency manifest (import path entries)
    app.runtimeconfig.yaml  runtime configuration (interpreter, environment)

Example:
    # app.deps.yaml
    paths:
      - .
      - ../lib

    # app.runtimeconfig.yaml
    interpreter: .venv/bin/python
    env:
      APP_SETTINGS: testing
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from ..config import MAX_DESCRIPTOR_SIZE_BYTES
from ..exceptions import DescriptorError

DEPS_SUFFIX = ".deps.yaml"
RUNTIME_CONFIG_SUFFIX = ".runtimeconfig.yaml"


@dataclass(frozen=True)
class RuntimeDescriptors:
    """
    Paths of the two runtime descriptor files of a startup module.

    Attributes:
        dependency_manifest: Path of the ``.deps.yaml`` file
        runtime_config: Path of the ``.runtimeconfig.yaml`` file
    """

    dependency_manifest: Path
    runtime_config: Path

    def missing(self) -> list[Path]:
        """Return the descriptor files that do not exist."""
        paths = (self.dependency_manifest, self.runtime_config)
        return [p for p in paths if not p.is_file()]


def derive_descriptors(startup_path: str | Path) -> RuntimeDescriptors:
    """
    Derive the runtime descriptor paths for a startup module.

    The final suffix of the module path is replaced by the two descriptor
    suffixes; both results live in the same directory as the module. No
    file system access happens here.

    Args:
        startup_path: Path of the startup module (``.py`` or ``.pyc``)

    Returns:
        RuntimeDescriptors for the module
    """
    path = Path(startup_path)
    stem = path.name[: -len(path.suffix)] if path.suffix else path.name
    return RuntimeDescriptors(
        dependency_manifest=path.with_name(stem + DEPS_SUFFIX),
        runtime_config=path.with_name(stem + RUNTIME_CONFIG_SUFFIX),
    )


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    """Load a descriptor file that must contain a YAML mapping (or be empty)."""
    try:
        size = path.stat().st_size
        if size > MAX_DESCRIPTOR_SIZE_BYTES:
            raise DescriptorError(
                "Descriptor file too large", path=str(path), size=size
            )
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise DescriptorError(f"Cannot read descriptor: {e}", path=str(path)) from e
    except yaml.YAMLError as e:
        raise DescriptorError(f"Invalid YAML: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise DescriptorError("Descriptor must be a mapping", path=str(path))
    return data


@dataclass(frozen=True)
class DependencyManifest:
    """
    Import path entries the startup module depends on.

    Attributes:
        paths: Absolute import path entries, in order
    """

    paths: tuple[str, ...] = ()

    @classmethod
    def load(cls, path: Path) -> DependencyManifest:
        """
        Load a dependency manifest.

        Relative entries are resolved against the manifest's directory.

        Raises:
            DescriptorError: If the file is unreadable or malformed
        """
        data = _load_yaml_mapping(path)
        entries = data.get("paths") or []
        if not isinstance(entries, list) or not all(
            isinstance(e, str) for e in entries
        ):
            raise DescriptorError("'paths' must be a list of strings", path=str(path))

        base = path.parent
        return cls(paths=tuple(str((base / e).resolve()) for e in entries))


@dataclass(frozen=True)
class RuntimeConfig:
    """
    Runtime the startup module must be loaded under.

    Attributes:
        interpreter: Python interpreter executable
        env: Extra environment variables for the child process
    """

    interpreter: str = field(default_factory=lambda: sys.executable)
    env: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> RuntimeConfig:
        """
        Load a runtime configuration.

        A relative interpreter path containing a separator is resolved against
        the configuration file's directory; a bare name is looked up on PATH
        by the operating system.

        Raises:
            DescriptorError: If the file is unreadable or malformed
        """
        data = _load_yaml_mapping(path)

        interpreter = data.get("interpreter") or sys.executable
        if not isinstance(interpreter, str):
            raise DescriptorError("'interpreter' must be a string", path=str(path))
        if not Path(interpreter).is_absolute() and (
            "/" in interpreter or "\\" in interpreter
        ):
            interpreter = str((path.parent / interpreter).resolve())

        env = data.get("env") or {}
        if not isinstance(env, dict):
            raise DescriptorError("'env' must be a mapping", path=str(path))

        return cls(
            interpreter=interpreter, env={str(k): str(v) for k, v in env.items()}
        )
