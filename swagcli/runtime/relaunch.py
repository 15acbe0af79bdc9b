"""
Relaunch of the retrieval command under the target application's runtime.

``swagcli tofile`` never loads the startup module itself. It starts a child
interpreter configured by the module's runtime descriptors and runs the
internal ``_tofile`` command there, so the module and its dependencies are
imported by the runtime they were built for. Parent and child communicate
only through arguments (in) and the exit code (out).
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from ..config import ENV_LOG_LEVEL, INTERNAL_COMMAND
from ..exceptions import DescriptorError, LaunchError
from .descriptors import (
    DependencyManifest,
    RuntimeConfig,
    RuntimeDescriptors,
    derive_descriptors,
)

logger = logging.getLogger(__name__)

# Directory holding the swagcli package. In a regular install this is the
# tool's whole site-packages, so it must never precede the child's own paths.
_TOOL_ROOT = str(Path(__file__).resolve().parent.parent.parent)

# Child entry point: appends the tool root (argv[1]) to the end of sys.path,
# then runs the package as __main__ with the remaining arguments.
_BOOTSTRAP = (
    "import runpy, sys; "
    "sys.path.append(sys.argv.pop(1)); "
    "runpy.run_module(%r, run_name='__main__', alter_sys=True)"
)


def escape_path(path: str) -> str:
    """
    Quote a path for a command line if it contains a space.

    Args:
        path: Path or argument string

    Returns:
        The path wrapped in double quotes if it contains a space, else unchanged
    """
    if " " in path:
        return '"' + path + '"'
    return path


def format_command_line(argv: Sequence[str]) -> str:
    """Join arguments into a single command line, escaping those with spaces."""
    return " ".join(escape_path(arg) for arg in argv)


class ProcessRelauncher:
    """
    Re-invokes swagcli in a child process under a startup module's runtime.

    Example:
        relauncher = ProcessRelauncher()
        exit_code = relauncher.relaunch(["app.py", "v1"], "app.py")
    """

    def __init__(
        self,
        module: str = "swagcli",
        command: str = INTERNAL_COMMAND,
        log_level: str | None = None,
    ) -> None:
        """
        Initialize the relauncher.

        Args:
            module: Module run with ``-m`` in the child
            command: Internal command name run by the child
            log_level: Log level name forwarded to the child (optional)
        """
        self._module = module
        self._command = command
        self._log_level = log_level

    def build_command(
        self, args: Sequence[str], runtime: RuntimeConfig
    ) -> list[str]:
        """
        Build the child's argument vector.

        The child runs a short bootstrap instead of ``-m`` so the swagcli
        package becomes importable after the child interpreter's own
        import path rather than ahead of it.

        Args:
            args: Arguments of the public command, forwarded verbatim
            runtime: Runtime configuration selecting the interpreter

        Returns:
            Argument vector for the child process
        """
        return [
            runtime.interpreter,
            "-c",
            _BOOTSTRAP % self._module,
            _TOOL_ROOT,
            self._command,
            *args,
        ]

    def build_env(
        self,
        manifest: DependencyManifest,
        runtime: RuntimeConfig,
        base_env: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """
        Build the child's environment.

        ``PYTHONPATH`` lists the manifest entries, then any pre-existing
        entries. The directory holding swagcli is not added here; see
        ``build_command``.

        Args:
            manifest: Dependency manifest of the startup module
            runtime: Runtime configuration of the startup module
            base_env: Environment to start from (defaults to os.environ)

        Returns:
            Environment mapping for the child process
        """
        env = dict(os.environ if base_env is None else base_env)
        env.update(runtime.env)

        entries = list(manifest.paths)
        existing = env.get("PYTHONPATH")
        if existing:
            entries.append(existing)
        if entries:
            env["PYTHONPATH"] = os.pathsep.join(entries)

        if self._log_level:
            env[ENV_LOG_LEVEL] = self._log_level
        return env

    def load_descriptors(
        self, descriptors: RuntimeDescriptors
    ) -> tuple[DependencyManifest, RuntimeConfig]:
        """
        Load both descriptor files.

        Raises:
            LaunchError: If a descriptor file is missing or unreadable
        """
        missing = descriptors.missing()
        if missing:
            raise LaunchError(
                "Runtime descriptor not found",
                paths=",".join(str(p) for p in missing),
            )
        try:
            manifest = DependencyManifest.load(descriptors.dependency_manifest)
            runtime = RuntimeConfig.load(descriptors.runtime_config)
        except DescriptorError as e:
            raise LaunchError(f"Cannot load runtime descriptors: {e}") from e
        return manifest, runtime

    def relaunch(self, args: Sequence[str], startup_path: str) -> int:
        """
        Run the internal command in a child process and wait for it.

        Args:
            args: Arguments of the public command, forwarded verbatim
            startup_path: Startup module path (as given on the command line)

        Returns:
            The child's exit code, unchanged

        Raises:
            LaunchError: If descriptors are missing or the child cannot start
        """
        descriptors = derive_descriptors(startup_path)
        manifest, runtime = self.load_descriptors(descriptors)

        argv = self.build_command(args, runtime)
        env = self.build_env(manifest, runtime)
        logger.debug(
            "starting child process",
            extra={
                "cmd": format_command_line(argv),
                "deps": str(descriptors.dependency_manifest),
                "runtime": str(descriptors.runtime_config),
            },
        )

        try:
            proc = subprocess.Popen(argv, env=env)
        except OSError as e:
            raise LaunchError(
                f"Cannot start child process: {e}", interpreter=runtime.interpreter
            ) from e

        exit_code = proc.wait()
        logger.debug("child process exited", extra={"code": exit_code})
        return exit_code
