"""
Output writers for CLI messages on standard output.

Only user-facing results go through these writers (for example the
confirmation line after a file was written); diagnostics go to the logger,
which writes to stderr.
"""

import sys
from typing import Protocol, TextIO


class OutputWriter(Protocol):
    """Protocol for CLI output writing."""

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        ...


class ConsoleOutput:
    """
    Writes lines to a stream (stdout by default).

    Example:
        out = ConsoleOutput()
        out.write("Swagger JSON successfully written to /tmp/swagger.json")
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        """
        Initialize with optional output stream.

        Args:
            stream: Output stream (defaults to sys.stdout at write time)
        """
        self._stream = stream

    def write(self, text: str = "") -> None:
        """Write text with trailing newline."""
        print(text, file=self._stream if self._stream is not None else sys.stdout)


class BufferedOutput:
    """
    Captures written lines, for tests.

    Example:
        out = BufferedOutput()
        out.write("done")
        assert out.lines == ["done"]
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def write(self, text: str = "") -> None:
        self._lines.append(text)

    @property
    def lines(self) -> list[str]:
        """Get all output lines."""
        return self._lines.copy()

    @property
    def text(self) -> str:
        """Get all output as a single string with newlines."""
        return "".join(line + "\n" for line in self._lines)
