from __future__ import annotations

import sys
from typing import Any, TextIO

from rich.console import Console

from ..core.interfaces import TextInput, TextOutput


class StreamInput(TextInput):
    """Line reader over anything with ``readline()`` (stdin, files, StringIO)."""

    def __init__(self, stream: Any | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin

    def read_line(self) -> str | None:
        line = self._stream.readline()
        if not line:
            return None
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        return line


class StreamOutput(TextOutput):
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write_line(self, text: str = "") -> None:
        self._stream.write(f"{text}\n")
        self._stream.flush()

    def write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()


class RichOutput(TextOutput):
    """Writes through a rich Console.

    Markup, emoji codes and highlighting are off: session text is user data and
    has to reach the terminal exactly as it was configured.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console(highlight=False)

    def write_line(self, text: str = "") -> None:
        self.console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)

    def write(self, text: str) -> None:
        self.console.print(text, end="", markup=False, emoji=False, highlight=False, soft_wrap=True)
        self.console.file.flush()


def as_input(source: Any | None) -> TextInput:
    if source is None:
        return StreamInput()
    if isinstance(source, TextInput):
        return source
    if hasattr(source, "readline"):
        return StreamInput(source)
    raise TypeError(f"cannot read lines from {type(source).__name__}")


def as_output(sink: Any | None) -> TextOutput:
    if sink is None:
        return RichOutput()
    if isinstance(sink, TextOutput):
        return sink
    if isinstance(sink, Console):
        return RichOutput(sink)
    if hasattr(sink, "write"):
        return StreamOutput(sink)
    raise TypeError(f"cannot write text to {type(sink).__name__}")
