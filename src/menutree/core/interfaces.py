from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TextInput(Protocol):
    def read_line(self) -> str | None:
        """Return the next line without its newline, or ``None`` at end of input."""
        ...


@runtime_checkable
class TextOutput(Protocol):
    def write_line(self, text: str = "") -> None: ...

    def write(self, text: str) -> None: ...


# (input, output, collected inputs). May raise; the walker reports and recovers.
Action = Callable[[TextInput, TextOutput, dict[str, str]], None]
