from __future__ import annotations


class MenutreeError(Exception):
    """Base class for errors raised by menutree."""


class ConfigurationError(MenutreeError):
    """A node without a menu, prompt table or action was run (or built eagerly)."""


class BuilderError(MenutreeError):
    """The staged builder was used out of order or with conflicting input."""


class EndOfInput(MenutreeError):
    """The input source was exhausted while a line was required."""

    def __init__(self, waiting_for: str = "input") -> None:
        super().__init__(f"end of input while waiting for {waiting_for}")
        self.waiting_for = waiting_for
