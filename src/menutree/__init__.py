from __future__ import annotations

from .builder import BuilderBase, Continuation, Finisher, InteractionBuilder, MenuBuilder
from .core.errors import BuilderError, ConfigurationError, EndOfInput, MenutreeError
from .core.interfaces import Action, TextInput, TextOutput
from .core.models import ActionBody, Menu, MenuOption, Node, PromptTable

__all__ = [
    "Action",
    "ActionBody",
    "BuilderBase",
    "BuilderError",
    "ConfigurationError",
    "Continuation",
    "EndOfInput",
    "Finisher",
    "InteractionBuilder",
    "Menu",
    "MenuBuilder",
    "MenuOption",
    "MenutreeError",
    "Node",
    "PromptTable",
    "TextInput",
    "TextOutput",
]
