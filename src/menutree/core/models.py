from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

from .interfaces import Action, TextInput, TextOutput
from .runtime import run_node


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class MenuOption:
    label: str
    node: Node


@dataclass(frozen=True)
class Menu:
    options: tuple[MenuOption, ...]

    def __len__(self) -> int:
        return len(self.options)


@dataclass(frozen=True)
class PromptTable:
    """Single free-text selection among keyed children.

    ``answers`` is keyed by the normalised answer, ``labels`` keeps the answers
    as they were declared, in declaration order, for display.
    """

    heading: str | None
    answers: Mapping[str, Node]
    labels: tuple[str, ...]
    case_sensitive: bool = True

    def __len__(self) -> int:
        return len(self.answers)

    def normalise(self, answer: str) -> str:
        return answer if self.case_sensitive else answer.casefold()

    def lookup(self, answer: str) -> Node | None:
        return self.answers.get(self.normalise(answer))


@dataclass(frozen=True)
class ActionBody:
    action: Action


Body = Union[Menu, PromptTable, ActionBody]


@dataclass(frozen=True, eq=False)
class Node:
    """One fully configured interaction unit of the tree.

    Everything except ``collected_inputs`` is fixed once the builder hands the
    node out; ``collected_inputs`` is only touched by this node's own runs.
    """

    intro: str = ""
    input_prompts: Mapping[str, str] = field(default_factory=_empty_mapping)
    inherited_inputs: Mapping[str, str] = field(default_factory=_empty_mapping)
    body: Body | None = None
    exit_after_action: bool = False
    collected_inputs: dict[str, str] = field(default_factory=dict, compare=False, repr=False)
    # Streams bound by InteractionBuilder.create; used when run() gets none.
    default_input: TextInput | None = field(default=None, compare=False, repr=False)
    default_output: TextOutput | None = field(default=None, compare=False, repr=False)

    @property
    def kind(self) -> str:
        if isinstance(self.body, Menu):
            return "menu"
        if isinstance(self.body, PromptTable):
            return "prompt"
        if isinstance(self.body, ActionBody):
            return "action"
        return "unconfigured"

    def run(
        self,
        input: TextInput | None = None,
        output: TextOutput | None = None,
        parent_inputs: Mapping[str, str] | None = None,
    ) -> bool:
        """Run this node to completion.

        Returns True when the caller should keep going at its own level and
        False when an exit-after-action node asked the whole session to stop.
        """

        reader = input if input is not None else self.default_input
        writer = output if output is not None else self.default_output
        if not isinstance(reader, TextInput):
            raise TypeError("run() needs a TextInput; wrap raw streams with menutree.ui.console.StreamInput")
        if not isinstance(writer, TextOutput):
            raise TypeError("run() needs a TextOutput; wrap raw streams with menutree.ui.console.StreamOutput")
        return run_node(self, reader, writer, parent_inputs)
