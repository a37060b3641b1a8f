"""Staged fluent builder for interaction trees.

One mutable ``_Record`` collects the configuration of a node.  The caller only
ever holds stage handles over it, and each handle exposes just the calls that
are legal at that point::

    BuilderBase --with_menu / prompt--> Finisher --build-----------> Node
         |                                  |
         +-------- (is a Finisher) ---------+--run_action--> Continuation
                                                                  |
                                            and_exit / and_go_back+--> Node

Children are configured by callables that receive a fresh ``BuilderBase``
and must return the node they built from it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .core.errors import BuilderError, ConfigurationError
from .core.interfaces import Action, TextInput, TextOutput
from .core.models import ActionBody, Body, Menu, MenuOption, Node, PromptTable
from .core.settings import get_settings
from .ui.console import as_input, as_output

__all__ = [
    "BuilderBase",
    "ChildConfig",
    "Continuation",
    "Finisher",
    "InteractionBuilder",
    "MenuBuilder",
]

logger = logging.getLogger(__name__)

ChildConfig = Callable[["BuilderBase"], Node]


@dataclass
class _Record:
    input: TextInput
    output: TextOutput
    inherited: Mapping[str, str]
    eager_validation: bool = False
    intro: str = ""
    input_prompts: dict[str, str] = field(default_factory=dict)
    body: Body | None = None
    exit_after_action: bool = False
    node: Node | None = None
    building_body: bool = False

    def ensure_open(self, operation: str) -> None:
        if self.node is not None:
            raise BuilderError(f"cannot {operation}: the node has already been built")
        if self.building_body:
            raise BuilderError(f"cannot {operation} while its menu or prompt children are being configured")

    def seed_inputs(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self.inherited))

    def build_child(self, configure: ChildConfig) -> Node:
        child = _Record(
            input=self.input,
            output=self.output,
            inherited=self.seed_inputs(),
            eager_validation=self.eager_validation,
        )
        handle = BuilderBase(child)
        node = configure(handle)
        if not isinstance(node, Node) or child.node is None or node is not child.node:
            raise BuilderError("a child configuration must return the node built from the builder it was given")
        return node

    def finish(self) -> Node:
        self.ensure_open("build")
        if self.body is None and self.eager_validation:
            raise ConfigurationError("a node needs a menu, a prompt or an action before it can be built")
        self.node = Node(
            intro=self.intro,
            input_prompts=MappingProxyType(dict(self.input_prompts)),
            inherited_inputs=self.inherited,
            body=self.body,
            exit_after_action=self.exit_after_action,
            default_input=self.input,
            default_output=self.output,
        )
        logger.debug("built %s node with %d input prompts", self.node.kind, len(self.input_prompts))
        return self.node


class InteractionBuilder:
    """Entry point: ``InteractionBuilder.create(...)`` returns the first stage."""

    @staticmethod
    def create(
        input: Any | None = None,
        output: Any | None = None,
        inputs: Mapping[str, str] | None = None,
        eager_validation: bool | None = None,
    ) -> BuilderBase:
        """Start a root node.

        ``input``/``output`` become the default streams of every node in the
        tree (stdin and a rich console when omitted).  ``inputs`` seeds values
        that the root and all of its descendants inherit.  With
        ``eager_validation`` every node in the tree must have a menu, prompt or
        action by the time it is built; ``None`` takes the default from
        ``MENUTREE_EAGER_VALIDATION``.
        """

        record = _Record(
            input=as_input(input),
            output=as_output(output),
            inherited=MappingProxyType(dict(inputs or {})),
            eager_validation=get_settings().eager_validation if eager_validation is None else eager_validation,
        )
        return BuilderBase(record)


class Finisher:
    def __init__(self, record: _Record) -> None:
        self._record = record

    def run_action(self, action: Action) -> Continuation:
        record = self._record
        record.ensure_open("attach an action")
        if record.body is not None:
            raise BuilderError("a node with a menu or prompt cannot also run an action")
        if not callable(action):
            raise BuilderError("action must be callable")
        record.body = ActionBody(action)
        return Continuation(record)

    def build(self) -> Node:
        if isinstance(self._record.body, ActionBody):
            raise BuilderError("choose and_exit() or and_go_back() after run_action()")
        return self._record.finish()


class BuilderBase(Finisher):
    def with_intro(self, text: str) -> BuilderBase:
        self._record.ensure_open("set the intro")
        self._record.intro = text
        return self

    def prompt_for_input(self, input_key: str, prompt: str) -> BuilderBase:
        """Declare an input collected before the body runs.

        Declaring the same key again replaces the prompt text but keeps the
        position of the first declaration.
        """

        self._record.ensure_open("declare an input")
        self._record.input_prompts[input_key] = prompt
        return self

    def with_menu(self, configure: Callable[[MenuBuilder], Any]) -> Finisher:
        record = self._record
        self._claim_body("add a menu")
        options: list[MenuOption] = []
        record.building_body = True
        try:
            configure(MenuBuilder(record, options))
        finally:
            record.building_body = False
        if options:
            record.body = Menu(tuple(options))
        return Finisher(record)

    def prompt(self, prompt: str | None, *options: tuple[str, ChildConfig]) -> Finisher:
        return self._prompt_table(prompt, options, case_sensitive=True)

    def prompt_case_insensitive(self, prompt: str | None, *options: tuple[str, ChildConfig]) -> Finisher:
        return self._prompt_table(prompt, options, case_sensitive=False)

    def _claim_body(self, operation: str) -> None:
        self._record.ensure_open(operation)
        if self._record.body is not None:
            raise BuilderError(f"cannot {operation}: the node already has a body")

    def _prompt_table(
        self,
        heading: str | None,
        options: tuple[tuple[str, ChildConfig], ...],
        *,
        case_sensitive: bool,
    ) -> Finisher:
        record = self._record
        self._claim_body("add a prompt")
        answers: dict[str, Node] = {}
        labels: list[str] = []
        record.building_body = True
        try:
            for answer, configure in options:
                key = answer if case_sensitive else answer.casefold()
                if key in answers:
                    raise BuilderError(f"duplicate prompt answer {answer!r}")
                answers[key] = record.build_child(configure)
                labels.append(answer)
        finally:
            record.building_body = False
        if answers:
            record.body = PromptTable(
                heading=heading,
                answers=MappingProxyType(answers),
                labels=tuple(labels),
                case_sensitive=case_sensitive,
            )
        return Finisher(record)


class MenuBuilder:
    def __init__(self, record: _Record, options: list[MenuOption]) -> None:
        self._record = record
        self._options = options

    def option(self, text: str, configure: ChildConfig) -> MenuBuilder:
        if not self._record.building_body:
            raise BuilderError("menu options can only be added inside with_menu()")
        self._options.append(MenuOption(text, self._record.build_child(configure)))
        return self


class Continuation:
    def __init__(self, record: _Record) -> None:
        self._record = record

    def and_exit(self) -> Node:
        """Stop the whole session once the action has run."""
        self._record.ensure_open("set the continuation")
        self._record.exit_after_action = True
        return self._record.finish()

    def and_go_back(self) -> Node:
        """Return to the parent level once the action has run."""
        self._record.ensure_open("set the continuation")
        self._record.exit_after_action = False
        return self._record.finish()
