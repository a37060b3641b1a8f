from __future__ import annotations

from typing import Any

from .builder import InteractionBuilder
from .core.models import Node


def build_example(
    input: Any | None = None,
    output: Any | None = None,
    eager_validation: bool | None = None,
) -> Node:
    """Sample tree: a root input passed down, a menu, and a prompt that can override it."""

    return (
        InteractionBuilder.create(input, output, eager_validation=eager_validation)
        .with_intro("This is an intro text of the root level")
        .prompt_for_input("root_input", "Provide some root level input. It will be passed down.")
        .with_menu(
            lambda menu: menu.option(
                "First option that will print root input and exit app",
                lambda opt: opt.run_action(
                    lambda reader, writer, inputs: writer.write_line(f"The root input was: {inputs['root_input']}")
                ).and_exit(),
            )
            .option(
                "Second option that will print and loop back here",
                lambda opt: opt.run_action(
                    lambda reader, writer, _: writer.write_line("Printing action for second option")
                ).and_go_back(),
            )
            .option(
                "Third option that goes into the prompt-driven interactions",
                lambda opt: opt.prompt_case_insensitive(
                    "Please select one of the actions",
                    ("alpha", lambda intr: intr.run_action(lambda reader, writer, _: writer.write_line("alpha")).and_exit()),
                    ("beta", _beta),
                ).build(),
            )
        )
        .build()
    )


def _beta(intr) -> Node:
    return (
        intr.prompt_for_input("root_input", "this allows to override root value for THIS level and below")
        .run_action(
            lambda reader, writer, inputs: writer.write_line(f"Current value of root value is {inputs['root_input']}")
        )
        .and_exit()
    )
