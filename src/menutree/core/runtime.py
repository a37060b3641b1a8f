from __future__ import annotations

import logging
import re
import traceback
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from .errors import ConfigurationError, EndOfInput
from .interfaces import TextInput, TextOutput

if TYPE_CHECKING:
    from .models import ActionBody, Menu, Node, PromptTable

logger = logging.getLogger(__name__)

CONFIGURATION_ERROR_MESSAGE = (
    "The interaction has not been configured properly: no Menu, Prompts or Action have been found. "
    "This is a fatal error."
)

_INT_RE = re.compile(r"[+-]?[0-9]+")


def run_node(
    node: Node,
    input: TextInput,
    output: TextOutput,
    parent_inputs: Mapping[str, str] | None = None,
) -> bool:
    collected = node.collected_inputs
    for source in (parent_inputs or {}, node.inherited_inputs):
        for key, value in source.items():
            collected.setdefault(key, value)

    logger.debug("entering %s node (%d input prompts)", node.kind, len(node.input_prompts))
    output.write_line(node.intro or "")
    collect_inputs(node, input, output)

    body = node.body
    kind = node.kind
    if kind == "action":
        run_action(node, body, input, output)
        return not node.exit_after_action

    if kind not in ("menu", "prompt") or not len(body):
        output.write_line(CONFIGURATION_ERROR_MESSAGE)
        raise ConfigurationError("Unexpected configuration error.")

    while True:
        if kind == "menu":
            for index, option in enumerate(body.options):
                output.write_line(f"{index}. {option.label}")
            selection = read_int(input, output, 0, len(body) - 1)
            child = body.options[selection].node
            logger.debug("menu selection %d (%s)", selection, body.options[selection].label)
        else:
            if body.heading and body.heading.strip():
                output.write_line(body.heading)
            child = read_answer(input, output, body)

        if not child.run(input, output, MappingProxyType(dict(collected))):
            return False


def collect_inputs(node: Node, input: TextInput, output: TextOutput) -> None:
    collected = node.collected_inputs
    for key, prompt in node.input_prompts.items():
        current = collected.get(key, "")
        output.write(f"{prompt} [{current}]: ")
        line = input.read_line()
        if line is None:
            raise EndOfInput(f"input {key!r}")
        if line:
            collected[key] = line


def run_action(node: Node, body: ActionBody, input: TextInput, output: TextOutput) -> None:
    try:
        body.action(input, output, node.collected_inputs)
    except EndOfInput:
        raise
    except Exception as exc:
        logger.debug("action raised %s; continuing", type(exc).__name__, exc_info=True)
        output.write_line(f"{type(exc).__name__} has been thrown during action execution. Details below.")
        write_exception(output, exc)


def read_int(input: TextInput, output: TextOutput, low: int, high: int) -> int:
    while True:
        output.write(f"[{low} - {high}]: ")
        line = input.read_line()
        if line is None:
            raise EndOfInput("a menu selection")
        raw = line.strip()
        if not _INT_RE.fullmatch(raw):
            continue
        sign = "-" if raw.startswith("-") else ""
        digits = raw.lstrip("+-").lstrip("0") or "0"
        # anything longer than the bounds is out of range; never hand it to int()
        if len(digits) > max(len(str(abs(low))), len(str(abs(high)))):
            continue
        value = int(sign + digits)
        if low <= value <= high:
            return value


def read_answer(input: TextInput, output: TextOutput, table: PromptTable) -> Node:
    while True:
        output.write(f"[{', '.join(table.labels)}]: ")
        line = input.read_line()
        if line is None:
            raise EndOfInput("a prompt answer")
        child = table.lookup(line)
        if child is not None:
            logger.debug("prompt answer %r", line)
            return child


def exception_chain(exc: BaseException | None):
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        seen.add(id(exc))
        yield exc
        if exc.__cause__ is not None:
            exc = exc.__cause__
        elif not exc.__suppress_context__:
            exc = exc.__context__
        else:
            exc = None


def write_exception(output: TextOutput, exc: BaseException) -> None:
    for link in exception_chain(exc):
        output.write_line(str(link))
        for frame in traceback.format_tb(link.__traceback__):
            for line in frame.rstrip("\n").splitlines():
                output.write_line(line)
