from __future__ import annotations

import argparse
import logging
import sys

from .core.errors import ConfigurationError, EndOfInput
from .example import build_example
from .ui.console import RichOutput, StreamInput

logger = logging.getLogger(__name__)


def _add_run_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--eager-validation",
        action="store_true",
        help="Reject nodes without a menu, prompt or action when the tree is built",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for diagnostics written to stderr",
    )


def main(argv: list[str] | None = None) -> int:
    """Run the sample interaction tree against stdin/stdout."""

    parser = argparse.ArgumentParser(prog="menutree", description="Run the sample interaction tree")
    _add_run_args(parser)
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    output = RichOutput()
    try:
        root = build_example(StreamInput(sys.stdin), output, eager_validation=args.eager_validation or None)
        keep_going = root.run()
    except EndOfInput as exc:
        logger.info("session ended: %s", exc)
        output.write_line("")
        output.write_line("Input closed; the session has ended.")
        return 0
    except ConfigurationError as exc:
        logger.error("configuration error: %s", exc)
        return 1

    logger.debug("root returned keep_going=%s", keep_going)
    output.write_line("The interaction tree has finished. Review any output above.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
