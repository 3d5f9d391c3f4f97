"""Command-line interface for callback-return."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from check.render import render_json, render_text
from check.runner import check_paths
from rules.config import CallbackReturnOptions, ConfigError, load_config

logger = logging.getLogger(__name__)


def setup_logging(*, verbose: bool = False) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Repository root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="callback-return")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Report callbacks not followed by a return"
    )
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--callbacks",
        nargs="+",
        default=None,
        metavar="NAME",
        help="Callback identifiers to check (default: config names or 'callback')",
    )
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    check_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-call decisions to stderr",
    )

    return parser


def _handle_check(
    root: Path, callbacks: list[str] | None, output_format: str
) -> int:
    try:
        config = load_config(root)
        if callbacks is not None:
            options = CallbackReturnOptions(names=tuple(callbacks))
            rules = config.rules.model_copy(update={"callback_return": options})
            config = config.model_copy(update={"rules": rules})
    except ValidationError as exc:
        sys.stderr.write(f"error: invalid --callbacks: {exc}\n")
        return 2
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    diagnostics = check_paths(root, config)
    render = render_json if output_format == "json" else render_text
    sys.stdout.write(render(diagnostics))
    return 1 if diagnostics else 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=getattr(args, "verbose", False))

    root = Path(args.root).expanduser().resolve()

    if args.command == "check":
        logger.info("Checking %s", root)
        return _handle_check(root, args.callbacks, args.format)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
