"""Run the callback-return rule over sources, files and directory trees."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from parse.treesitter_js import parse_file, parse_source
from rules.callback_return import CallbackReturnRule
from rules.config import LintConfig, load_config
from rules.engine import run_rule
from scan.files import find_js_files

if TYPE_CHECKING:
    from pathlib import Path

    from rules.config import CallbackReturnOptions
    from rules.diagnostics import Diagnostic
    from syntax.nodes import SyntaxNode

logger = logging.getLogger(__name__)


def check_tree(
    tree: SyntaxNode,
    options: CallbackReturnOptions | None = None,
    *,
    path: str | None = None,
) -> list[Diagnostic]:
    """Run one fresh rule instance over an already-lowered tree."""
    return run_rule(tree, CallbackReturnRule(options, path=path))


def check_source(
    source: str | bytes,
    options: CallbackReturnOptions | None = None,
    *,
    path: str | None = None,
) -> list[Diagnostic]:
    return check_tree(parse_source(source), options, path=path)


def check_file(
    file_path: Path,
    options: CallbackReturnOptions | None = None,
    *,
    root: Path | None = None,
) -> list[Diagnostic]:
    """Check a single file; diagnostics carry the path relative to ``root``.

    Raises:
        OSError: If the file cannot be read.
    """
    display_path = file_path.as_posix()
    if root is not None:
        try:
            display_path = file_path.relative_to(root).as_posix()
        except ValueError:
            pass

    tree = parse_file(file_path)
    return check_tree(tree, options, path=display_path)


def check_paths(
    root: Path,
    config: LintConfig | None = None,
) -> list[Diagnostic]:
    """Check every JavaScript file under ``root``.

    Files are visited in sorted relative-path order, so the result is ordered
    by file and then by source position. Unreadable files are logged and
    skipped.
    """
    if config is None:
        config = load_config(root)

    options = config.rules.callback_return
    diagnostics: list[Diagnostic] = []
    checked = 0
    for file_path in find_js_files(
        root,
        include_patterns=config.include,
        exclude_patterns=config.exclude,
        nested_gitignore=config.nested_gitignore,
    ):
        try:
            file_diagnostics = check_file(file_path, options, root=root)
        except OSError as exc:
            logger.warning("Skipping unreadable file %s: %s", file_path, exc)
            continue
        checked += 1
        diagnostics.extend(file_diagnostics)

    logger.info(
        "Checked %d file(s), found %d problem(s)", checked, len(diagnostics)
    )
    return diagnostics


__all__ = ["check_file", "check_paths", "check_source", "check_tree"]
