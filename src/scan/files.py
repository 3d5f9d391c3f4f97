"""JavaScript source discovery for callback-return."""

from __future__ import annotations

import os
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, cast

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

JS_SUFFIXES = frozenset({".js", ".mjs", ".cjs", ".jsx"})

SKIPPED_DIRS = frozenset({".git", "node_modules"})


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield regular files under root without following directory symlinks."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(name for name in dirnames if name not in SKIPPED_DIRS)
        base = Path(dirpath)
        for filename in sorted(filenames):
            path = base / filename
            if not path.is_symlink() and path.is_file():
                yield path


def _build_gitignore_matcher(
    root: Path,
    *,
    nested_gitignore: bool,
) -> Callable[[str], bool] | None:
    if nested_gitignore:
        gitignore_paths = [
            path for path in _walk_files(root) if path.name == ".gitignore"
        ]
    else:
        root_gitignore = root / ".gitignore"
        gitignore_paths = [root_gitignore] if root_gitignore.is_file() else []

    if not gitignore_paths:
        return None
    if len(gitignore_paths) == 1:
        return cast("Callable[[str], bool]", parse_gitignore(gitignore_paths[0]))

    matchers = [parse_gitignore(path) for path in gitignore_paths]

    def matches(path_str: str) -> bool:
        for matcher in matchers:
            try:
                if matcher(path_str):
                    return True
            except ValueError:
                continue
        return False

    return matches


def _selected(
    rel_path: str,
    include_patterns: list[str] | None,
    exclude_patterns: list[str] | None,
) -> bool:
    if include_patterns and not any(fnmatch(rel_path, pat) for pat in include_patterns):
        return False
    return not (
        exclude_patterns and any(fnmatch(rel_path, pat) for pat in exclude_patterns)
    )


def find_js_files(
    directory: Path,
    *,
    include_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
    nested_gitignore: bool = False,
) -> Iterator[Path]:
    """Find all JavaScript files in a directory, respecting .gitignore.

    Symlinked files and directories are never followed, and ``node_modules``
    trees are skipped.

    Yields:
        Paths sorted lexicographically by relative path.
    """
    gitignore_matches = _build_gitignore_matcher(
        directory,
        nested_gitignore=nested_gitignore,
    )

    matched_files = []
    for path in _walk_files(directory):
        if path.suffix not in JS_SUFFIXES:
            continue
        if gitignore_matches is not None and gitignore_matches(str(path)):
            continue
        rel_path = path.relative_to(directory).as_posix()
        if _selected(rel_path, include_patterns, exclude_patterns):
            matched_files.append(path)

    matched_files.sort(key=lambda p: p.relative_to(directory).as_posix())

    yield from matched_files


__all__ = ["find_js_files"]
