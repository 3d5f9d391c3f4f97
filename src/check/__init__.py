"""Lint runs over sources and repositories."""

from check.render import render_json, render_text
from check.runner import check_file, check_paths, check_source, check_tree

__all__ = [
    "check_file",
    "check_paths",
    "check_source",
    "check_tree",
    "render_json",
    "render_text",
]
