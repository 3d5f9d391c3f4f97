"""Parsing utilities for callback-return."""

from parse.treesitter_js import parse_file, parse_source

__all__ = ["parse_file", "parse_source"]
