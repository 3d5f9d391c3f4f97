"""File discovery for callback-return."""

from scan.files import find_js_files

__all__ = ["find_js_files"]
