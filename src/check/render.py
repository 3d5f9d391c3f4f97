"""Text and JSON renderings of diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rules.diagnostics import Diagnostic


def render_text(diagnostics: Sequence[Diagnostic]) -> str:
    lines = [
        f"{diagnostic.location()}: {diagnostic.message} [{diagnostic.rule}]"
        for diagnostic in diagnostics
    ]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def render_json(diagnostics: Sequence[Diagnostic]) -> str:
    payload = [diagnostic.model_dump() for diagnostic in diagnostics]
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(payload, option=opts).decode("utf8") + "\n"


__all__ = ["render_json", "render_text"]
