"""Diagnostic records produced by lint rules."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Diagnostic(BaseModel):
    """A single rule violation anchored to a source position (1-based)."""

    model_config = ConfigDict(frozen=True)

    rule: str
    message: str
    line: int
    column: int
    node_type: str
    path: str | None = None

    def location(self) -> str:
        if self.path is None:
            return f"{self.line}:{self.column}"
        return f"{self.path}:{self.line}:{self.column}"


__all__ = ["Diagnostic"]
