"""Stack of enclosing function bodies maintained during traversal."""

from __future__ import annotations

from dataclasses import dataclass

from syntax.nodes import NodeKind, SyntaxNode


@dataclass(frozen=True)
class ScopeFrame:
    """One function-like body currently being traversed.

    ``parent`` is the depth index of the lexically enclosing frame in the
    tracker's stack, or None at program top level.
    """

    function: SyntaxNode
    depth: int
    parent: int | None

    @property
    def body(self) -> SyntaxNode | None:
        return self.function.body

    @property
    def top_level_block(self) -> SyntaxNode | None:
        """The function's own body block; None for expression-bodied arrows."""
        body = self.function.body
        if body is not None and body.kind is NodeKind.BLOCK:
            return body
        return None


class ScopeTracker:
    def __init__(self) -> None:
        self._frames: list[ScopeFrame] = []

    def enter_function(self, node: SyntaxNode) -> ScopeFrame:
        depth = len(self._frames)
        parent = depth - 1 if depth else None
        frame = ScopeFrame(function=node, depth=depth, parent=parent)
        self._frames.append(frame)
        return frame

    def exit_function(self) -> None:
        if self._frames:
            self._frames.pop()

    def current_frame(self) -> ScopeFrame | None:
        if not self._frames:
            return None
        return self._frames[-1]

    def parent_of(self, frame: ScopeFrame) -> ScopeFrame | None:
        if frame.parent is None:
            return None
        return self._frames[frame.parent]

    def __len__(self) -> int:
        return len(self._frames)


__all__ = ["ScopeFrame", "ScopeTracker"]
