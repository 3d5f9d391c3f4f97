"""Closed set of syntax node variants consumed by the lint rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


class NodeKind(str, Enum):
    """Node variants the rules distinguish between."""

    PROGRAM = "program"
    FUNCTION = "function"
    BLOCK = "block"
    EXPRESSION_STATEMENT = "expression_statement"
    RETURN = "return"
    CALL = "call"
    LOGICAL_AND = "logical_and"
    IF = "if"
    SWITCH = "switch"
    CASE = "case"
    LOOP = "loop"
    OTHER = "other"


STATEMENT_LIST_KINDS = frozenset({NodeKind.PROGRAM, NodeKind.BLOCK})


@dataclass(eq=False)
class SyntaxNode:
    """One node of a lowered syntax tree.

    Positions are 1-based. ``callee`` is only set on CALL nodes whose callee
    is a plain identifier; ``body`` is only set on FUNCTION nodes and points
    at one of ``children``.
    """

    kind: NodeKind
    line: int
    column: int
    children: list[SyntaxNode] = field(default_factory=list)
    callee: str | None = None
    body: SyntaxNode | None = field(default=None, repr=False)
    parent: SyntaxNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    @property
    def index_in_parent(self) -> int | None:
        if self.parent is None:
            return None
        for index, sibling in enumerate(self.parent.children):
            if sibling is self:
                return index
        return None

    def next_sibling(self) -> SyntaxNode | None:
        index = self.index_in_parent
        if index is None or self.parent is None:
            return None
        siblings = self.parent.children
        if index + 1 < len(siblings):
            return siblings[index + 1]
        return None

    def ancestors(self) -> Iterator[SyntaxNode]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent


__all__ = ["STATEMENT_LIST_KINDS", "NodeKind", "SyntaxNode"]
