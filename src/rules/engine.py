"""Depth-first traversal that drives rule visitors."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rules.diagnostics import Diagnostic
    from syntax.nodes import SyntaxNode


class VisitEvent(str, Enum):
    ENTER = "enter"
    EXIT = "exit"


class Rule(Protocol):
    name: str

    def enter(self, node: SyntaxNode) -> None: ...

    def exit(self, node: SyntaxNode) -> None: ...

    @property
    def diagnostics(self) -> list[Diagnostic]: ...


def walk(root: SyntaxNode) -> Iterator[tuple[VisitEvent, SyntaxNode]]:
    """Yield enter/exit events in source order.

    A node is entered before any of its descendants and exited after all of
    them.
    """
    stack: list[tuple[SyntaxNode, bool]] = [(root, False)]
    while stack:
        node, entered = stack.pop()
        if entered:
            yield VisitEvent.EXIT, node
            continue

        yield VisitEvent.ENTER, node
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))


def run_rule(root: SyntaxNode, rule: Rule) -> list[Diagnostic]:
    for event, node in walk(root):
        if event is VisitEvent.ENTER:
            rule.enter(node)
        else:
            rule.exit(node)
    return rule.diagnostics


__all__ = ["Rule", "VisitEvent", "run_rule", "walk"]
