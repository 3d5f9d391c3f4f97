"""Flag callback invocations that are not followed by function termination.

A call to a configured callback name must sit where the enclosing function
is guaranteed to stop right afterwards. The accepted placements are checked
in a fixed order and the first one that applies wins:

1. the call is at program top level (there is no function to terminate);
2. the call is the value of a ``return`` statement;
3. the call is the whole expression body of an arrow function;
4. the call is a statement immediately followed by a ``return``;
5. the call is the right operand of a ``guard && call()`` statement;
6. the call is the last statement of the function's own body block.

Anything else is reported. Symmetric ``if``/``else`` branches that each end
in the call are still reported; only the function's own body block counts
for the trailing position.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from rules.config import CallbackReturnOptions
from rules.diagnostics import Diagnostic
from rules.scope import ScopeFrame, ScopeTracker
from syntax.nodes import STATEMENT_LIST_KINDS, NodeKind, SyntaxNode

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

RULE_ID = "callback-return"
MESSAGE = "Expected return with your callback function."
NODE_TYPE = "CallExpression"


class Verdict(str, Enum):
    COMPLIANT = "compliant"
    VIOLATING = "violating"


class Placement(str, Enum):
    """Why a callback call was accepted, or UNGUARDED when it was not."""

    TOP_LEVEL = "top_level"
    RETURN_OPERAND = "return_operand"
    IMPLICIT_RETURN = "implicit_return"
    FOLLOWED_BY_RETURN = "followed_by_return"
    GUARDED = "guarded"
    FUNCTION_TAIL = "function_tail"
    UNGUARDED = "unguarded"

    @property
    def verdict(self) -> Verdict:
        if self is Placement.UNGUARDED:
            return Verdict.VIOLATING
        return Verdict.COMPLIANT


class NameMatcher:
    """Exact, case-sensitive lookup of callback identifiers."""

    def __init__(self, names: Iterable[str]) -> None:
        self._names = frozenset(names)

    def matches(self, callee: str | None) -> bool:
        return callee is not None and callee in self._names


@dataclass(frozen=True)
class CallSite:
    node: SyntaxNode
    callee: str
    frame: ScopeFrame | None

    @property
    def line(self) -> int:
        return self.node.line

    @property
    def column(self) -> int:
        return self.node.column

    @property
    def statement(self) -> SyntaxNode | None:
        """The expression statement made up of exactly this call, if any."""
        parent = self.node.parent
        if parent is not None and parent.kind is NodeKind.EXPRESSION_STATEMENT:
            return parent
        return None

    @property
    def block(self) -> SyntaxNode | None:
        """The statement list directly holding ``statement``, if any."""
        statement = self.statement
        if statement is None or statement.parent is None:
            return None
        if statement.parent.kind in STATEMENT_LIST_KINDS:
            return statement.parent
        return None


def _in_expression_body(node: SyntaxNode, frame: ScopeFrame) -> bool:
    body = frame.body
    if body is None or body.kind is NodeKind.BLOCK:
        return False
    if node is body:
        return True
    for ancestor in node.ancestors():
        if ancestor is body:
            return True
        if ancestor is frame.function:
            break
    return False


def _is_guarded(node: SyntaxNode) -> bool:
    parent = node.parent
    if parent is None or parent.kind is not NodeKind.LOGICAL_AND:
        return False
    if not parent.children or parent.children[-1] is not node:
        return False
    return (
        parent.parent is not None
        and parent.parent.kind is NodeKind.EXPRESSION_STATEMENT
    )


def placement_of(site: CallSite) -> Placement:
    """Return the first accepted placement that applies to ``site``."""
    frame = site.frame
    if frame is None:
        return Placement.TOP_LEVEL

    parent = site.node.parent
    if parent is not None and parent.kind is NodeKind.RETURN:
        return Placement.RETURN_OPERAND

    if _in_expression_body(site.node, frame):
        return Placement.IMPLICIT_RETURN

    statement = site.statement
    block = site.block
    following = None
    if statement is not None and block is not None:
        following = statement.next_sibling()
    if following is not None and following.kind is NodeKind.RETURN:
        return Placement.FOLLOWED_BY_RETURN

    if _is_guarded(site.node):
        return Placement.GUARDED

    if (
        statement is not None
        and block is not None
        and block is frame.top_level_block
        and following is None
    ):
        return Placement.FUNCTION_TAIL

    return Placement.UNGUARDED


def classify(site: CallSite) -> Verdict:
    return placement_of(site).verdict


class DiagnosticReporter:
    def __init__(self, *, path: str | None = None) -> None:
        self._path = path
        self._diagnostics: list[Diagnostic] = []

    def report(self, site: CallSite) -> Diagnostic:
        diagnostic = Diagnostic(
            rule=RULE_ID,
            message=MESSAGE,
            line=site.line,
            column=site.column,
            node_type=NODE_TYPE,
            path=self._path,
        )
        self._diagnostics.append(diagnostic)
        return diagnostic

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)


class CallbackReturnRule:
    """Rule visitor; one instance serves exactly one traversal."""

    name = RULE_ID

    def __init__(
        self,
        options: CallbackReturnOptions | None = None,
        *,
        path: str | None = None,
    ) -> None:
        if options is None:
            options = CallbackReturnOptions()
        self._matcher = NameMatcher(options.names)
        self._scopes = ScopeTracker()
        self._reporter = DiagnosticReporter(path=path)

    def enter(self, node: SyntaxNode) -> None:
        if node.kind is NodeKind.FUNCTION:
            self._scopes.enter_function(node)
        elif node.kind is NodeKind.CALL:
            self._check_call(node)

    def exit(self, node: SyntaxNode) -> None:
        if node.kind is NodeKind.FUNCTION:
            self._scopes.exit_function()

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self._reporter.diagnostics

    def _check_call(self, node: SyntaxNode) -> None:
        if node.callee is None or not self._matcher.matches(node.callee):
            return

        site = CallSite(
            node=node,
            callee=node.callee,
            frame=self._scopes.current_frame(),
        )
        placement = placement_of(site)
        logger.debug(
            "%s() at %d:%d classified as %s",
            site.callee,
            site.line,
            site.column,
            placement.value,
        )
        if placement.verdict is Verdict.VIOLATING:
            self._reporter.report(site)


__all__ = [
    "MESSAGE",
    "NODE_TYPE",
    "RULE_ID",
    "CallSite",
    "CallbackReturnRule",
    "DiagnosticReporter",
    "NameMatcher",
    "Placement",
    "Verdict",
    "classify",
    "placement_of",
]
