from __future__ import annotations

from rules.callback_return import (
    CallbackReturnRule,
    CallSite,
    NameMatcher,
    Placement,
    Verdict,
    classify,
    placement_of,
)
from rules.engine import run_rule
from rules.scope import ScopeTracker
from syntax.nodes import NodeKind, SyntaxNode


def _call(name: str = "callback", column: int = 1) -> SyntaxNode:
    return SyntaxNode(NodeKind.CALL, 1, column, callee=name)


def _stmt(expr: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(NodeKind.EXPRESSION_STATEMENT, expr.line, expr.column, [expr])


def _return(expr: SyntaxNode | None = None) -> SyntaxNode:
    children = [expr] if expr is not None else []
    return SyntaxNode(NodeKind.RETURN, 1, 1, children)


def _block(*statements: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(NodeKind.BLOCK, 1, 1, list(statements))


def _function(body: SyntaxNode) -> SyntaxNode:
    return SyntaxNode(NodeKind.FUNCTION, 1, 1, [body], body=body)


def _site(call: SyntaxNode, function: SyntaxNode | None) -> CallSite:
    tracker = ScopeTracker()
    frame = tracker.enter_function(function) if function is not None else None
    return CallSite(node=call, callee=call.callee or "", frame=frame)


def test_top_level_call_is_compliant_anywhere() -> None:
    call = _call()
    SyntaxNode(NodeKind.LOOP, 1, 1, [_block(_stmt(call), _stmt(_call("log")))])

    assert placement_of(_site(call, None)) is Placement.TOP_LEVEL
    assert classify(_site(call, None)) is Verdict.COMPLIANT


def test_return_operand() -> None:
    call = _call()
    function = _function(_block(_return(call), _stmt(_call("log"))))

    assert placement_of(_site(call, function)) is Placement.RETURN_OPERAND


def test_followed_by_bare_return_inside_nested_block() -> None:
    call = _call()
    inner = _block(_stmt(call), _return())
    function = _function(_block(SyntaxNode(NodeKind.IF, 1, 1, [inner])))

    assert placement_of(_site(call, function)) is Placement.FOLLOWED_BY_RETURN


def test_intervening_statement_disqualifies_following_return() -> None:
    call = _call()
    inner = _block(_stmt(call), _stmt(_call("log")), _return())
    function = _function(_block(SyntaxNode(NodeKind.IF, 1, 1, [inner])))

    assert placement_of(_site(call, function)) is Placement.UNGUARDED
    assert classify(_site(call, function)) is Verdict.VIOLATING


def test_guard_form_is_compliant_at_depth() -> None:
    call = _call()
    guard = SyntaxNode(NodeKind.LOGICAL_AND, 1, 1, [_call("ready"), call])
    deep = _block(_stmt(guard), _stmt(_call("log")))
    loop = SyntaxNode(NodeKind.LOOP, 1, 1, [deep])
    function = _function(_block(SyntaxNode(NodeKind.IF, 1, 1, [_block(loop)])))

    assert placement_of(_site(call, function)) is Placement.GUARDED


def test_left_operand_of_guard_is_not_exempt() -> None:
    call = _call()
    guard = SyntaxNode(NodeKind.LOGICAL_AND, 1, 1, [call, _call("log")])
    function = _function(_block(_stmt(guard), _stmt(_call("log"))))

    assert placement_of(_site(call, function)) is Placement.UNGUARDED


def test_function_tail_only_in_own_body_block() -> None:
    tail = _call()
    nested_tail = _call()
    function = _function(
        _block(SyntaxNode(NodeKind.IF, 1, 1, [_block(_stmt(nested_tail))]), _stmt(tail))
    )

    assert placement_of(_site(tail, function)) is Placement.FUNCTION_TAIL
    assert placement_of(_site(nested_tail, function)) is Placement.UNGUARDED


def test_expression_bodied_arrow_returns_implicitly() -> None:
    call = _call()
    function = _function(call)

    assert placement_of(_site(call, function)) is Placement.IMPLICIT_RETURN


def test_name_matcher_is_exact_and_case_sensitive() -> None:
    matcher = NameMatcher(["callback", "done"])

    assert matcher.matches("callback")
    assert matcher.matches("done")
    assert not matcher.matches("Callback")
    assert not matcher.matches("callbacks")
    assert not matcher.matches(None)


def test_scope_tracker_push_pop() -> None:
    outer = _function(_block())
    inner = _function(_block())
    tracker = ScopeTracker()

    assert tracker.current_frame() is None
    outer_frame = tracker.enter_function(outer)
    inner_frame = tracker.enter_function(inner)
    assert tracker.current_frame() is inner_frame
    assert tracker.parent_of(inner_frame) is outer_frame
    assert tracker.parent_of(outer_frame) is None
    assert inner_frame.top_level_block is inner.body

    tracker.exit_function()
    assert tracker.current_frame() is outer_frame
    tracker.exit_function()
    assert tracker.current_frame() is None
    assert len(tracker) == 0


def test_rule_over_hand_built_tree() -> None:
    first = _call(column=5)
    second = _call(column=20)
    body = _block(
        SyntaxNode(NodeKind.IF, 1, 1, [_block(_stmt(first))]),
        _stmt(second),
    )
    program = SyntaxNode(NodeKind.PROGRAM, 1, 1, [_function(body)])

    diagnostics = run_rule(program, CallbackReturnRule())

    assert [(d.line, d.column) for d in diagnostics] == [(1, 5)]
