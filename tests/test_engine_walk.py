from __future__ import annotations

from rules.engine import VisitEvent, walk
from syntax.nodes import NodeKind, SyntaxNode


def test_walk_enters_before_and_exits_after_descendants() -> None:
    leaf_a = SyntaxNode(NodeKind.CALL, 1, 5, callee="a")
    leaf_b = SyntaxNode(NodeKind.CALL, 1, 9, callee="b")
    block = SyntaxNode(NodeKind.BLOCK, 1, 3, [leaf_a, leaf_b])
    root = SyntaxNode(NodeKind.PROGRAM, 1, 1, [block])

    events = [(event, node) for event, node in walk(root)]

    assert events == [
        (VisitEvent.ENTER, root),
        (VisitEvent.ENTER, block),
        (VisitEvent.ENTER, leaf_a),
        (VisitEvent.EXIT, leaf_a),
        (VisitEvent.ENTER, leaf_b),
        (VisitEvent.EXIT, leaf_b),
        (VisitEvent.EXIT, block),
        (VisitEvent.EXIT, root),
    ]


def test_children_get_parent_links() -> None:
    call = SyntaxNode(NodeKind.CALL, 1, 1, callee="callback")
    first = SyntaxNode(NodeKind.EXPRESSION_STATEMENT, 1, 1, [call])
    second = SyntaxNode(NodeKind.RETURN, 1, 12)
    block = SyntaxNode(NodeKind.BLOCK, 1, 1, [first, second])

    assert call.parent is first
    assert first.next_sibling() is second
    assert second.next_sibling() is None
    assert block.next_sibling() is None
    assert list(call.ancestors()) == [first, block]
