"""Tree-sitter based JavaScript parsing and lowering to syntax nodes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_javascript import language as get_javascript_language

from syntax.nodes import NodeKind, SyntaxNode

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_PARSER: Parser | None = None

FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

LOOP_TYPES = frozenset(
    {
        "for_statement",
        "for_in_statement",
        "for_of_statement",
        "while_statement",
        "do_statement",
    }
)

# Wrappers that carry no meaning of their own for the rules.
TRANSPARENT_TYPES = frozenset(
    {"parenthesized_expression", "else_clause", "switch_body"}
)

_SIMPLE_KINDS = {
    "program": NodeKind.PROGRAM,
    "statement_block": NodeKind.BLOCK,
    "expression_statement": NodeKind.EXPRESSION_STATEMENT,
    "return_statement": NodeKind.RETURN,
    "if_statement": NodeKind.IF,
    "switch_statement": NodeKind.SWITCH,
}


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with JavaScript language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_javascript_language())
        _PARSER = Parser(lang)

    return _PARSER


def _position(node: Node, source_bytes: bytes) -> tuple[int, int]:
    """Return the 1-based line and character (not byte) column of ``node``."""
    row, byte_column = node.start_point
    line_start = node.start_byte - byte_column
    prefix = source_bytes[line_start : node.start_byte]
    return row + 1, len(prefix.decode("utf8", errors="replace")) + 1


def _decode_node_text(node: Node) -> str:
    if node.text is None:
        return ""
    return node.text.decode("utf8", errors="ignore")


def _named_children(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _present(lowered: list[tuple[Node, SyntaxNode | None]]) -> list[SyntaxNode]:
    return [child for _, child in lowered if child is not None]


def _is_tagged_template(node: Node) -> bool:
    arguments = node.child_by_field_name("arguments")
    return arguments is not None and arguments.type == "template_string"


def _build_call(
    node: Node, lowered: list[tuple[Node, SyntaxNode | None]], line: int, column: int
) -> SyntaxNode:
    callee_node = node.child_by_field_name("function")
    callee = None
    if callee_node is not None and callee_node.type == "identifier":
        callee = _decode_node_text(callee_node).strip()

    return SyntaxNode(
        NodeKind.CALL,
        line,
        column,
        children=_present(lowered),
        callee=callee,
    )


def _build_function(
    node: Node, lowered: list[tuple[Node, SyntaxNode | None]], line: int, column: int
) -> SyntaxNode:
    body_node = node.child_by_field_name("body")
    body: SyntaxNode | None = None
    for child, lowered_child in lowered:
        if body_node is not None and child.id == body_node.id:
            body = lowered_child

    return SyntaxNode(
        NodeKind.FUNCTION, line, column, children=_present(lowered), body=body
    )


def _build_case(
    node: Node, lowered: list[tuple[Node, SyntaxNode | None]], line: int, column: int
) -> SyntaxNode:
    """Build a switch case, wrapping its consequent in a synthetic block."""
    value_node = node.child_by_field_name("value")
    children: list[SyntaxNode] = []
    statements: list[SyntaxNode] = []
    for child, lowered_child in lowered:
        if lowered_child is None:
            continue
        if value_node is not None and child.id == value_node.id:
            children.append(lowered_child)
        else:
            statements.append(lowered_child)

    if statements:
        block_line, block_column = statements[0].line, statements[0].column
    else:
        block_line, block_column = line, column
    children.append(
        SyntaxNode(NodeKind.BLOCK, block_line, block_column, children=statements)
    )
    return SyntaxNode(NodeKind.CASE, line, column, children=children)


def _is_logical_and(node: Node) -> bool:
    operator = node.child_by_field_name("operator")
    return operator is not None and operator.type == "&&"


def _build(
    node: Node,
    lowered: list[tuple[Node, SyntaxNode | None]],
    source_bytes: bytes,
) -> SyntaxNode:
    """Build one syntax node from a tree-sitter node and its lowered children."""
    line, column = _position(node, source_bytes)

    if node.type in TRANSPARENT_TYPES:
        inner = _present(lowered)
        if len(inner) == 1:
            return inner[0]
        return SyntaxNode(NodeKind.OTHER, line, column, children=inner)

    if node.type == "call_expression" and not _is_tagged_template(node):
        return _build_call(node, lowered, line, column)

    if node.type in FUNCTION_TYPES:
        return _build_function(node, lowered, line, column)

    if node.type in ("switch_case", "switch_default"):
        return _build_case(node, lowered, line, column)

    if node.type == "binary_expression" and _is_logical_and(node):
        kind = NodeKind.LOGICAL_AND
    elif node.type in LOOP_TYPES:
        kind = NodeKind.LOOP
    else:
        kind = _SIMPLE_KINDS.get(node.type, NodeKind.OTHER)

    return SyntaxNode(kind, line, column, children=_present(lowered))


def _lower(root_node: Node, source_bytes: bytes) -> SyntaxNode:
    """Lower a tree-sitter tree bottom-up with an explicit stack.

    Generated code nests expressions thousands of levels deep, so the walk
    never recurses.
    """
    results: dict[int, SyntaxNode] = {}
    stack: list[tuple[Node, list[Node] | None]] = [(root_node, None)]
    while stack:
        node, children = stack.pop()
        if children is None:
            children = _named_children(node)
            stack.append((node, children))
            stack.extend((child, None) for child in reversed(children))
            continue

        lowered = [(child, results.pop(child.id, None)) for child in children]
        results[node.id] = _build(node, lowered, source_bytes)

    return results[root_node.id]


def parse_source(source: str | bytes) -> SyntaxNode:
    """Parse JavaScript source and lower it to a ``SyntaxNode`` tree.

    Tree-sitter is error tolerant, so source with syntax errors still yields
    a tree; a warning is logged and the error regions lower to OTHER nodes.
    """
    source_bytes = source.encode("utf8") if isinstance(source, str) else source
    tree = _get_parser().parse(source_bytes)
    root_node = tree.root_node
    if root_node.has_error:
        logger.warning(
            "Syntax errors found; analysing the recoverable parts of the tree"
        )

    program = _lower(root_node, source_bytes)
    if program.kind is NodeKind.PROGRAM:
        return program

    line, column = _position(root_node, source_bytes)
    return SyntaxNode(NodeKind.PROGRAM, line, column, children=[program])


def parse_file(path: Path) -> SyntaxNode:
    """Read and parse a JavaScript file.

    Raises:
        OSError: If the file cannot be read.
    """
    logger.debug("Parsing %s", path)
    return parse_source(path.read_bytes())


__all__ = ["parse_file", "parse_source"]
