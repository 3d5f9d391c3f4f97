"""Syntax tree model for callback-return."""

from syntax.nodes import STATEMENT_LIST_KINDS, NodeKind, SyntaxNode

__all__ = ["STATEMENT_LIST_KINDS", "NodeKind", "SyntaxNode"]
