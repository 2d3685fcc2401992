"""Lexical scopes of an ESTree program, enumerated the way eslint-scope creates them."""

from collections.abc import Sequence

from component_lint.core.ast import is_class, is_function_type
from component_lint.core.nodes import Node, NodeType, walk
from component_lint.core.ports.scope import Scope, ScopeKind

_FOR_TYPES = (NodeType.FOR_STATEMENT, NodeType.FOR_IN_STATEMENT, NodeType.FOR_OF_STATEMENT)


def _block_scoped_declaration(node: Node | None) -> bool:
    return node is not None and node.type == NodeType.VARIABLE_DECLARATION and node.kind in ("let", "const")


def scope_kind(node: Node) -> ScopeKind | None:
    if node.type == NodeType.PROGRAM:
        return "global"
    if is_function_type(node):
        return "function"
    if node.type == NodeType.BLOCK_STATEMENT:
        # a function body shares the function scope
        parent = node.parent
        if parent is not None and is_function_type(parent) and parent.body is node:
            return None
        return "block"
    if node.type == NodeType.SWITCH_STATEMENT:
        return "switch"
    if node.type == NodeType.FOR_STATEMENT and _block_scoped_declaration(node.init):
        return "for"
    if node.type in _FOR_TYPES[1:] and _block_scoped_declaration(node.left):
        return "for"
    if node.type == NodeType.CATCH_CLAUSE:
        return "catch"
    if is_class(node):
        return "class"
    return None


def is_owned_by(block: Node, function: Node) -> bool:
    """True when ``block`` is ``function`` or sits inside it without crossing a nested function."""
    current: Node | None = block
    while current is not None:
        if current is function:
            return True
        if is_function_type(current):
            return False
        current = current.parent
    return False


class ScopeAnalyzer:
    def __init__(self, program: Node) -> None:
        self.program = program
        self.scopes: list[Scope] = []
        for node in walk(program):
            kind = scope_kind(node)
            if kind is not None:
                self.scopes.append(Scope(kind=kind, block=node))

    def scopes_for(self, node: Node) -> Sequence[Scope]:
        return [scope for scope in self.scopes if is_owned_by(scope.block, node)]
