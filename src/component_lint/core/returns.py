"""Locate the statements a function-like node can return from.

``resolve_return_surface`` follows unbraced control flow (``if``/``else``,
loops, ``switch`` cases, concise arrow bodies) and never reports a return
that belongs to a nested function. ``find_trailing_return`` only looks at
the direct statement list of a function body.
"""

import logging
from collections.abc import Iterator, Sequence

from component_lint.core.ast import is_function_type, is_supported_body_type
from component_lint.core.nodes import Node, NodeType
from component_lint.core.ports.scope import ScopeSource

logger = logging.getLogger(__name__)

_RETURN_TYPES = (NodeType.RETURN_STATEMENT, NodeType.YIELD_EXPRESSION)


def _effective_target(node: Node) -> Node:
    # class methods and object methods hold the function in ``value``
    if node.type in (NodeType.METHOD_DEFINITION, NodeType.PROPERTY) and is_function_type(node.value):
        return node.value
    return node


def _belongs_to(candidate: Node, target: Node) -> bool:
    """Walk up from ``candidate``; reject it if another function boundary comes before ``target``."""
    current: Node | None = candidate
    while current is not None:
        if current is target:
            return True
        if is_function_type(current):
            return False
        current = current.parent
    return False


def _enumerate_candidates(target: Node, scopes: ScopeSource) -> Iterator[Node]:
    for scope in scopes.scopes_for(target):
        block = scope.block
        if scope.kind == "function":
            if block is not target or block.body is None:
                continue
            body = block.body
            if body.type != NodeType.BLOCK_STATEMENT:
                yield body
                continue
            yield from (
                stmt
                for stmt in body.body or []
                if stmt.type == NodeType.RETURN_STATEMENT or is_supported_body_type(stmt)
            )
        elif scope.kind == "block" and block.type == NodeType.BLOCK_STATEMENT:
            yield from block.body or []
        elif scope.kind == "switch" and block.type == NodeType.SWITCH_STATEMENT:
            yield block
        elif scope.kind == "for" and block.body is not None and block.body.type != NodeType.BLOCK_STATEMENT:
            yield block.body


def _reduce(stmt: Node | None, target: Node) -> Iterator[Node]:
    if stmt is None:
        return

    if stmt is target.body and stmt.type != NodeType.BLOCK_STATEMENT:
        # concise arrow body
        yield stmt
        return

    if stmt.type in _RETURN_TYPES or is_function_type(stmt):
        if _belongs_to(stmt, target):
            yield stmt
        return

    if stmt.type == NodeType.EXPRESSION_STATEMENT:
        if stmt.expression is not None:
            yield stmt.expression
        return

    if stmt.type == NodeType.IF_STATEMENT:
        if stmt.alternate is None:
            if stmt.consequent is not None and stmt.consequent.type != NodeType.BLOCK_STATEMENT:
                yield from _reduce(stmt.consequent, target)
            return
        for branch in (stmt.consequent, stmt.alternate):
            if branch is not None and branch.type != NodeType.BLOCK_STATEMENT:
                yield from _reduce(branch, target)
        return

    if is_supported_body_type(stmt):
        if stmt.body is not None and stmt.body.type != NodeType.BLOCK_STATEMENT:
            yield from _reduce(stmt.body, target)
        return

    if stmt.type == NodeType.SWITCH_STATEMENT:
        # each case is judged on its own statements; fallthrough is not followed
        for case in stmt.cases or []:
            for consequent in case.consequent or []:
                yield from _reduce(consequent, target)


def resolve_return_surface(node: Node, scopes: ScopeSource) -> list[Node] | None:
    """Return every statement ``node`` can return from.

    ``node`` is a function-like node (a method definition is looked through
    to its function) or a return/yield node. ``None`` means no candidate
    statement was found at all; an empty list means candidates existed but
    none of them is a return.
    """
    target = _effective_target(node)
    if target.type in _RETURN_TYPES:
        candidates = [target]
    elif is_function_type(target):
        candidates = list(_enumerate_candidates(target, scopes))
    else:
        return None

    if not candidates:
        logger.debug("No return candidates in %r", target)
        return None

    surface = [found for candidate in candidates for found in _reduce(candidate, target)]
    logger.debug("Resolved %d of %d return candidates in %r", len(surface), len(candidates), target)
    return surface


def _function_statements(node: Node) -> Sequence[Node] | None:
    for owner in (node.value, node):
        if owner is not None and owner.body is not None and isinstance(owner.body.body, list):
            return owner.body.body
    return None


def _scan_back(statements: Sequence[Node]) -> Node | None:
    for stmt in reversed(statements):
        if stmt.type == NodeType.RETURN_STATEMENT:
            return stmt
        if stmt.type == NodeType.SWITCH_STATEMENT and stmt.cases:
            return _scan_back(stmt.cases[-1].consequent or [])
    return None


def find_trailing_return(node: Node) -> Node | None:
    """Find the last ``return`` in the direct statement list of a function body.

    A ``switch`` met while scanning backward decides the result: only its
    last case is searched and earlier statements are not revisited.
    """
    statements = _function_statements(node)
    if statements is None:
        return None
    return _scan_back(statements)
