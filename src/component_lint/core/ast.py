"""Node classification helpers shared by the analyses and the rules."""

import re
from typing import Any

from component_lint.core.nodes import Node, NodeType
from component_lint.core.ports.source import Token, TokenSource

FUNCTION_TYPES = frozenset(
    {
        NodeType.FUNCTION_DECLARATION,
        NodeType.FUNCTION_EXPRESSION,
        NodeType.ARROW_FUNCTION_EXPRESSION,
    }
)

UNWRAPPABLE_BODY_TYPES = frozenset(
    {
        NodeType.WHILE_STATEMENT,
        NodeType.DO_WHILE_STATEMENT,
        NodeType.FOR_STATEMENT,
        NodeType.FOR_IN_STATEMENT,
        NodeType.FOR_OF_STATEMENT,
        NodeType.IF_STATEMENT,
        NodeType.EXPRESSION_STATEMENT,
    }
)

CLASS_TYPES = frozenset({NodeType.CLASS_DECLARATION, NodeType.CLASS_EXPRESSION})

_EDGE_QUOTES = re.compile(r"^'|'$")
_BLANK = re.compile(r"^\s*$")


def is_function_type(node: Node | None) -> bool:
    """Function declarations, function expressions and arrow functions."""
    return node is not None and node.type in FUNCTION_TYPES


def is_supported_body_type(node: Node | None) -> bool:
    """Statements whose single, unbraced body may be looked through for a return."""
    return node is not None and node.type in UNWRAPPABLE_BODY_TYPES


def is_function_like_expression(node: Node | None) -> bool:
    return node is not None and node.type in (NodeType.FUNCTION_EXPRESSION, NodeType.ARROW_FUNCTION_EXPRESSION)


def is_function(node: Node | None) -> bool:
    return node is not None and node.type in (NodeType.FUNCTION_EXPRESSION, NodeType.FUNCTION_DECLARATION)


def is_class(node: Node | None) -> bool:
    return node is not None and node.type in CLASS_TYPES


def is_assignment_lhs(node: Node | None) -> bool:
    """True for the target of an assignment, e.g. ``props.bar`` in ``props.bar = 'bar'``."""
    if node is None or node.parent is None:
        return False
    parent = node.parent
    return parent.type == NodeType.ASSIGNMENT_EXPRESSION and parent.left is node


def unwrap_ts_as_expression(node: Node | None) -> Node | None:
    if node is not None and node.type == NodeType.TS_AS_EXPRESSION:
        return node.expression
    return node


def strip_quotes(value: str) -> str:
    """Remove one leading and one trailing single quote."""
    return _EDGE_QUOTES.sub("", value)


def get_property_name_node(node: Node | None) -> Node | None:
    if node is None:
        return None
    if node.key is not None or node.type in (NodeType.METHOD_DEFINITION, NodeType.PROPERTY):
        return node.key
    if node.type == NodeType.MEMBER_EXPRESSION:
        return node.property
    return None


def get_property_name(node: Node | None) -> str:
    name_node = get_property_name_node(node)
    if name_node is None or not isinstance(name_node.name, str):
        return ""
    return name_node.name


def get_component_properties(node: Node | None) -> list[Node]:
    if node is None:
        return []
    if node.type in CLASS_TYPES:
        return list(node.body.body) if node.body is not None and node.body.body else []
    if node.type == NodeType.OBJECT_EXPRESSION:
        return list(node.properties or [])
    return []


def get_key_value(node: Node | None, tokens: TokenSource | None = None) -> Any:
    """Return the name of a key-bearing node.

    Flow object type properties are read from their leading tokens so a
    variance sign (``+foo`` / ``-foo``) is skipped. Returns ``None`` when the
    node carries no key.
    """
    if node is None:
        return None
    if node.type == NodeType.OBJECT_TYPE_PROPERTY:
        if tokens is None:
            return None
        first = tokens.get_first_tokens(node, 2)
        if not first:
            return None
        if first[0].value in ("+", "-"):
            return first[1].value if len(first) > 1 else None
        return strip_quotes(first[0].value)
    if node.type == NodeType.GENERIC_TYPE_ANNOTATION:
        return node.id.name if node.id is not None else None
    if node.type == NodeType.OBJECT_TYPE_ANNOTATION:
        return None
    key = node.key or node.argument
    if key is None:
        return None
    return key.name if key.type == NodeType.IDENTIFIER else key.value


def get_first_node_in_line(tokens: TokenSource, node: Node) -> Token | None:
    """The token before ``node``, skipping JSX text whose last line is blank."""
    token = tokens.get_token_before(node)
    while token is not None and token.type == "JSXText" and _BLANK.match(token.value.split("\n")[-1]):
        token = tokens.get_token_before(token)
    return token


def is_node_first_in_line(tokens: TokenSource, node: Node) -> bool:
    """True when nothing but whitespace precedes ``node`` on its line."""
    token = get_first_node_in_line(tokens, node)
    start_line = node.loc.start.row if node.loc is not None else -1
    end_line = token.loc.end.row if token is not None and token.loc is not None else -1
    return start_line != end_line
