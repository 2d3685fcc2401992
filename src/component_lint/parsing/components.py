import logging
from collections.abc import Iterator

from component_lint.core.ast import is_class, is_function_type
from component_lint.core.nodes import Node, NodeType, walk
from component_lint.core.ports.components import Component
from component_lint.core.ports.scope import ScopeSource
from component_lint.core.returns import resolve_return_surface

logger = logging.getLogger(__name__)

_COMPONENT_BASES = frozenset({"Component", "PureComponent"})
_JSX_TYPES = frozenset({NodeType.JSX_ELEMENT, NodeType.JSX_FRAGMENT})


def extends_component(node: Node) -> bool:
    base = node.superClass
    if base is None:
        return False
    if base.type == NodeType.IDENTIFIER:
        return base.name in _COMPONENT_BASES
    if base.type == NodeType.MEMBER_EXPRESSION and base.property is not None:
        return base.property.name in _COMPONENT_BASES
    return False


def renders_jsx(node: Node | None) -> bool:
    if node is None:
        return False
    if node.type in _JSX_TYPES:
        return True
    if node.type == NodeType.CONDITIONAL_EXPRESSION:
        return renders_jsx(node.consequent) or renders_jsx(node.alternate)
    if node.type == NodeType.LOGICAL_EXPRESSION:
        return renders_jsx(node.left) or renders_jsx(node.right)
    if node.type in (NodeType.TS_AS_EXPRESSION, NodeType.TS_SATISFIES_EXPRESSION, NodeType.TS_NON_NULL_EXPRESSION):
        return renders_jsx(node.expression)
    return False


def _component_name(node: Node) -> str | None:
    if node.id is not None:
        return node.id.name
    parent = node.parent
    if parent is not None and parent.type == NodeType.VARIABLE_DECLARATOR and parent.id is not None:
        return parent.id.name
    return None


class ComponentDetector:
    """Classes extending (Pure)Component and functions that return JSX."""

    def __init__(self, program: Node, scopes: ScopeSource) -> None:
        self.scopes = scopes
        self._components: dict[Node, Component] = {}
        for node in walk(program):
            if (is_class(node) and extends_component(node)) or self._is_function_component(node):
                self._components[node] = Component(node=node, name=_component_name(node))
        logger.debug("Detected %d component(s)", len(self._components))

    def _is_function_component(self, node: Node) -> bool:
        if not is_function_type(node):
            return False
        # class methods such as render() are not components themselves
        if node.parent is not None and node.parent.type == NodeType.METHOD_DEFINITION:
            return False
        return self._returns_jsx(node)

    def _returns_jsx(self, node: Node) -> bool:
        for found in resolve_return_surface(node, self.scopes) or []:
            rendered = found.argument if found.type == NodeType.RETURN_STATEMENT else found
            if renders_jsx(rendered):
                return True
        return False

    def get(self, node: Node) -> Component | None:
        return self._components.get(node)

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __len__(self) -> int:
        return len(self._components)
