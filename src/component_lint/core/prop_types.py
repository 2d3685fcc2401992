"""Find prop-type declaration lists and feed them to the ordering check.

Declaration lists come from ``propTypes`` object literals (class fields,
``Component.propTypes = ...`` assignments, ``propTypes`` keys of object
literals), from variables they refer to, from the argument of a
configured wrapper call, from ``PropTypes.shape(...)`` arguments when
shape sorting is enabled, and from TypeScript interfaces / type literals
used as a component's props type. A source that does not lead to a
concrete list of members is skipped.
"""

import logging
from collections.abc import Callable, Iterator, Sequence

from component_lint.config import SortPolicy
from component_lint.core.ast import get_property_name, is_assignment_lhs, unwrap_ts_as_expression
from component_lint.core.nodes import Node, NodeType, walk
from component_lint.core.ordering import check_order
from component_lint.core.ports.components import ComponentRegistry, PropWrapperRecognizer
from component_lint.core.ports.reporting import DiagnosticSink
from component_lint.core.ports.source import SourceCode

logger = logging.getLogger(__name__)

_TYPE_DECLARATIONS = (NodeType.TS_INTERFACE_DECLARATION, NodeType.TS_TYPE_ALIAS_DECLARATION)
_EXPORTS = (NodeType.EXPORT_NAMED_DECLARATION, NodeType.EXPORT_DEFAULT_DECLARATION)


def is_prop_types_declaration(node: Node | None) -> bool:
    if node is not None and node.type == NodeType.CLASS_PROPERTY:
        # Flow: `props: Props`
        if node.typeAnnotation is not None and node.key is not None and node.key.name == "props":
            return True
    return get_property_name(node) == "propTypes"


def is_shape_call(node: Node | None) -> bool:
    return bool(
        node is not None
        and node.callee is not None
        and node.callee.property is not None
        and node.callee.property.name == "shape"
    )


def callee_name(callee: Node | None) -> str | None:
    """``fn`` for ``fn(...)``, ``obj.fn`` for ``obj.fn(...)``."""
    if callee is None:
        return None
    if callee.type == NodeType.IDENTIFIER:
        return callee.name
    if (
        callee.type == NodeType.MEMBER_EXPRESSION
        and not callee.computed
        and callee.object is not None
        and callee.object.type == NodeType.IDENTIFIER
        and callee.property is not None
        and callee.property.name
    ):
        return f"{callee.object.name}.{callee.property.name}"
    return None


class SortPropTypes:
    rule_id = "sort-prop-types"

    def __init__(
        self,
        source: SourceCode,
        components: ComponentRegistry,
        wrappers: PropWrapperRecognizer,
        sink: DiagnosticSink,
        policy: SortPolicy,
    ) -> None:
        self.source = source
        self.components = components
        self.wrappers = wrappers
        self.sink = sink
        self.policy = policy
        self._handlers: dict[str, Callable[[Node], None]] = {
            NodeType.CALL_EXPRESSION: self.on_call_expression,
            NodeType.CLASS_PROPERTY: self.on_class_property,
            NodeType.MEMBER_EXPRESSION: self.on_member_expression,
            NodeType.OBJECT_EXPRESSION: self.on_object_expression,
            NodeType.CLASS_DECLARATION: self.on_class,
            NodeType.CLASS_EXPRESSION: self.on_class,
            NodeType.FUNCTION_DECLARATION: self.on_function,
            NodeType.FUNCTION_EXPRESSION: self.on_function,
            NodeType.ARROW_FUNCTION_EXPRESSION: self.on_function,
        }

    def run(self, root: Node | None = None) -> None:
        for node in walk(root or self.source.ast):
            handler = self._handlers.get(node.type)
            if handler is not None:
                handler(node)

    # -- checks -------------------------------------------------------------

    def check_sorted(self, declarations: Sequence[Node] | None) -> None:
        # None when the declarations are not a literal, e.g. an imported shape
        if declarations is None:
            return
        for diagnostic in check_order(declarations, self.policy, self.source):
            self.sink.report(diagnostic)

    def check_node(self, node: Node | None) -> None:
        node = unwrap_ts_as_expression(node)
        if node is None:
            return
        if node.type == NodeType.OBJECT_EXPRESSION:
            self.check_sorted(node.properties)
        elif node.type == NodeType.IDENTIFIER:
            self._check_variable(node)
        elif node.type == NodeType.CALL_EXPRESSION:
            inner = node.arguments[0] if node.arguments else None
            if inner is not None and self.wrappers.is_prop_wrapper_function(callee_name(node.callee)):
                self.check_node(inner)

    def _check_variable(self, identifier: Node) -> None:
        bound = self.source.find_variable_by_name(identifier.name, identifier)
        if bound is not None and bound.properties is not None:
            self.check_sorted(bound.properties)

    def _type_declarations(self) -> Iterator[Node]:
        for item in self.source.ast.body or []:
            if item.type in _EXPORTS and item.declaration is not None:
                item = item.declaration
            if item.type in _TYPE_DECLARATIONS:
                yield item

    def _check_type_reference(self, type_name: str | None) -> None:
        if not type_name:
            return
        for declaration in self._type_declarations():
            if declaration.id is None or declaration.id.name != type_name:
                continue
            if declaration.type == NodeType.TS_INTERFACE_DECLARATION:
                self.check_sorted(declaration.body.body if declaration.body is not None else None)
            elif declaration.typeAnnotation is not None:
                self.check_sorted(declaration.typeAnnotation.members)

    def _check_type(self, type_node: Node | None) -> None:
        if type_node is None:
            return
        if type_node.type == NodeType.TS_TYPE_ANNOTATION:
            type_node = type_node.typeAnnotation
            if type_node is None:
                return
        if type_node.type == NodeType.TS_TYPE_REFERENCE:
            self._check_type_reference(type_node.typeName.name if type_node.typeName is not None else None)
        elif type_node.type == NodeType.TS_TYPE_LITERAL:
            self.check_sorted(type_node.members)

    # -- visitors -----------------------------------------------------------

    def on_call_expression(self, node: Node) -> None:
        if not self.policy.sort_shape_prop or not is_shape_call(node) or not node.arguments:
            return
        first = node.arguments[0]
        if first.properties is not None:
            self.check_sorted(first.properties)
        elif first.type == NodeType.IDENTIFIER:
            self._check_variable(first)

    def on_class_property(self, node: Node) -> None:
        if is_prop_types_declaration(node):
            self.check_node(node.value)

    def on_member_expression(self, node: Node) -> None:
        if is_prop_types_declaration(node) and is_assignment_lhs(node):
            self.check_node(node.parent.right)

    def on_object_expression(self, node: Node) -> None:
        for prop in node.properties or []:
            if prop.key is None or not is_prop_types_declaration(prop):
                continue
            if prop.value is not None and prop.value.type == NodeType.OBJECT_EXPRESSION:
                self.check_sorted(prop.value.properties)

    def on_class(self, node: Node) -> None:
        type_args = node.superTypeParameters
        if type_args is None or not type_args.params:
            return
        if self.components.get(node) is None:
            return
        logger.debug("Checking props type of class component %r", node)
        self._check_type(type_args.params[0])

    def on_function(self, node: Node) -> None:
        # `{ a }: Props = {}` carries its annotation on the pattern
        params = [param.left if param.type == NodeType.ASSIGNMENT_PATTERN else param for param in node.params or []]
        typed = [param for param in params if param is not None and param.typeAnnotation is not None]
        if not typed or self.components.get(node) is None:
            return
        logger.debug("Checking %d typed parameter(s) of component %r", len(typed), node)
        for param in typed:
            self._check_type(param.typeAnnotation)
