"""ESTree-shaped syntax nodes.

Nodes are produced once by a parser adapter and then only read. Each node
carries its ESTree ``type`` name, its kind-specific fields, a byte span, a
location and a non-owning ``parent`` reference that ``link_parents`` sets.
Fields a node does not carry read as ``None``, so predicates over arbitrary
nodes never need ``getattr`` guards.
"""

from collections.abc import Iterator
from typing import Any, Final

from component_lint.models import SourceLocation


class NodeType:
    PROGRAM: Final = "Program"

    FUNCTION_DECLARATION: Final = "FunctionDeclaration"
    FUNCTION_EXPRESSION: Final = "FunctionExpression"
    ARROW_FUNCTION_EXPRESSION: Final = "ArrowFunctionExpression"
    METHOD_DEFINITION: Final = "MethodDefinition"

    CLASS_DECLARATION: Final = "ClassDeclaration"
    CLASS_EXPRESSION: Final = "ClassExpression"
    CLASS_BODY: Final = "ClassBody"
    CLASS_PROPERTY: Final = "ClassProperty"

    BLOCK_STATEMENT: Final = "BlockStatement"
    RETURN_STATEMENT: Final = "ReturnStatement"
    EXPRESSION_STATEMENT: Final = "ExpressionStatement"
    IF_STATEMENT: Final = "IfStatement"
    WHILE_STATEMENT: Final = "WhileStatement"
    DO_WHILE_STATEMENT: Final = "DoWhileStatement"
    FOR_STATEMENT: Final = "ForStatement"
    FOR_IN_STATEMENT: Final = "ForInStatement"
    FOR_OF_STATEMENT: Final = "ForOfStatement"
    SWITCH_STATEMENT: Final = "SwitchStatement"
    SWITCH_CASE: Final = "SwitchCase"
    CATCH_CLAUSE: Final = "CatchClause"
    VARIABLE_DECLARATION: Final = "VariableDeclaration"
    VARIABLE_DECLARATOR: Final = "VariableDeclarator"
    EXPORT_NAMED_DECLARATION: Final = "ExportNamedDeclaration"
    EXPORT_DEFAULT_DECLARATION: Final = "ExportDefaultDeclaration"

    YIELD_EXPRESSION: Final = "YieldExpression"
    OBJECT_EXPRESSION: Final = "ObjectExpression"
    PROPERTY: Final = "Property"
    SPREAD_ELEMENT: Final = "SpreadElement"
    EXPERIMENTAL_SPREAD_PROPERTY: Final = "ExperimentalSpreadProperty"
    MEMBER_EXPRESSION: Final = "MemberExpression"
    CALL_EXPRESSION: Final = "CallExpression"
    NEW_EXPRESSION: Final = "NewExpression"
    ASSIGNMENT_EXPRESSION: Final = "AssignmentExpression"
    CONDITIONAL_EXPRESSION: Final = "ConditionalExpression"
    LOGICAL_EXPRESSION: Final = "LogicalExpression"
    BINARY_EXPRESSION: Final = "BinaryExpression"
    IDENTIFIER: Final = "Identifier"
    LITERAL: Final = "Literal"
    TEMPLATE_LITERAL: Final = "TemplateLiteral"
    JSX_ELEMENT: Final = "JSXElement"
    JSX_FRAGMENT: Final = "JSXFragment"

    OBJECT_PATTERN: Final = "ObjectPattern"
    ASSIGNMENT_PATTERN: Final = "AssignmentPattern"
    REST_ELEMENT: Final = "RestElement"

    TS_AS_EXPRESSION: Final = "TSAsExpression"
    TS_SATISFIES_EXPRESSION: Final = "TSSatisfiesExpression"
    TS_NON_NULL_EXPRESSION: Final = "TSNonNullExpression"
    TS_INTERFACE_DECLARATION: Final = "TSInterfaceDeclaration"
    TS_INTERFACE_BODY: Final = "TSInterfaceBody"
    TS_TYPE_ALIAS_DECLARATION: Final = "TSTypeAliasDeclaration"
    TS_TYPE_LITERAL: Final = "TSTypeLiteral"
    TS_PROPERTY_SIGNATURE: Final = "TSPropertySignature"
    TS_METHOD_SIGNATURE: Final = "TSMethodSignature"
    TS_TYPE_REFERENCE: Final = "TSTypeReference"
    TS_TYPE_ANNOTATION: Final = "TSTypeAnnotation"
    TS_TYPE_PARAMETER_INSTANTIATION: Final = "TSTypeParameterInstantiation"
    TS_QUALIFIED_NAME: Final = "TSQualifiedName"

    # Flow
    OBJECT_TYPE_PROPERTY: Final = "ObjectTypeProperty"
    OBJECT_TYPE_ANNOTATION: Final = "ObjectTypeAnnotation"
    GENERIC_TYPE_ANNOTATION: Final = "GenericTypeAnnotation"
    TYPE_ALIAS: Final = "TypeAlias"


class Node:
    __slots__ = ("type", "fields", "parent", "start", "end", "loc")

    def __init__(
        self,
        type: str,
        *,
        start: int = 0,
        end: int = 0,
        loc: SourceLocation | None = None,
        **fields: Any,
    ) -> None:
        self.type = type
        self.fields: dict[str, Any] = fields
        self.parent: Node | None = None
        self.start = start
        self.end = end
        self.loc = loc

    def __getattr__(self, name: str) -> Any:
        if name.startswith("__") or name == "fields":
            raise AttributeError(name)
        return self.fields.get(name)

    def __repr__(self) -> str:
        label = self.fields.get("name")
        suffix = f" {label!r}" if isinstance(label, str) else ""
        return f"<{self.type}{suffix} {self.start}:{self.end}>"


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of ``node`` in field order."""
    for value in node.fields.values():
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item


def walk(node: Node) -> Iterator[Node]:
    """Pre-order traversal of ``node`` and all of its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))


def link_parents(root: Node) -> Node:
    root.parent = None
    for node in walk(root):
        for child in iter_children(node):
            child.parent = node
    return root
