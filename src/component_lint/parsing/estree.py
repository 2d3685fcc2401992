"""Convert tree-sitter JavaScript/TypeScript trees into ESTree-shaped nodes.

Only the node kinds the analyses look at get an ESTree shape; everything
else becomes a generic node named after its tree-sitter kind whose
``children`` keep the traversal going. Parenthesised expressions are
unwrapped and comments dropped, as ESTree parsers do.
"""

import logging
import re
from collections.abc import Callable
from typing import Any, cast

from tree_sitter import Node as TSNode
from tree_sitter import Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from component_lint.core.languages import normalize_language
from component_lint.core.nodes import Node, NodeType, link_parents
from component_lint.models import Position, SourceLocation

logger = logging.getLogger(__name__)

_LOGICAL_OPERATORS = frozenset({"&&", "||", "??"})
_ESCAPE = re.compile(r"\\(u\{[0-9A-Fa-f]+\}|u[0-9A-Fa-f]{4}|x[0-9A-Fa-f]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_TERMINATORS = frozenset({"\n", "\r", "\r\n", "\u2028", "\u2029"})
_IDENTIFIER_KINDS = frozenset(
    {
        "identifier",
        "property_identifier",
        "private_property_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "statement_identifier",
        "type_identifier",
    }
)


def _unescape(match: re.Match[str]) -> str:
    sequence = match.group(1)
    if sequence.startswith("u{"):
        return chr(int(sequence[2:-1], 16))
    if sequence[0] in "ux" and len(sequence) > 1:
        return chr(int(sequence[1:], 16))
    if sequence in _LINE_TERMINATORS:
        return ""
    return _SIMPLE_ESCAPES.get(sequence, sequence)


def decode_string_literal(raw: str) -> str:
    """The value of a quoted JavaScript string literal, escapes resolved."""
    value = _ESCAPE.sub(_unescape, raw[1:-1])
    # `\uD83D\uDE00` escapes a surrogate pair
    return value.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


class EstreeBuilder:
    def __init__(self, source: bytes) -> None:
        self.source = source
        self._converters: dict[str, Callable[[TSNode], Node]] = {
            "program": self._program,
            "expression_statement": self._expression_statement,
            "statement_block": self._block,
            "return_statement": self._return,
            "if_statement": self._if,
            "while_statement": self._while,
            "do_statement": self._do_while,
            "for_statement": self._for,
            "for_in_statement": self._for_in,
            "switch_statement": self._switch,
            "catch_clause": self._catch,
            "variable_declaration": self._variable_declaration,
            "lexical_declaration": self._variable_declaration,
            "export_statement": self._export,
            "class_declaration": self._class,
            "abstract_class_declaration": self._class,
            "class": self._class,
            "function_declaration": self._function,
            "generator_function_declaration": self._function,
            "function_expression": self._function,
            "function": self._function,
            "generator_function": self._function,
            "arrow_function": self._arrow_function,
            "string": self._string,
            "number": self._number,
            "true": self._constant,
            "false": self._constant,
            "null": self._constant,
            "this": self._this,
            "template_string": self._template,
            "object": self._object,
            "object_pattern": self._object_pattern,
            "assignment_pattern": self._assignment_pattern,
            "rest_pattern": self._rest,
            "spread_element": self._spread,
            "array": self._array,
            "member_expression": self._member,
            "subscript_expression": self._subscript,
            "call_expression": self._call,
            "new_expression": self._new,
            "assignment_expression": self._assignment,
            "augmented_assignment_expression": self._assignment,
            "ternary_expression": self._conditional,
            "binary_expression": self._binary,
            "unary_expression": self._unary,
            "parenthesized_expression": self._parenthesized,
            "yield_expression": self._yield,
            "await_expression": self._await,
            "jsx_element": self._jsx,
            "jsx_self_closing_element": self._jsx,
            "jsx_fragment": self._jsx,
            "as_expression": self._as,
            "satisfies_expression": self._as,
            "non_null_expression": self._non_null,
            "interface_declaration": self._interface,
            "type_alias_declaration": self._type_alias,
            "object_type": self._type_literal,
            "property_signature": self._property_signature,
            "method_signature": self._property_signature,
            "type_annotation": self._type_annotation,
            "generic_type": self._generic_type,
            "nested_type_identifier": self._qualified_name,
            "type_arguments": self._type_arguments,
        }

    # -- helpers ------------------------------------------------------------

    def _text(self, ts: TSNode) -> str:
        return self.source[ts.start_byte : ts.end_byte].decode("utf-8", errors="replace")

    @staticmethod
    def _named(ts: TSNode) -> list[TSNode]:
        return [child for child in ts.named_children if child.type != "comment"]

    @staticmethod
    def _has_token(ts: TSNode, token: str) -> bool:
        return any(not child.is_named and child.type == token for child in ts.children)

    def _make(self, node_type: str, ts: TSNode, **fields: Any) -> Node:
        return Node(
            node_type,
            start=ts.start_byte,
            end=ts.end_byte,
            loc=SourceLocation(
                start=Position(row=ts.start_point[0], column=ts.start_point[1]),
                end=Position(row=ts.end_point[0], column=ts.end_point[1]),
            ),
            **fields,
        )

    def convert(self, ts: TSNode | None) -> Node | None:
        if ts is None:
            return None
        if ts.type in _IDENTIFIER_KINDS:
            return self._make(NodeType.IDENTIFIER, ts, name=self._text(ts))
        converter = self._converters.get(ts.type)
        if converter is not None:
            return converter(ts)
        return self._make(ts.type, ts, children=self._convert_all(self._named(ts)))

    def _convert_all(self, nodes: list[TSNode]) -> list[Node]:
        return [node for node in (self.convert(ts) for ts in nodes) if node is not None]

    def _field(self, ts: TSNode, name: str) -> Node | None:
        return self.convert(ts.child_by_field_name(name))

    def _type(self, ts: TSNode | None) -> Node | None:
        # a bare type name in type position is a reference to that type
        if ts is not None and ts.type in ("type_identifier", "nested_type_identifier"):
            return self._make(NodeType.TS_TYPE_REFERENCE, ts, typeName=self.convert(ts))
        return self.convert(ts)

    def _key(self, ts: TSNode | None) -> tuple[Node | None, bool]:
        if ts is not None and ts.type == "computed_property_name":
            named = self._named(ts)
            return (self.convert(named[0]) if named else None), True
        return self.convert(ts), False

    # -- statements ---------------------------------------------------------

    def _program(self, ts: TSNode) -> Node:
        return self._make(NodeType.PROGRAM, ts, body=self._convert_all(self._named(ts)), sourceType="module")

    def _expression_statement(self, ts: TSNode) -> Node:
        named = self._named(ts)
        return self._make(NodeType.EXPRESSION_STATEMENT, ts, expression=self.convert(named[0]) if named else None)

    def _block(self, ts: TSNode) -> Node:
        return self._make(NodeType.BLOCK_STATEMENT, ts, body=self._convert_all(self._named(ts)))

    def _return(self, ts: TSNode) -> Node:
        named = self._named(ts)
        return self._make(NodeType.RETURN_STATEMENT, ts, argument=self.convert(named[0]) if named else None)

    def _if(self, ts: TSNode) -> Node:
        alternate = None
        else_clause = ts.child_by_field_name("alternative")
        if else_clause is not None:
            branch = self._named(else_clause) if else_clause.type == "else_clause" else [else_clause]
            alternate = self.convert(branch[0]) if branch else None
        return self._make(
            NodeType.IF_STATEMENT,
            ts,
            test=self._field(ts, "condition"),
            consequent=self._field(ts, "consequence"),
            alternate=alternate,
        )

    def _while(self, ts: TSNode) -> Node:
        return self._make(NodeType.WHILE_STATEMENT, ts, test=self._field(ts, "condition"), body=self._field(ts, "body"))

    def _do_while(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.DO_WHILE_STATEMENT, ts, body=self._field(ts, "body"), test=self._field(ts, "condition")
        )

    def _for(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.FOR_STATEMENT,
            ts,
            init=self._field(ts, "initializer"),
            test=self._field(ts, "condition"),
            update=self._field(ts, "increment"),
            body=self._field(ts, "body"),
        )

    def _for_in(self, ts: TSNode) -> Node:
        left_ts = ts.child_by_field_name("left")
        left = self.convert(left_ts)
        kind = next(
            (child.type for child in ts.children if not child.is_named and child.type in ("var", "let", "const")),
            None,
        )
        if kind is not None and left_ts is not None:
            declarator = self._make(NodeType.VARIABLE_DECLARATOR, left_ts, id=left, init=None)
            left = self._make(NodeType.VARIABLE_DECLARATION, left_ts, kind=kind, declarations=[declarator])
        node_type = NodeType.FOR_OF_STATEMENT if self._has_token(ts, "of") else NodeType.FOR_IN_STATEMENT
        return self._make(node_type, ts, left=left, right=self._field(ts, "right"), body=self._field(ts, "body"))

    def _switch(self, ts: TSNode) -> Node:
        cases = []
        body = ts.child_by_field_name("body")
        for case in self._named(body) if body is not None else []:
            if case.type not in ("switch_case", "switch_default"):
                continue
            consequent = [child for child in case.children_by_field_name("body") if child.type != "comment"]
            cases.append(
                self._make(
                    NodeType.SWITCH_CASE,
                    case,
                    test=self._field(case, "value"),
                    consequent=self._convert_all(consequent),
                )
            )
        return self._make(NodeType.SWITCH_STATEMENT, ts, discriminant=self._field(ts, "value"), cases=cases)

    def _catch(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.CATCH_CLAUSE, ts, param=self._field(ts, "parameter"), body=self._field(ts, "body")
        )

    def _variable_declaration(self, ts: TSNode) -> Node:
        kind = ts.children[0].type if ts.children else "var"
        declarations = [
            self._make(
                NodeType.VARIABLE_DECLARATOR,
                declarator,
                id=self._field(declarator, "name"),
                init=self._field(declarator, "value"),
            )
            for declarator in self._named(ts)
            if declarator.type == "variable_declarator"
        ]
        return self._make(NodeType.VARIABLE_DECLARATION, ts, kind=kind, declarations=declarations)

    def _export(self, ts: TSNode) -> Node:
        declaration = self._field(ts, "declaration")
        if self._has_token(ts, "default"):
            if declaration is None:
                declaration = self._field(ts, "value")
            return self._make(NodeType.EXPORT_DEFAULT_DECLARATION, ts, declaration=declaration)
        if declaration is None:
            return self._make(
                NodeType.EXPORT_NAMED_DECLARATION, ts, declaration=None, children=self._convert_all(self._named(ts))
            )
        return self._make(NodeType.EXPORT_NAMED_DECLARATION, ts, declaration=declaration)

    # -- classes and functions ----------------------------------------------

    def _class(self, ts: TSNode) -> Node:
        super_class = None
        super_type_parameters = None
        heritage = next((child for child in self._named(ts) if child.type == "class_heritage"), None)
        if heritage is not None:
            extends = next((child for child in self._named(heritage) if child.type == "extends_clause"), None)
            if extends is not None:
                value = extends.child_by_field_name("value")
                type_arguments = extends.child_by_field_name("type_arguments")
                if value is not None and value.type == "instantiation_expression":
                    # `extends Base<Props>` read as a single generic instantiation
                    type_arguments = next((c for c in value.named_children if c.type == "type_arguments"), None)
                    value = self._named(value)[0]
                super_class = self.convert(value)
                super_type_parameters = self.convert(type_arguments)
            elif heritage.named_children and heritage.named_children[0].type != "implements_clause":
                super_class = self.convert(heritage.named_children[0])

        body_ts = ts.child_by_field_name("body")
        members = [self._class_member(member) for member in self._named(body_ts)] if body_ts is not None else []
        body = self._make(NodeType.CLASS_BODY, body_ts or ts, body=[member for member in members if member])

        node_type = NodeType.CLASS_EXPRESSION if ts.type == "class" else NodeType.CLASS_DECLARATION
        return self._make(
            node_type,
            ts,
            id=self._field(ts, "name"),
            superClass=super_class,
            superTypeParameters=super_type_parameters,
            body=body,
        )

    def _class_member(self, ts: TSNode) -> Node | None:
        if ts.type == "method_definition":
            key, computed = self._key(ts.child_by_field_name("name"))
            kind = "method"
            if self._has_token(ts, "get"):
                kind = "get"
            elif self._has_token(ts, "set"):
                kind = "set"
            elif key is not None and key.name == "constructor":
                kind = "constructor"
            return self._make(
                NodeType.METHOD_DEFINITION,
                ts,
                key=key,
                value=self._function_value(ts),
                kind=kind,
                computed=computed,
                static=self._has_token(ts, "static"),
            )
        if ts.type in ("public_field_definition", "field_definition"):
            name_ts = ts.child_by_field_name("name") or ts.child_by_field_name("property")
            key, computed = self._key(name_ts)
            return self._make(
                NodeType.CLASS_PROPERTY,
                ts,
                key=key,
                value=self._field(ts, "value"),
                typeAnnotation=self._field(ts, "type"),
                computed=computed,
                static=self._has_token(ts, "static"),
            )
        return self.convert(ts)

    def _params(self, ts: TSNode | None) -> list[Node]:
        if ts is None:
            return []
        if ts.type != "formal_parameters":
            param = self.convert(ts)
            return [param] if param is not None else []
        return [param for param in (self._param(child) for child in self._named(ts)) if param is not None]

    def _param(self, ts: TSNode) -> Node | None:
        if ts.type not in ("required_parameter", "optional_parameter"):
            return self.convert(ts)
        pattern = self._field(ts, "pattern")
        if pattern is None:
            return None
        annotation = self._field(ts, "type")
        if annotation is not None:
            pattern.fields["typeAnnotation"] = annotation
        if ts.type == "optional_parameter":
            pattern.fields["optional"] = True
        default = self._field(ts, "value")
        if default is not None:
            return self._make(NodeType.ASSIGNMENT_PATTERN, ts, left=pattern, right=default)
        return pattern

    def _function_value(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.FUNCTION_EXPRESSION,
            ts,
            id=None,
            params=self._params(ts.child_by_field_name("parameters")),
            body=self._field(ts, "body"),
            generator=self._has_token(ts, "*"),
            async_=self._has_token(ts, "async"),
        )

    def _function(self, ts: TSNode) -> Node:
        declaration = ts.type in ("function_declaration", "generator_function_declaration")
        return self._make(
            NodeType.FUNCTION_DECLARATION if declaration else NodeType.FUNCTION_EXPRESSION,
            ts,
            id=self._field(ts, "name"),
            params=self._params(ts.child_by_field_name("parameters")),
            body=self._field(ts, "body"),
            generator=ts.type.startswith("generator_"),
            async_=self._has_token(ts, "async"),
        )

    def _arrow_function(self, ts: TSNode) -> Node:
        single = ts.child_by_field_name("parameter")
        params = self._params(single if single is not None else ts.child_by_field_name("parameters"))
        body = self._field(ts, "body")
        return self._make(
            NodeType.ARROW_FUNCTION_EXPRESSION,
            ts,
            id=None,
            params=params,
            body=body,
            expression=body is not None and body.type != NodeType.BLOCK_STATEMENT,
            async_=self._has_token(ts, "async"),
        )

    # -- expressions --------------------------------------------------------

    def _string(self, ts: TSNode) -> Node:
        raw = self._text(ts)
        return self._make(NodeType.LITERAL, ts, value=decode_string_literal(raw), raw=raw)

    def _number(self, ts: TSNode) -> Node:
        raw = self._text(ts)
        digits = raw.replace("_", "")
        value: int | float | str
        try:
            value = int(digits, 0)
        except ValueError:
            try:
                value = float(digits)
            except ValueError:
                value = raw
        return self._make(NodeType.LITERAL, ts, value=value, raw=raw)

    def _constant(self, ts: TSNode) -> Node:
        values = {"true": True, "false": False, "null": None}
        return self._make(NodeType.LITERAL, ts, value=values[ts.type], raw=ts.type)

    def _this(self, ts: TSNode) -> Node:
        return self._make("ThisExpression", ts)

    def _template(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.TEMPLATE_LITERAL, ts, raw=self._text(ts), children=self._convert_all(self._named(ts))
        )

    def _object(self, ts: TSNode) -> Node:
        properties = []
        for child in self._named(ts):
            if child.type == "pair":
                key, computed = self._key(child.child_by_field_name("key"))
                properties.append(
                    self._make(
                        NodeType.PROPERTY,
                        child,
                        key=key,
                        value=self._field(child, "value"),
                        computed=computed,
                        shorthand=False,
                        method=False,
                        kind="init",
                    )
                )
            elif child.type == "shorthand_property_identifier":
                properties.append(
                    self._make(
                        NodeType.PROPERTY,
                        child,
                        key=self.convert(child),
                        value=self.convert(child),
                        computed=False,
                        shorthand=True,
                        method=False,
                        kind="init",
                    )
                )
            elif child.type == "method_definition":
                key, computed = self._key(child.child_by_field_name("name"))
                properties.append(
                    self._make(
                        NodeType.PROPERTY,
                        child,
                        key=key,
                        value=self._function_value(child),
                        computed=computed,
                        shorthand=False,
                        method=True,
                        kind="init",
                    )
                )
            else:
                converted = self.convert(child)
                if converted is not None:
                    properties.append(converted)
        return self._make(NodeType.OBJECT_EXPRESSION, ts, properties=properties)

    def _object_pattern(self, ts: TSNode) -> Node:
        return self._make(NodeType.OBJECT_PATTERN, ts, properties=self._convert_all(self._named(ts)))

    def _assignment_pattern(self, ts: TSNode) -> Node:
        return self._make(NodeType.ASSIGNMENT_PATTERN, ts, left=self._field(ts, "left"), right=self._field(ts, "right"))

    def _rest(self, ts: TSNode) -> Node:
        named = self._named(ts)
        return self._make(NodeType.REST_ELEMENT, ts, argument=self.convert(named[0]) if named else None)

    def _spread(self, ts: TSNode) -> Node:
        named = self._named(ts)
        return self._make(NodeType.SPREAD_ELEMENT, ts, argument=self.convert(named[0]) if named else None)

    def _array(self, ts: TSNode) -> Node:
        return self._make("ArrayExpression", ts, elements=self._convert_all(self._named(ts)))

    def _member(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.MEMBER_EXPRESSION,
            ts,
            object=self._field(ts, "object"),
            property=self._field(ts, "property"),
            computed=False,
            optional=self._has_token(ts, "?."),
        )

    def _subscript(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.MEMBER_EXPRESSION,
            ts,
            object=self._field(ts, "object"),
            property=self._field(ts, "index"),
            computed=True,
            optional=self._has_token(ts, "?."),
        )

    def _arguments(self, ts: TSNode | None) -> list[Node]:
        return self._convert_all(self._named(ts)) if ts is not None else []

    def _call(self, ts: TSNode) -> Node:
        callee = self._field(ts, "function")
        arguments = ts.child_by_field_name("arguments")
        if arguments is not None and arguments.type == "template_string":
            return self._make("TaggedTemplateExpression", ts, tag=callee, quasi=self.convert(arguments))
        return self._make(
            NodeType.CALL_EXPRESSION,
            ts,
            callee=callee,
            arguments=self._arguments(arguments),
            typeParameters=self._field(ts, "type_arguments"),
        )

    def _new(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.NEW_EXPRESSION,
            ts,
            callee=self._field(ts, "constructor"),
            arguments=self._arguments(ts.child_by_field_name("arguments")),
        )

    def _assignment(self, ts: TSNode) -> Node:
        operator_ts = ts.child_by_field_name("operator")
        return self._make(
            NodeType.ASSIGNMENT_EXPRESSION,
            ts,
            operator=operator_ts.type if operator_ts is not None else "=",
            left=self._field(ts, "left"),
            right=self._field(ts, "right"),
        )

    def _conditional(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.CONDITIONAL_EXPRESSION,
            ts,
            test=self._field(ts, "condition"),
            consequent=self._field(ts, "consequence"),
            alternate=self._field(ts, "alternative"),
        )

    def _binary(self, ts: TSNode) -> Node:
        operator_ts = ts.child_by_field_name("operator")
        operator = operator_ts.type if operator_ts is not None else ""
        node_type = NodeType.LOGICAL_EXPRESSION if operator in _LOGICAL_OPERATORS else NodeType.BINARY_EXPRESSION
        return self._make(
            node_type, ts, operator=operator, left=self._field(ts, "left"), right=self._field(ts, "right")
        )

    def _unary(self, ts: TSNode) -> Node:
        operator_ts = ts.child_by_field_name("operator")
        return self._make(
            "UnaryExpression",
            ts,
            operator=operator_ts.type if operator_ts is not None else "",
            argument=self._field(ts, "argument"),
        )

    def _parenthesized(self, ts: TSNode) -> Node:
        named = self._named(ts)
        if len(named) == 1:
            inner = self.convert(named[0])
            if inner is not None:
                return inner
        return self._make("SequenceExpression", ts, expressions=self._convert_all(named))

    def _yield(self, ts: TSNode) -> Node:
        named = self._named(ts)
        return self._make(
            NodeType.YIELD_EXPRESSION,
            ts,
            argument=self.convert(named[0]) if named else None,
            delegate=self._has_token(ts, "*"),
        )

    def _await(self, ts: TSNode) -> Node:
        named = self._named(ts)
        return self._make("AwaitExpression", ts, argument=self.convert(named[0]) if named else None)

    def _jsx(self, ts: TSNode) -> Node:
        node_type = NodeType.JSX_ELEMENT
        if ts.type == "jsx_fragment":
            node_type = NodeType.JSX_FRAGMENT
        elif ts.type == "jsx_element":
            opening = ts.child_by_field_name("open_tag")
            if opening is not None and opening.child_by_field_name("name") is None:
                node_type = NodeType.JSX_FRAGMENT
        return self._make(node_type, ts, children=self._convert_all(self._named(ts)))

    def _as(self, ts: TSNode) -> Node:
        named = self._named(ts)
        node_type = NodeType.TS_AS_EXPRESSION if ts.type == "as_expression" else NodeType.TS_SATISFIES_EXPRESSION
        return self._make(
            node_type,
            ts,
            expression=self.convert(named[0]) if named else None,
            typeAnnotation=self._type(named[1]) if len(named) > 1 else None,
        )

    def _non_null(self, ts: TSNode) -> Node:
        named = self._named(ts)
        return self._make(NodeType.TS_NON_NULL_EXPRESSION, ts, expression=self.convert(named[0]) if named else None)

    # -- types --------------------------------------------------------------

    def _members(self, ts: TSNode | None) -> list[Node]:
        return self._convert_all(self._named(ts)) if ts is not None else []

    def _interface(self, ts: TSNode) -> Node:
        body_ts = ts.child_by_field_name("body")
        body = self._make(NodeType.TS_INTERFACE_BODY, body_ts or ts, body=self._members(body_ts))
        return self._make(NodeType.TS_INTERFACE_DECLARATION, ts, id=self._field(ts, "name"), body=body)

    def _type_alias(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.TS_TYPE_ALIAS_DECLARATION,
            ts,
            id=self._field(ts, "name"),
            typeAnnotation=self._type(ts.child_by_field_name("value")),
        )

    def _type_literal(self, ts: TSNode) -> Node:
        return self._make(NodeType.TS_TYPE_LITERAL, ts, members=self._members(ts))

    def _property_signature(self, ts: TSNode) -> Node:
        key, computed = self._key(ts.child_by_field_name("name"))
        node_type = NodeType.TS_PROPERTY_SIGNATURE if ts.type == "property_signature" else NodeType.TS_METHOD_SIGNATURE
        annotation_field = "type" if ts.type == "property_signature" else "return_type"
        return self._make(
            node_type,
            ts,
            key=key,
            computed=computed,
            optional=self._has_token(ts, "?"),
            typeAnnotation=self._field(ts, annotation_field),
        )

    def _type_annotation(self, ts: TSNode) -> Node:
        named = self._named(ts)
        return self._make(NodeType.TS_TYPE_ANNOTATION, ts, typeAnnotation=self._type(named[0]) if named else None)

    def _generic_type(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.TS_TYPE_REFERENCE,
            ts,
            typeName=self._field(ts, "name"),
            typeParameters=self._field(ts, "type_arguments"),
        )

    def _qualified_name(self, ts: TSNode) -> Node:
        return self._make(
            NodeType.TS_QUALIFIED_NAME, ts, left=self._field(ts, "module"), right=self._field(ts, "name")
        )

    def _type_arguments(self, ts: TSNode) -> Node:
        params = [param for param in (self._type(child) for child in self._named(ts)) if param is not None]
        return self._make(NodeType.TS_TYPE_PARAMETER_INSTANTIATION, ts, params=params)


def parse_tree(source: bytes, language: str) -> Tree:
    resolved = normalize_language(language)
    parser = get_parser(cast(SupportedLanguage, resolved))
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning("Source contains syntax errors; analysing the recovered tree (%s)", resolved)
    return tree


def build_program(source: bytes, tree: Tree) -> Node:
    """Convert a parsed tree into the linked ESTree ``Program``."""
    # the root is always a `program` node, which always converts
    program = cast(Node, EstreeBuilder(source).convert(tree.root_node))
    return link_parents(program)


def parse_to_estree(source: bytes, language: str) -> Node:
    """Parse ``source`` with tree-sitter and return the linked ESTree ``Program``."""
    return build_program(source, parse_tree(source, language))
