from collections.abc import Iterator, Sequence
from pathlib import Path

from tree_sitter import Node as TSNode
from tree_sitter import Tree

from component_lint.core.ast import unwrap_ts_as_expression
from component_lint.core.languages import resolve_language
from component_lint.core.nodes import Node, NodeType
from component_lint.core.ports.source import Token
from component_lint.models import Position, SourceLocation
from component_lint.parsing.estree import build_program, parse_tree

# kinds read as one token even though tree-sitter gives them children
_ATOMIC_KINDS = frozenset({"string", "template_string", "regex", "jsx_text"})
_TOKEN_TYPES = {
    "string": "String",
    "template_string": "Template",
    "regex": "RegularExpression",
    "number": "Numeric",
    "jsx_text": "JSXText",
    "true": "Boolean",
    "false": "Boolean",
    "null": "Null",
    "identifier": "Identifier",
    "property_identifier": "Identifier",
    "shorthand_property_identifier": "Identifier",
    "shorthand_property_identifier_pattern": "Identifier",
    "type_identifier": "Identifier",
}


def _is_token(ts: TSNode) -> bool:
    return ts.child_count == 0 or ts.type in _ATOMIC_KINDS


def _is_lexeme(ts: TSNode) -> bool:
    # comments and zero-width (inserted) tokens are not part of the token stream
    return ts.type != "comment" and ts.end_byte > ts.start_byte


def _tokens_within(ts: TSNode, start: int, end: int) -> Iterator[TSNode]:
    if _is_token(ts):
        if _is_lexeme(ts) and start <= ts.start_byte and ts.end_byte <= end:
            yield ts
        return
    for child in ts.children:
        if child.end_byte > start and child.start_byte < end:
            yield from _tokens_within(child, start, end)


def _tokens_before(ts: TSNode, limit: int) -> Iterator[TSNode]:
    """Tokens ending at or before ``limit``, nearest first."""
    if _is_token(ts):
        if _is_lexeme(ts) and ts.end_byte <= limit:
            yield ts
        return
    for child in reversed(ts.children):
        if child.start_byte < limit:
            yield from _tokens_before(child, limit)


class ParsedSource:
    """Source text plus its ESTree program, answering the lookups rules need.

    Tokens come from the leaves of the tree-sitter tree the program was
    built from, so their offsets are real byte offsets.
    """

    def __init__(self, text: bytes, program: Node, language: str = "tsx", tree: Tree | None = None) -> None:
        self.text = text
        self.program = program
        self.language = language
        self._tree = tree

    @classmethod
    def from_code(cls, code: str | bytes, language: str = "tsx") -> "ParsedSource":
        text = code.encode("utf-8") if isinstance(code, str) else code
        tree = parse_tree(text, language)
        return cls(text, build_program(text, tree), language, tree)

    @classmethod
    def from_file(cls, path: str | Path, language: str | None = None) -> "ParsedSource":
        file_path = Path(path)
        resolved = resolve_language(language, file_path)
        try:
            text = file_path.read_bytes()
        except FileNotFoundError:
            raise FileNotFoundError(f"File not found: {path}") from None
        return cls.from_code(text, resolved)

    @property
    def ast(self) -> Node:
        return self.program

    @property
    def tree(self) -> Tree:
        if self._tree is None:
            self._tree = parse_tree(self.text, self.language)
        return self._tree

    def get_text(self, node: Node | None) -> str:
        if node is None:
            return self.text.decode("utf-8", errors="replace")
        return self.text[node.start : node.end].decode("utf-8", errors="replace")

    def _token(self, ts: TSNode) -> Token:
        if ts.is_named:
            token_type = _TOKEN_TYPES.get(ts.type, "Punctuator")
        else:
            token_type = "Keyword" if ts.type.isalpha() else "Punctuator"
        return Token(
            value=self.text[ts.start_byte : ts.end_byte].decode("utf-8", errors="replace"),
            start=ts.start_byte,
            end=ts.end_byte,
            type=token_type,
            loc=SourceLocation(
                start=Position(row=ts.start_point[0], column=ts.start_point[1]),
                end=Position(row=ts.end_point[0], column=ts.end_point[1]),
            ),
        )

    def get_first_tokens(self, node: Node, count: int) -> list[Token]:
        tokens: list[Token] = []
        for ts in _tokens_within(self.tree.root_node, node.start, node.end):
            if len(tokens) == count:
                break
            tokens.append(self._token(ts))
        return tokens

    def get_token_before(self, node: Node | Token) -> Token | None:
        ts = next(_tokens_before(self.tree.root_node, node.start), None)
        return self._token(ts) if ts is not None else None

    def _statement_lists(self, node: Node | None) -> Iterator[Sequence[Node]]:
        current = node
        while current is not None and current is not self.program:
            if current.type == NodeType.SWITCH_CASE:
                yield current.consequent or []
            elif isinstance(current.body, list):
                yield current.body
            current = current.parent
        yield self.program.body or []

    def find_variable_by_name(self, name: str, node: Node | None = None) -> Node | None:
        """Return what the nearest declaration of ``name`` binds, or ``None``.

        Variable declarators yield their initializer (without a TS ``as``
        wrapper); Flow type aliases yield their right-hand side.
        """
        for statements in self._statement_lists(node):
            for stmt in statements:
                if stmt.type in (NodeType.EXPORT_NAMED_DECLARATION, NodeType.EXPORT_DEFAULT_DECLARATION):
                    stmt = stmt.declaration
                    if stmt is None:
                        continue
                if stmt.type == NodeType.VARIABLE_DECLARATION:
                    for declarator in stmt.declarations or []:
                        target = declarator.id
                        if target is not None and target.type == NodeType.IDENTIFIER and target.name == name:
                            return unwrap_ts_as_expression(declarator.init)
                elif stmt.type == NodeType.TYPE_ALIAS and stmt.id is not None and stmt.id.name == name:
                    return stmt.right
        return None
