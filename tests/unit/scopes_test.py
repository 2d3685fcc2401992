"""Unit tests for scope enumeration."""

from collections.abc import Callable

from component_lint.core.nodes import Node, NodeType, walk
from component_lint.parsing import ParsedSource, ScopeAnalyzer
from component_lint.parsing.scopes import is_owned_by, scope_kind


def _function(source: ParsedSource, name: str) -> Node:
    return next(
        node
        for node in walk(source.ast)
        if node.type == NodeType.FUNCTION_DECLARATION and node.id is not None and node.id.name == name
    )


class TestScopeKind:
    """Tests for scope_kind."""

    def test_program_is_global(self, parse: Callable[..., ParsedSource]) -> None:
        assert scope_kind(parse("a();").ast) == "global"

    def test_function_body_shares_the_function_scope(self, parse: Callable[..., ParsedSource]) -> None:
        fn = _function(parse("function f() {}"), "f")
        assert scope_kind(fn) == "function"
        assert scope_kind(fn.body) is None

    def test_for_scope_only_for_block_scoped_declarations(self, parse: Callable[..., ParsedSource]) -> None:
        with_let, with_var, for_of = parse(
            "for (let i = 0; i < 1; i++) {} for (var j = 0; j < 1; j++) {} for (const x of xs) {}"
        ).ast.body
        assert scope_kind(with_let) == "for"
        assert scope_kind(with_var) is None
        assert scope_kind(for_of) == "for"

    def test_kinds_in_program_order(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("switch (x) { case 1: { } }\ntry { } catch (e) { }\nclass A { }")
        kinds = [scope.kind for scope in ScopeAnalyzer(source.ast).scopes]
        assert kinds == ["global", "switch", "block", "block", "catch", "block", "class"]


class TestScopesFor:
    """Tests for ScopeAnalyzer.scopes_for."""

    CODE = """
function outer(x) {
  if (x) {
    let a = 1;
  }
  for (let i = 0; i < 3; i++) {
    i;
  }
  function inner() {
    { }
  }
}
"""

    def test_owned_scopes_in_order(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse(self.CODE)
        scopes = ScopeAnalyzer(source.ast).scopes_for(_function(source, "outer"))
        assert [scope.kind for scope in scopes] == ["function", "block", "for", "block"]

    def test_nested_function_scopes_are_excluded(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse(self.CODE)
        inner = _function(source, "inner")
        outer_scopes = ScopeAnalyzer(source.ast).scopes_for(_function(source, "outer"))
        assert all(scope.block is not inner for scope in outer_scopes)
        assert all(not is_owned_by(scope.block, inner) for scope in outer_scopes)

    def test_nested_function_has_its_own_scopes(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse(self.CODE)
        scopes = ScopeAnalyzer(source.ast).scopes_for(_function(source, "inner"))
        assert [scope.kind for scope in scopes] == ["function", "block"]

    def test_node_without_scopes(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("a();")
        assert ScopeAnalyzer(source.ast).scopes_for(source.ast.body[0]) == []
