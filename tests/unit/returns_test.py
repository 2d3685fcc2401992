"""Unit tests for return-surface resolution and the trailing-return locator."""

from collections.abc import Callable

from component_lint.core.nodes import Node, NodeType, walk
from component_lint.core.returns import find_trailing_return, resolve_return_surface
from component_lint.parsing import ParsedSource, ScopeAnalyzer


def _function(source: ParsedSource, name: str) -> Node:
    for node in walk(source.ast):
        if node.type == NodeType.FUNCTION_DECLARATION and node.id is not None and node.id.name == name:
            return node
    raise AssertionError(f"function {name} not found")


def _first(source: ParsedSource, node_type: str) -> Node:
    return next(node for node in walk(source.ast) if node.type == node_type)


def _texts(source: ParsedSource, nodes: list[Node]) -> list[str]:
    return [source.get_text(node) for node in nodes]


class TestResolveReturnSurface:
    """Tests for resolve_return_surface."""

    def test_unbraced_if_else_yields_both_returns_in_order(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(x) { if (x) return 1; else return 2; }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert [node.type for node in surface] == [NodeType.RETURN_STATEMENT, NodeType.RETURN_STATEMENT]
        assert [node.argument.value for node in surface] == [1, 2]

    def test_else_if_chain(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(a, b) { if (a) return 1; else if (b) return 2; else return 3; }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert [node.argument.value for node in surface] == [1, 2, 3]

    def test_nested_function_returns_do_not_leak(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f() { return function g() { return 1; }; }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert len(surface) == 1
        assert surface[0].argument.type == NodeType.FUNCTION_EXPRESSION

    def test_callback_returns_inside_jsx_are_ignored(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse(
            """
function List({ items }) {
  return <ul>{items.map((item) => { return <li>{item}</li>; })}</ul>;
}
"""
        )
        surface = resolve_return_surface(_function(source, "List"), scopes_of(source))
        assert surface is not None
        assert len(surface) == 1
        assert surface[0].argument.type == NodeType.JSX_ELEMENT
        assert source.get_text(surface[0].argument).startswith("<ul>")

    def test_braced_branches_are_found_through_block_scopes(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(x) { if (x) { return <A />; } return <B />; }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert sorted(source.get_text(node.argument) for node in surface) == ["<A />", "<B />"]

    def test_switch_cases_are_judged_independently(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse(
            """
function f(x) {
  switch (x) {
    case 'b':
    case 'a':
      return 1;
    default:
      return 2;
  }
}
"""
        )
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert [node.argument.value for node in surface] == [1, 2]

    def test_switch_case_with_empty_consequent_contributes_nothing(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(x) { switch (x) { case 1: return <A />; case 2: } }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert _texts(source, [node.argument for node in surface]) == ["<A />"]

    def test_unbraced_while_body(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(x) { while (x) return 1; }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert [node.argument.value for node in surface] == [1]

    def test_let_loop_return_is_reached_twice(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        # once through the function body, once through the loop's own scope
        source = parse("function f(xs) { for (let x of xs) return x; }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert len(surface) == 2
        assert surface[0] is surface[1]
        assert surface[0] is _first(source, NodeType.RETURN_STATEMENT)

    def test_let_for_statement_return_is_reached_twice(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(n) { for (let i = 0; i < n; i++) return i; }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert _texts(source, surface) == ["return i;", "return i;"]

    def test_var_loops_are_reached_once(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        for code in (
            "function f(xs) { for (var x of xs) return x; }",
            "function f(o) { for (var k in o) return k; }",
            "function f(n) { for (var i = 0; i < n; i++) return i; }",
        ):
            source = parse(code)
            surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
            assert surface is not None
            assert [node.type for node in surface] == [NodeType.RETURN_STATEMENT]

    def test_unbraced_do_while_body(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(x) { do return 1; while (x); }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert [node.argument.value for node in surface] == [1]

    def test_braced_loop_body_is_found_through_its_block(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(o) { for (const k in o) { return k; } }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert _texts(source, surface) == ["return k;"]

    def test_concise_arrow_body_is_the_surface(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("const Hello = () => <div />;")
        arrow = _first(source, NodeType.ARROW_FUNCTION_EXPRESSION)
        surface = resolve_return_surface(arrow, scopes_of(source))
        assert surface == [arrow.body]
        assert arrow.body.type == NodeType.JSX_ELEMENT

    def test_parenthesised_return_argument_is_unwrapped(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f() {\n  return (\n    <div />\n  );\n}")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert surface[0].argument.type == NodeType.JSX_ELEMENT

    def test_expression_statements_reduce_to_their_expression(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f() { doThing(); }")
        surface = resolve_return_surface(_function(source, "f"), scopes_of(source))
        assert surface is not None
        assert [node.type for node in surface] == [NodeType.CALL_EXPRESSION]

    def test_generator_yield(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function* gen() { yield 1; }")
        surface = resolve_return_surface(_function(source, "gen"), scopes_of(source))
        assert surface is not None
        assert [node.type for node in surface] == [NodeType.YIELD_EXPRESSION]

    def test_class_method_is_looked_through(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("class Hello extends Component { render() { return <div />; } }")
        method = _first(source, NodeType.METHOD_DEFINITION)
        surface = resolve_return_surface(method, scopes_of(source))
        assert surface is not None
        assert len(surface) == 1
        assert surface[0].argument.type == NodeType.JSX_ELEMENT

    def test_no_candidates_returns_none(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f() { const a = 1; }")
        assert resolve_return_surface(_function(source, "f"), scopes_of(source)) is None

    def test_candidates_without_returns_give_empty_list(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f(x) { if (x) { } }")
        assert resolve_return_surface(_function(source, "f"), scopes_of(source)) == []

    def test_return_statement_resolves_to_itself(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("function f() { return 1; }")
        ret = _first(source, NodeType.RETURN_STATEMENT)
        assert resolve_return_surface(ret, scopes_of(source)) == [ret]

    def test_non_function_node_returns_none(
        self, parse: Callable[..., ParsedSource], scopes_of: Callable[[ParsedSource], ScopeAnalyzer]
    ) -> None:
        source = parse("const a = 1;")
        assert resolve_return_surface(source.ast, scopes_of(source)) is None


class TestFindTrailingReturn:
    """Tests for find_trailing_return."""

    def test_last_return_in_body(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("function f() { const a = 1; return a; doThing(); }")
        found = find_trailing_return(_function(source, "f"))
        assert found is not None
        assert source.get_text(found) == "return a;"

    def test_only_last_switch_case_is_inspected(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse(
            """
function f(x) {
  switch (x) {
    case 1:
      return 1;
    case 2:
      return 2;
    case 3:
      doThing();
  }
}
"""
        )
        assert find_trailing_return(_function(source, "f")) is None

    def test_return_in_last_switch_case(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("function f(x) { switch (x) { case 1: return 1; default: return 3; } }")
        found = find_trailing_return(_function(source, "f"))
        assert found is not None
        assert found.argument.value == 3

    def test_switch_does_not_fall_back_to_earlier_statements(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("function f(x) { return 0; switch (x) { case 1: doThing(); } }")
        assert find_trailing_return(_function(source, "f")) is None

    def test_switch_without_cases_is_skipped(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("function f(x) { return 0; switch (x) {} }")
        found = find_trailing_return(_function(source, "f"))
        assert found is not None
        assert found.argument.value == 0

    def test_method_definition_uses_its_function_value(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("class A { render() { return null; } }")
        found = find_trailing_return(_first(source, NodeType.METHOD_DEFINITION))
        assert found is not None
        assert found.type == NodeType.RETURN_STATEMENT

    def test_concise_body_has_no_statement_list(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("const f = () => 1;")
        assert find_trailing_return(_first(source, NodeType.ARROW_FUNCTION_EXPRESSION)) is None

    def test_function_without_return(self, parse: Callable[..., ParsedSource]) -> None:
        source = parse("function f() { doThing(); }")
        assert find_trailing_return(_function(source, "f")) is None
