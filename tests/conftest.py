"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from component_lint.core.nodes import Node, NodeType, link_parents
from component_lint.parsing import ParsedSource, ScopeAnalyzer

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Parsing fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tsx_parser() -> Parser:
    """Return a tree-sitter parser for TSX."""
    return get_parser("tsx")


@pytest.fixture
def parse() -> Callable[..., ParsedSource]:
    """Parse a snippet into a ParsedSource (TSX unless another language is given)."""

    def _parse(code: str, language: str = "tsx") -> ParsedSource:
        return ParsedSource.from_code(code, language)

    return _parse


@pytest.fixture
def scopes_of() -> Callable[[ParsedSource], ScopeAnalyzer]:
    def _scopes(source: ParsedSource) -> ScopeAnalyzer:
        return ScopeAnalyzer(source.ast)

    return _scopes


# ---------------------------------------------------------------------------
# Hand-built ESTree nodes
# ---------------------------------------------------------------------------


def ident(name: str) -> Node:
    return Node(NodeType.IDENTIFIER, name=name)


def member(obj: Node | str, prop: str) -> Node:
    target = ident(obj) if isinstance(obj, str) else obj
    return Node(NodeType.MEMBER_EXPRESSION, object=target, property=ident(prop), computed=False)


def prop_type(name: str, *, required: bool = False) -> Node:
    value = member("PropTypes", "string")
    if required:
        value = member(value, "isRequired")
    return link_parents(Node(NodeType.PROPERTY, key=ident(name), value=value, computed=False))


def spread(name: str = "rest") -> Node:
    return link_parents(Node(NodeType.SPREAD_ELEMENT, argument=ident(name)))


@pytest.fixture
def make_prop() -> Callable[..., Node]:
    return prop_type


@pytest.fixture
def make_spread() -> Callable[..., Node]:
    return spread
