from component_lint.parsing.components import ComponentDetector
from component_lint.parsing.estree import EstreeBuilder, parse_to_estree
from component_lint.parsing.scopes import ScopeAnalyzer
from component_lint.parsing.source import ParsedSource

__all__ = [
    "ComponentDetector",
    "EstreeBuilder",
    "ParsedSource",
    "ScopeAnalyzer",
    "parse_to_estree",
]
