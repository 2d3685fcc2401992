import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from component_lint.config import LintSettings, SortPolicy, load_policy, load_settings
from component_lint.core.ports.reporting import CollectingSink
from component_lint.core.prop_types import SortPropTypes
from component_lint.models import Diagnostic
from component_lint.parsing import ComponentDetector, ParsedSource, ScopeAnalyzer

logger = logging.getLogger(__name__)


def lint_parsed(
    source: ParsedSource,
    options: Mapping[str, Any] | SortPolicy | None = None,
    settings: Mapping[str, Any] | LintSettings | None = None,
) -> list[Diagnostic]:
    """Run the prop-type ordering rule over an already parsed source."""
    policy = load_policy(options)
    lint_settings = load_settings(settings)
    scopes = ScopeAnalyzer(source.ast)
    components = ComponentDetector(source.ast, scopes)
    sink = CollectingSink()
    SortPropTypes(source, components, lint_settings, sink, policy).run()
    return sink.diagnostics


def lint_source(
    code: str | bytes,
    language: str = "tsx",
    options: Mapping[str, Any] | SortPolicy | None = None,
    settings: Mapping[str, Any] | LintSettings | None = None,
) -> list[Diagnostic]:
    return lint_parsed(ParsedSource.from_code(code, language), options, settings)


def lint_file(
    path: str | Path,
    language: str | None = None,
    options: Mapping[str, Any] | SortPolicy | None = None,
    settings: Mapping[str, Any] | LintSettings | None = None,
) -> list[Diagnostic]:
    source = ParsedSource.from_file(path, language)
    diagnostics = lint_parsed(source, options, settings)
    logger.info("Linted %s: %d diagnostic(s)", path, len(diagnostics))
    return diagnostics
