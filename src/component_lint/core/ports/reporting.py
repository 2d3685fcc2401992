from typing import Protocol

from component_lint.models import Diagnostic


class DiagnosticSink(Protocol):
    def report(self, diagnostic: Diagnostic) -> None: ...


class CollectingSink:
    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
