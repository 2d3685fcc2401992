from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from component_lint.models import SourceLocation

if TYPE_CHECKING:
    from component_lint.core.nodes import Node


@dataclass(frozen=True)
class Token:
    """A lexical token; ``start``/``end`` are byte offsets into the source."""

    value: str
    start: int
    end: int
    type: str = "Punctuator"
    loc: SourceLocation | None = None


class TokenSource(Protocol):
    def get_first_tokens(self, node: "Node", count: int) -> list[Token]: ...

    def get_token_before(self, node: "Node | Token") -> Token | None: ...


class SourceCode(TokenSource, Protocol):
    @property
    def ast(self) -> "Node": ...

    def get_text(self, node: "Node | None") -> str: ...

    def find_variable_by_name(self, name: str, node: "Node | None" = None) -> "Node | None": ...
