from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, Protocol

if TYPE_CHECKING:
    from component_lint.core.nodes import Node

ScopeKind = Literal["global", "function", "block", "switch", "for", "catch", "class"]


@dataclass(frozen=True, eq=False)
class Scope:
    kind: ScopeKind
    block: "Node"


class ScopeSource(Protocol):
    def scopes_for(self, node: "Node") -> Sequence[Scope]: ...
