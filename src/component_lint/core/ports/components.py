from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from component_lint.core.nodes import Node


@dataclass(frozen=True, eq=False)
class Component:
    node: "Node"
    name: str | None = None


class ComponentRegistry(Protocol):
    def get(self, node: "Node") -> Component | None: ...


class PropWrapperRecognizer(Protocol):
    def is_prop_wrapper_function(self, name: str | None) -> bool: ...
