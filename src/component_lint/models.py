from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from component_lint.core.nodes import Node


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    column: int


class SourceLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class OrderViolation(StrEnum):
    REQUIRED_FIRST = "required-first"
    CALLBACKS_LAST = "callbacks-last"
    ALPHABETICAL = "alphabetical"


@dataclass(frozen=True)
class Diagnostic:
    """A single rule violation, handed to a DiagnosticSink as soon as it is produced."""

    node: "Node"
    message: str
    category: OrderViolation
    rule_id: str = "sort-prop-types"

    @property
    def line(self) -> int:
        """1-based line of the offending node, 0 when the node has no location."""
        loc = self.node.loc
        return loc.start.row + 1 if loc else 0

    @property
    def column(self) -> int:
        loc = self.node.loc
        return loc.start.column if loc else 0
