"""Ordering checks for prop-type declaration sequences.

The sequence is reduced left to right while carrying the last accepted
declaration. For every adjacent pair the layers run in a fixed order
(required first, callbacks last, alphabetical) and the first layer that
decides the pair ends its evaluation. The layers keep different
baselines: a required prop after an optional one is reported and
adopted, a callback followed by a regular prop is reported on the
callback and the callback stays the baseline, and an alphabetical
violation keeps the previous declaration.
"""

import logging
import re
from collections.abc import Sequence

from component_lint.config import SortPolicy
from component_lint.core.nodes import Node, NodeType
from component_lint.core.ports.source import SourceCode
from component_lint.models import Diagnostic, OrderViolation

logger = logging.getLogger(__name__)

REQUIRED_FIRST_MESSAGE = "Required prop types must be listed before all other prop types"
CALLBACKS_LAST_MESSAGE = "Callback prop types must be listed after all other prop types"
ALPHABETICAL_MESSAGE = "Prop types declarations should be sorted alphabetically"

_CALLBACK_NAME = re.compile(r"^on[A-Z]")
_SPREAD_TYPES = frozenset({NodeType.SPREAD_ELEMENT, NodeType.EXPERIMENTAL_SPREAD_PROPERTY})


def declaration_key(node: Node, source: SourceCode | None = None) -> str:
    """Comparison key of a declaration; an empty string when nothing can be extracted."""
    key = node.key
    if key is not None and key.value:
        return str(key.value)
    target = key or node.argument
    if target is None:
        return ""
    if source is not None:
        return source.get_text(target)
    if target.type == NodeType.IDENTIFIER:
        return target.name or ""
    return "" if target.value is None else str(target.value)


def is_callback_name(name: str) -> bool:
    return _CALLBACK_NAME.match(name) is not None


def is_required_declaration(node: Node) -> bool:
    """``foo: PropTypes.string.isRequired``"""
    if node.type != NodeType.PROPERTY or node.value is None:
        return False
    accessed = node.value.property
    return accessed is not None and accessed.name == "isRequired"


class _OrderCheck:
    def __init__(self, policy: SortPolicy, source: SourceCode | None) -> None:
        self.policy = policy
        self.source = source
        self.diagnostics: list[Diagnostic] = []

    def _report(self, node: Node, message: str, category: OrderViolation) -> None:
        self.diagnostics.append(Diagnostic(node=node, message=message, category=category))

    def compare(self, prev: Node, curr: Node) -> Node:
        """Check one adjacent pair and return the baseline for the next one."""
        prev_name = declaration_key(prev, self.source)
        curr_name = declaration_key(curr, self.source)
        prev_required = is_required_declaration(prev)
        curr_required = is_required_declaration(curr)
        prev_callback = is_callback_name(prev_name)
        curr_callback = is_callback_name(curr_name)

        if self.policy.ignore_case:
            prev_name = prev_name.lower()
            curr_name = curr_name.lower()

        if self.policy.required_first:
            if prev_required and not curr_required:
                return curr
            if not prev_required and curr_required:
                self._report(curr, REQUIRED_FIRST_MESSAGE, OrderViolation.REQUIRED_FIRST)
                return curr

        if self.policy.callbacks_last:
            if not prev_callback and curr_callback:
                return curr
            if prev_callback and not curr_callback:
                self._report(prev, CALLBACKS_LAST_MESSAGE, OrderViolation.CALLBACKS_LAST)
                return prev

        if not self.policy.no_sort_alphabetically and curr_name < prev_name:
            self._report(curr, ALPHABETICAL_MESSAGE, OrderViolation.ALPHABETICAL)
            return prev

        return curr


def check_order(
    declarations: Sequence[Node] | None,
    policy: SortPolicy,
    source: SourceCode | None = None,
) -> list[Diagnostic]:
    """Validate the order of ``declarations`` against ``policy``.

    A spread breaks the chain: the declaration right after it becomes the
    new baseline without being compared to anything before the spread.
    """
    if not declarations:
        return []

    check = _OrderCheck(policy, source)
    prev: Node | None = declarations[0]
    for index, curr in enumerate(declarations):
        if curr.type in _SPREAD_TYPES:
            prev = declarations[index + 1] if index + 1 < len(declarations) else None
            continue
        if prev is not None:
            prev = check.compare(prev, curr)

    logger.debug("Checked %d declarations, %d violation(s)", len(declarations), len(check.diagnostics))
    return check.diagnostics
