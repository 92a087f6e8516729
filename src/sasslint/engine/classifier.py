"""Child classification for the ordering rules."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from sasslint.tree.nodes import AtRule, Declaration, Rule

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sasslint.tree.nodes import ChildNode


class ChildKind(enum.Enum):
    """Semantic category of a rule block's child."""

    DECLARATION = "declaration"
    NESTED_RULE = "nested-rule"
    EXTEND = "extend"
    INCLUDE = "include"
    OTHER = "other"


_DIRECTIVE_KINDS: dict[str, ChildKind] = {
    "extend": ChildKind.EXTEND,
    "include": ChildKind.INCLUDE,
}


def classify_child(node: ChildNode) -> ChildKind:
    """Classify *node*; any at-rule other than @extend/@include is OTHER."""
    if isinstance(node, AtRule):
        return _DIRECTIVE_KINDS.get(node.name, ChildKind.OTHER)
    if isinstance(node, Declaration):
        return ChildKind.DECLARATION
    if isinstance(node, Rule):
        return ChildKind.NESTED_RULE
    return ChildKind.OTHER


def find_out_of_order(
    rule: Rule, *, seen: ChildKind, offending: ChildKind
) -> Iterator[ChildNode]:
    """Yield each child of kind *offending* that follows a child of kind *seen*.

    OTHER children neither trigger nor reset the "seen" state.
    """
    seen_kind = False
    for child in rule.nodes:
        kind = classify_child(child)
        if kind is seen:
            seen_kind = True
        elif kind is offending and seen_kind:
            yield child
