"""Scope tracking for duplicate-name detection.

A scope is the container a declaration sits in (the Root, a Rule, or an
AtRule with children). Shadowing in a nested scope is allowed; only
re-declaring a name inside the same container is a duplicate.

The :class:`ScopeIndex` is built once per document pass by a single
top-down traversal, so exclusion checks read a precomputed ancestry tuple
instead of walking ``parent`` links for every declaration.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sasslint.tree.nodes import AtRule, Container

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sasslint.tree.nodes import Node, Root

CONDITIONAL_DIRECTIVES: frozenset[str] = frozenset({"if", "else"})


class Occurrence(enum.Enum):
    FIRST = "first"
    DUPLICATE = "duplicate"


class ExcludeInside(enum.Enum):
    """Directive ancestry that exempts a declaration from duplicate checks."""

    CONDITIONAL_BRANCH = "if-else"
    ANY_DIRECTIVE = "at-rule"

    @classmethod
    def parse(cls, value: str) -> ExcludeInside:
        """Accept both the option spellings and the category names."""
        aliases = {
            "if-else": cls.CONDITIONAL_BRANCH,
            "conditional-branch": cls.CONDITIONAL_BRANCH,
            "at-rule": cls.ANY_DIRECTIVE,
            "any-directive": cls.ANY_DIRECTIVE,
        }
        try:
            return aliases[value]
        except KeyError:
            msg = f"unknown ignoreInside value {value!r}, expected one of {sorted(aliases)}"
            raise ValueError(msg) from None

    def matches(self, directive_name: str) -> bool:
        if self is ExcludeInside.ANY_DIRECTIVE:
            return True
        return directive_name in CONDITIONAL_DIRECTIVES


@dataclass
class ScopeIndex:
    """Node → owning scope and node → enclosing directive names (nearest first)."""

    scopes: dict[Node, Container] = field(default_factory=dict)
    directives: dict[Node, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def build(cls, root: Root) -> ScopeIndex:
        index = cls()
        stack: list[tuple[Container, tuple[str, ...]]] = [(root, ())]
        while stack:
            container, ancestry = stack.pop()
            for child in container.nodes:
                index.scopes[child] = container
                index.directives[child] = ancestry
                if isinstance(child, Container) and child.nodes:
                    inner = (child.name, *ancestry) if isinstance(child, AtRule) else ancestry
                    stack.append((child, inner))
        return index

    def scope_of(self, node: Node) -> Container | None:
        return self.scopes.get(node, node.parent)

    def is_inside(self, node: Node, exclusions: Iterable[ExcludeInside]) -> bool:
        """Return True if any enclosing directive matches any exclusion."""
        ancestry = self.directives.get(node, ())
        return any(excl.matches(name) for excl in exclusions for name in ancestry)


class ScopeTracker:
    """Records declared names per scope within one document pass.

    Create one tracker per rule invocation; never share it across documents.
    """

    def __init__(self, index: ScopeIndex) -> None:
        self._index = index
        self._seen: dict[Container | None, set[str]] = {}

    def record(self, node: Node, name: str) -> Occurrence:
        scope = self._index.scope_of(node)
        seen = self._seen.setdefault(scope, set())
        if name in seen:
            return Occurrence.DUPLICATE
        seen.add(name)
        return Occurrence.FIRST
