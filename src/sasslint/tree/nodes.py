"""Document tree: Root, Rule, AtRule, Declaration, Comment."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sasslint.tree.expressions import Expression


@dataclass(frozen=True)
class SourceSpan:
    """Byte-offset range into the original document text.

    Both offsets are inclusive: ``source[start:end + 1]`` is the spanned text.
    """

    start: int
    end: int


@dataclass(eq=False)
class Node:
    """Base for every document tree node.

    Nodes compare by identity so they can key scope maps.
    """

    span: SourceSpan | None = field(default=None, kw_only=True)
    parent: Container | None = field(default=None, kw_only=True, repr=False)

    type = "node"

    def root(self) -> Root | None:
        """Return the Root this node is attached to, if any."""
        node: Node | None = self
        while node is not None and not isinstance(node, Root):
            node = node.parent
        return node


@dataclass(eq=False)
class Container(Node):
    """A node that owns an ordered list of children."""

    nodes: list[ChildNode] = field(default_factory=list, kw_only=True)

    def append(self, child: ChildNode) -> None:
        child.parent = self
        self.nodes.append(child)

    def walk(self) -> Iterator[ChildNode]:
        """Yield every descendant in document (pre-)order."""
        for child in self.nodes:
            yield child
            if isinstance(child, Container):
                yield from child.walk()

    def walk_rules(self) -> Iterator[Rule]:
        for node in self.walk():
            if isinstance(node, Rule):
                yield node

    def walk_at_rules(self, *names: str) -> Iterator[AtRule]:
        """Yield at-rules, optionally only those whose name is in *names*."""
        for node in self.walk():
            if isinstance(node, AtRule) and (not names or node.name in names):
                yield node

    def walk_decls(self) -> Iterator[Declaration]:
        for node in self.walk():
            if isinstance(node, Declaration):
                yield node


@dataclass(eq=False)
class Root(Container):
    """Top of a document; owns the original text every span points into."""

    source: str = ""

    type = "root"


@dataclass(eq=False)
class Rule(Container):
    """A selector block, e.g. ``.card`` followed by indented children."""

    selector: str = ""
    selector_span: SourceSpan | None = field(default=None, kw_only=True)

    type = "rule"


@dataclass(eq=False)
class AtRule(Container):
    """A directive such as ``@include``, ``@if`` or ``@use``.

    ``params`` is the raw parameter text after the name; ``expression``
    is the parsed form of the parameters when the directive carries one.
    """

    name: str = ""
    params: str = ""
    expression: Expression | None = field(default=None, kw_only=True)

    type = "atrule"


@dataclass(eq=False)
class Declaration(Node):
    """A property or ``$variable`` declaration.

    ``value`` has trailing ``!default``/``!global`` flags removed; the flags
    are only visible in the original source text.
    """

    prop: str = ""
    value: str = ""
    expression: Expression | None = field(default=None, kw_only=True)

    type = "decl"

    @property
    def is_variable(self) -> bool:
        return self.prop.startswith("$")


@dataclass(eq=False)
class Comment(Node):
    """A ``//`` or ``/* */`` comment. Ignored by every rule."""

    text: str = ""

    type = "comment"


ChildNode = Union[Rule, AtRule, Declaration, Comment]
