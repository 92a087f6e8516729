"""Expression tree: typed values parsed from declaration values and directive parameters.

Every variant is a plain dataclass. Spans use the same inclusive convention as
:class:`~sasslint.tree.nodes.SourceSpan` and point into the document text.
``str(expr)`` re-serializes the expression in normalized form.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from sasslint.tree.nodes import SourceSpan

LITERAL_KINDS: frozenset[str] = frozenset({"number", "string", "color", "boolean", "null"})


@dataclass(eq=False)
class Literal:
    """A number, string, color, boolean or null.

    ``value`` is the normalized text (colors become lowercase ``#rrggbb``);
    the original spelling is only recoverable through ``span``.
    """

    kind: str
    value: str
    quoted: bool = False
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        if self.kind == "string" and self.quoted:
            return f'"{self.value}"'
        return self.value


@dataclass(eq=False)
class VariableRef:
    name: str  # without the leading "$"
    namespace: str | None = None
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.namespace}.${self.name}"
        return f"${self.name}"


@dataclass(eq=False)
class BinaryOp:
    """``left <operator> right``.

    ``before_operator``/``after_operator`` hold explicit spacing set by the
    operator spacing fix; ``None`` serializes as a single space.
    """

    left: Expression
    operator: str
    right: Expression
    before_operator: str | None = None
    after_operator: str | None = None
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        before = " " if self.before_operator is None else self.before_operator
        after = " " if self.after_operator is None else self.after_operator
        return f"{self.left}{before}{self.operator}{after}{self.right}"


@dataclass(eq=False)
class UnaryOp:
    operand: Expression
    operator: str
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        if self.operator == "not":
            return f"not {self.operand}"
        return f"{self.operator}{self.operand}"


@dataclass(eq=False)
class KeywordArgument:
    """A ``$name: value`` argument inside a function or mixin call."""

    name: str
    value: Expression
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        return f"${self.name}: {self.value}"


@dataclass(eq=False)
class FunctionCall:
    name: str  # may be namespaced, e.g. "math.div"
    arguments: list[Expression] = field(default_factory=list)
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.name}({args})"


@dataclass(eq=False)
class ListExpr:
    items: list[Expression] = field(default_factory=list)
    separator: str = " "  # " " or ","
    bracketed: bool = False
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        joiner = ", " if self.separator == "," else " "
        text = joiner.join(str(i) for i in self.items)
        return f"[{text}]" if self.bracketed else text


@dataclass(eq=False)
class MapExpr:
    entries: list[tuple[Expression, Expression]] = field(default_factory=list)
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        pairs = ", ".join(f"{k}: {v}" for k, v in self.entries)
        return f"({pairs})"


@dataclass(eq=False)
class Conditional:
    """The ``if(condition, when_true, when_false)`` expression."""

    condition: Expression
    when_true: Expression
    when_false: Expression
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        return f"if({self.condition}, {self.when_true}, {self.when_false})"


@dataclass(eq=False)
class Parenthesized:
    expression: Expression
    span: SourceSpan | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        return f"({self.expression})"


Expression = Union[
    Literal,
    VariableRef,
    BinaryOp,
    UnaryOp,
    KeywordArgument,
    FunctionCall,
    ListExpr,
    MapExpr,
    Conditional,
    Parenthesized,
]
