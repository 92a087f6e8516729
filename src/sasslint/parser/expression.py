"""Sass expression parser: turns a value or directive argument into an expression tree.

The grammar lives in ``expression.lark`` and is parsed with lark's LALR
parser. Offsets in every span are absolute: callers pass the document offset
of the first character of *text* as *base*.
"""

from __future__ import annotations

import functools
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedInput, VisitError

from sasslint.parser.colors import NAMED_COLORS, normalize_hex
from sasslint.tree.expressions import (
    BinaryOp,
    Conditional,
    Expression,
    FunctionCall,
    KeywordArgument,
    ListExpr,
    Literal,
    MapExpr,
    Parenthesized,
    UnaryOp,
    VariableRef,
)
from sasslint.tree.nodes import SourceSpan

if TYPE_CHECKING:
    from lark import Token
    from lark.tree import Meta

GRAMMAR_PATH = Path(__file__).parent / "expression.lark"

_VARIABLE_RE = re.compile(r"(?:([a-zA-Z_][\w-]*)\.)?\$(.+)")
_HEX_LENGTHS = frozenset({3, 4, 6, 8})


class ExpressionSyntaxError(ValueError):
    """Raised when a value cannot be parsed as a Sass expression."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"{message} (offset {offset})")
        self.offset = offset


@functools.lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        lexer="contextual",
        propagate_positions=True,
    )


# ---------------------------------------------------------------------------
# Tree building
# ---------------------------------------------------------------------------


def _start(expr: Expression) -> int:
    return expr.span.start if expr.span is not None else 0


def _end(expr: Expression) -> int:
    return expr.span.end if expr.span is not None else 0


@v_args(meta=True)
class ExpressionBuilder(Transformer):  # type: ignore[type-arg]
    """Transform a lark parse tree into :mod:`sasslint.tree.expressions` nodes."""

    def __init__(self, base: int = 0) -> None:
        super().__init__()
        self._base = base

    def _span(self, meta: Meta) -> SourceSpan:
        return SourceSpan(self._base + meta.start_pos, self._base + meta.end_pos - 1)

    def _token_span(self, token: Token) -> SourceSpan:
        return SourceSpan(self._base + token.start_pos, self._base + token.end_pos - 1)

    # ---- lists ----

    def comma_list(self, meta: Meta, items: list[Expression]) -> ListExpr:
        return ListExpr(items, ",", span=SourceSpan(_start(items[0]), _end(items[-1])))

    def space_list(self, meta: Meta, items: list[Expression]) -> ListExpr:
        return ListExpr(items, " ", span=self._span(meta))

    # ---- operators ----

    def binary(self, meta: Meta, children: list[Any]) -> BinaryOp:
        left, op, right = children
        return BinaryOp(left, str(op), right, span=self._span(meta))

    def unary(self, meta: Meta, children: list[Any]) -> Expression:
        op, operand = children
        operator = str(op)
        if operator == "not":
            return UnaryOp(operand, "not", span=self._span(meta))
        if (
            operator == "-"
            and isinstance(operand, Literal)
            and operand.kind == "number"
            and not operand.value.startswith("-")
            and _start(operand) == self._base + op.end_pos
        ):
            return Literal("number", f"-{operand.value}", span=self._span(meta))
        return UnaryOp(operand, operator, span=self._span(meta))

    # ---- primaries ----

    def number(self, meta: Meta, children: list[Token]) -> Literal:
        return Literal("number", str(children[0]), span=self._span(meta))

    def string(self, meta: Meta, children: list[Token]) -> Literal:
        return Literal("string", str(children[0])[1:-1], quoted=True, span=self._span(meta))

    def raw(self, meta: Meta, children: list[Token]) -> Literal:
        return Literal("string", str(children[0]), span=self._span(meta))

    def color(self, meta: Meta, children: list[Token]) -> Literal:
        text = str(children[0])
        if len(text) - 1 not in _HEX_LENGTHS:
            msg = f"invalid color {text!r}"
            raise ExpressionSyntaxError(msg, self._base + meta.start_pos)
        return Literal("color", normalize_hex(text), span=self._span(meta))

    def variable(self, meta: Meta, children: list[Token]) -> VariableRef:
        namespace, name = _split_variable(str(children[0]))
        return VariableRef(name, namespace, span=self._span(meta))

    def word(self, meta: Meta, children: list[Token]) -> Literal:
        text = str(children[0])
        span = self._span(meta)
        if text in ("true", "false"):
            return Literal("boolean", text, span=span)
        if text == "null":
            return Literal("null", text, span=span)
        lowered = text.lower()
        if lowered in NAMED_COLORS:
            return Literal("color", NAMED_COLORS[lowered], span=span)
        return Literal("string", text, span=span)

    # ---- calls ----

    def call(self, meta: Meta, children: list[Any]) -> Expression:
        name = str(children[0])
        args = children[2:-1]
        span = self._span(meta)
        if name == "if" and len(args) == 3 and not any(isinstance(a, KeywordArgument) for a in args):
            return Conditional(args[0], args[1], args[2], span=span)
        return FunctionCall(name, args, span=span)

    def keyword_argument(self, meta: Meta, children: list[Any]) -> KeywordArgument:
        token, value = children
        namespace, name = _split_variable(str(token))
        if namespace is not None:
            msg = f"keyword argument cannot be namespaced: {token}"
            raise ExpressionSyntaxError(msg, self._base + token.start_pos)
        return KeywordArgument(name, value, span=self._span(meta))

    def positional_argument(self, meta: Meta, children: list[Expression]) -> Expression:
        return children[0]

    # ---- brackets ----

    def empty_list(self, meta: Meta, children: list[Token]) -> ListExpr:
        return ListExpr([], " ", span=self._span(meta))

    def parenthesized(self, meta: Meta, children: list[Any]) -> Parenthesized:
        return Parenthesized(children[1], span=self._span(meta))

    def map_entry(self, meta: Meta, children: list[Expression]) -> tuple[Expression, Expression]:
        key, value = children
        return key, value

    def map_literal(self, meta: Meta, children: list[Any]) -> MapExpr:
        entries = [c for c in children if isinstance(c, tuple)]
        return MapExpr(entries, span=self._span(meta))

    def bracketed(self, meta: Meta, children: list[Any]) -> ListExpr:
        span = self._span(meta)
        if len(children) == 2:
            return ListExpr([], " ", bracketed=True, span=span)
        inner = children[1]
        if isinstance(inner, ListExpr) and not inner.bracketed:
            return ListExpr(inner.items, inner.separator, bracketed=True, span=span)
        return ListExpr([inner], " ", bracketed=True, span=span)


def _split_variable(text: str) -> tuple[str | None, str]:
    match = _VARIABLE_RE.fullmatch(text)
    if match is None:
        return None, text.lstrip("$")
    return match.group(1), match.group(2)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def parse_expression(text: str, base: int = 0) -> Expression:
    """Parse *text* into an expression tree.

    Raises:
        ExpressionSyntaxError: If *text* is empty or not a valid expression.
    """
    if not text.strip():
        msg = "empty expression"
        raise ExpressionSyntaxError(msg, base)

    try:
        tree = _parser().parse(text)
    except UnexpectedInput as exc:
        pos = exc.pos_in_stream
        if pos is None or pos < 0:
            pos = len(text)
        msg = str(exc).strip().splitlines()[0]
        raise ExpressionSyntaxError(msg, base + pos) from exc

    try:
        return ExpressionBuilder(base).transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, ExpressionSyntaxError):
            raise exc.orig_exc from None
        raise
