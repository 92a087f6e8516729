"""Parser for the Sass indented syntax (``.sass`` files).

Builds the document tree in one pass over the lines. Nesting follows
indentation; ``=name`` and ``+name`` shorthands become ``mixin`` and
``include`` at-rules. Every node records the span of its own text, and
containers extend to the end of their last child.

Declaration values and the arguments of expression-bearing directives are
handed to :func:`~sasslint.parser.expression.parse_expression`. A value the
expression parser rejects leaves ``expression`` unset; it is not an error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sasslint.parser.expression import ExpressionSyntaxError, parse_expression
from sasslint.tree.expressions import FunctionCall, ListExpr
from sasslint.tree.nodes import (
    AtRule,
    Comment,
    Container,
    Declaration,
    Root,
    Rule,
    SourceSpan,
)

if TYPE_CHECKING:
    from sasslint.tree.expressions import Expression
    from sasslint.tree.nodes import ChildNode

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Directives whose whole parameter text is one expression.
EXPRESSION_DIRECTIVES: frozenset[str] = frozenset(
    {"if", "while", "return", "debug", "warn", "error"}
)

_AT_RULE_RE = re.compile(r"@([\w-]+)")
_MIXIN_SHORTHAND_RE = re.compile(r"=\s*(?=[\w-])")
_INCLUDE_SHORTHAND_RE = re.compile(r"\+(?=[a-zA-Z_-])")
_VARIABLE_DECL_RE = re.compile(r"((?:[\w-]+\.)?\$[\w-]+)\s*:")
_PROPERTY_DECL_RE = re.compile(
    r"((?:[a-zA-Z_-]|#\{[^}]*\})(?:[\w-]|#\{[^}]*\})*)\s*:(?=\s|$)"
)
_FLAGS_RE = re.compile(r"(?:\s*!(?:default|global))+\s*$")
_ELSE_IF_RE = re.compile(r"if\b\s*")
_EACH_IN_RE = re.compile(r"\s+in\s+")
_FOR_RE = re.compile(r"\$[\w-]+\s+from\s+(.+?)\s+(?:through|to)\s+(.+)$", re.DOTALL)
_INCLUDE_NAME_RE = re.compile(r"[\w.-]+")


class ParseError(ValueError):
    """Raised for documents that are not valid indented-syntax Sass."""

    def __init__(self, message: str, line: int) -> None:
        super().__init__(f"line {line}: {message}")
        self.line = line
        self.reason = message


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _Line:
    number: int  # 1-based
    start: int  # document offset of the first character
    indent: int
    text: str  # without the line terminator

    @property
    def blank(self) -> bool:
        return not self.text.strip()

    @property
    def content_start(self) -> int:
        return self.start + self.indent


def _split_lines(source: str) -> list[_Line]:
    lines: list[_Line] = []
    offset = 0
    for number, raw in enumerate(source.split("\n"), start=1):
        text = raw.rstrip("\r")
        indent = len(text) - len(text.lstrip(" \t"))
        lines.append(_Line(number, offset, indent, text))
        offset += len(raw) + 1
    return lines


def blank_comments(text: str) -> str:
    """Replace ``//`` and ``/* */`` comments with spaces.

    The result has the same length as *text*, so offsets computed on it are
    valid in the original. Quoted strings and unquoted ``url()`` bodies are
    left alone.
    """
    chars = list(text)
    length = len(text)
    quote: str | None = None
    i = 0
    while i < length:
        ch = text[i]
        if quote is not None:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
            i += 1
            continue
        if ch in "\"'":
            quote = ch
            i += 1
            continue
        if text[i : i + 4].lower() == "url(" and not text[i + 4 :].lstrip().startswith(("'", '"')):
            close = text.find(")", i)
            if close == -1:
                break
            i = close + 1
            continue
        if text.startswith("//", i):
            end = text.find("\n", i)
            end = length if end == -1 else end
            chars[i:end] = " " * (end - i)
            i = end
            continue
        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = length if end == -1 else end + 2
            for k in range(i, end):
                if chars[k] != "\n":
                    chars[k] = " "
            i = end
            continue
        i += 1
    return "".join(chars)


def _open_parens(text: str) -> int:
    depth = 0
    quote: str | None = None
    for ch in text:
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
    return depth


def _parse_optional(text: str, base: int, line: int) -> Expression | None:
    if not text.strip():
        return None
    try:
        return parse_expression(text, base)
    except ExpressionSyntaxError as exc:
        logger.debug("Line %d: expression not parsed: %s", line, exc)
        return None


# ---------------------------------------------------------------------------
# Tree builder
# ---------------------------------------------------------------------------


@dataclass
class _PropertyPrefix:
    """Open block of nested properties (``font:`` followed by ``family: x``)."""

    prefix: str
    container: Container


@dataclass
class _Statement:
    """One logical statement: its first line plus any continuation lines."""

    first: _Line
    last_index: int
    text: str  # comments blanked; starts at first.content_start

    @property
    def start(self) -> int:
        return self.first.content_start

    @property
    def end(self) -> int:
        """Inclusive offset of the last non-blank character."""
        return self.start + len(self.text.rstrip()) - 1


_Holder = Container | _PropertyPrefix


class _Builder:
    def __init__(self, source: str) -> None:
        self.source = source
        self.lines = _split_lines(source)
        span = SourceSpan(0, len(source) - 1) if source else None
        self.root = Root(source=source, span=span)

    def build(self) -> Root:
        stack: list[tuple[int, _Holder]] = [(-1, self.root)]
        # indent and node of the previous statement that cannot own children
        leaf: tuple[int, ChildNode] | None = None
        idx = 0
        while idx < len(self.lines):
            line = self.lines[idx]
            if line.blank:
                idx += 1
                continue

            content = line.text[line.indent :]
            if content.startswith(("//", "/*")):
                idx = self._comment(idx, stack)
                continue

            if leaf is not None and line.indent > leaf[0]:
                msg = "unexpected indentation"
                raise ParseError(msg, line.number)

            while stack[-1][0] >= line.indent:
                stack.pop()
            holder = stack[-1][1]

            node, idx = self._statement(idx, holder)
            owns_children = self._next_is_nested(idx, line.indent)
            leaf = None
            if isinstance(node, Declaration):
                if owns_children and not node.is_variable:
                    stack.append((line.indent, _PropertyPrefix(node.prop, self._container(holder))))
                else:
                    leaf = (line.indent, node)
                if node.value or not owns_children:
                    self._container(holder).append(node)
            else:
                self._container(holder).append(node)
                stack.append((line.indent, node))

        _close_spans(self.root)
        return self.root

    # -- helpers ----------------------------------------------------------------

    @staticmethod
    def _container(holder: _Holder) -> Container:
        return holder.container if isinstance(holder, _PropertyPrefix) else holder

    def _next_is_nested(self, idx: int, indent: int) -> bool:
        for line in self.lines[idx:]:
            if not line.blank:
                return line.indent > indent
        return False

    def _gather(self, idx: int, *, selector: bool = False) -> _Statement:
        """Collect the statement starting at *idx*, following open parens.

        Selectors ending in ``,`` also continue onto the next line.
        """
        first = self.lines[idx]
        last = idx

        def text_through(line: _Line) -> str:
            return blank_comments(self.source[first.content_start : line.start + len(line.text)])

        text = text_through(first)
        while last + 1 < len(self.lines):
            trimmed = text.rstrip()
            continues = _open_parens(text) > 0 or (selector and trimmed.endswith(","))
            following = self.lines[last + 1]
            if not continues or following.blank or following.indent < first.indent:
                break
            last += 1
            text = text_through(self.lines[last])
        return _Statement(first, last, text)

    def _comment(self, idx: int, stack: list[tuple[int, _Holder]]) -> int:
        line = self.lines[idx]
        last = idx
        nxt = idx + 1
        while nxt < len(self.lines):
            candidate = self.lines[nxt]
            if not candidate.blank and candidate.indent <= line.indent:
                break
            if not candidate.blank:
                last = nxt
            nxt += 1

        end_line = self.lines[last]
        start = line.content_start
        end = end_line.start + len(end_line.text.rstrip()) - 1
        while stack[-1][0] >= line.indent:
            stack.pop()
        holder = stack[-1][1]
        comment = Comment(text=self.source[start : end + 1], span=SourceSpan(start, end))
        self._container(holder).append(comment)
        return last + 1

    def _statement(self, idx: int, holder: _Holder) -> tuple[ChildNode, int]:
        line = self.lines[idx]
        content = line.text[line.indent :]

        if isinstance(holder, _PropertyPrefix):
            stmt = self._gather(idx)
            decl = self._declaration(stmt, prefix=holder.prefix)
            if decl is None:
                msg = "expected a nested property"
                raise ParseError(msg, line.number)
            return decl, stmt.last_index + 1

        if content.startswith("@"):
            stmt = self._gather(idx)
            match = _AT_RULE_RE.match(stmt.text)
            if match is None:
                msg = "expected a directive name after '@'"
                raise ParseError(msg, line.number)
            return self._at_rule(stmt, match.group(1), match.end()), stmt.last_index + 1

        mixin = _MIXIN_SHORTHAND_RE.match(content)
        if mixin:
            stmt = self._gather(idx)
            return self._at_rule(stmt, "mixin", mixin.end()), stmt.last_index + 1

        include = _INCLUDE_SHORTHAND_RE.match(content)
        if include:
            stmt = self._gather(idx)
            return self._at_rule(stmt, "include", include.end()), stmt.last_index + 1

        stmt = self._gather(idx)
        decl = self._declaration(stmt)
        if decl is not None:
            return decl, stmt.last_index + 1

        stmt = self._gather(idx, selector=True)
        return self._rule(stmt), stmt.last_index + 1

    def _at_rule(self, stmt: _Statement, name: str, params_from: int) -> AtRule:
        raw = stmt.text[params_from:]
        params = raw.strip()
        params_start = stmt.start + params_from + (len(raw) - len(raw.lstrip()))
        expression = self._directive_expression(name, params, params_start, stmt.first.number)
        return AtRule(
            name=name,
            params=params,
            expression=expression,
            span=SourceSpan(stmt.start, stmt.end),
        )

    def _declaration(self, stmt: _Statement, *, prefix: str | None = None) -> Declaration | None:
        match = _VARIABLE_DECL_RE.match(stmt.text)
        if match is None and not stmt.text.startswith("$"):
            match = _PROPERTY_DECL_RE.match(stmt.text)
        if match is None:
            return None

        prop = match.group(1)
        if prefix is not None:
            prop = f"{prefix}-{prop}"

        raw_value = stmt.text[match.end() :]
        value_start = stmt.start + match.end() + (len(raw_value) - len(raw_value.lstrip()))
        value_text = _FLAGS_RE.sub("", raw_value.strip())

        expression = None
        if not prop.startswith("--"):
            expression = _parse_optional(value_text, value_start, stmt.first.number)

        return Declaration(
            prop=prop,
            value=value_text,
            expression=expression,
            span=SourceSpan(stmt.start, stmt.end),
        )

    def _rule(self, stmt: _Statement) -> Rule:
        selector = self.source[stmt.start : stmt.end + 1]
        span = SourceSpan(stmt.start, stmt.end)
        return Rule(selector=selector, span=span, selector_span=span)

    def _directive_expression(
        self, name: str, params: str, start: int, line: int
    ) -> Expression | None:
        if name in EXPRESSION_DIRECTIVES:
            return _parse_optional(params, start, line)

        if name == "else":
            match = _ELSE_IF_RE.match(params)
            if match is None:
                return None
            return _parse_optional(params[match.end() :], start + match.end(), line)

        if name == "each":
            match = _EACH_IN_RE.search(params)
            if match is None:
                return None
            return _parse_optional(params[match.end() :], start + match.end(), line)

        if name == "for":
            match = _FOR_RE.match(params)
            if match is None:
                return None
            low = _parse_optional(match.group(1), start + match.start(1), line)
            high = _parse_optional(match.group(2), start + match.start(2), line)
            if low is None or high is None or low.span is None or high.span is None:
                return None
            return ListExpr([low, high], " ", span=SourceSpan(low.span.start, high.span.end))

        if name == "include":
            return self._include_expression(params, start, line)

        return None

    @staticmethod
    def _include_expression(params: str, start: int, line: int) -> Expression | None:
        match = _INCLUDE_NAME_RE.match(params)
        if match is None:
            return None
        if not params[match.end() :].startswith("("):
            return FunctionCall(
                match.group(0), [], span=SourceSpan(start, start + match.end() - 1)
            )
        expression = _parse_optional(params, start, line)
        # "+foo(1) using ($x)" parses as a list headed by the call
        if isinstance(expression, ListExpr) and expression.items:
            expression = expression.items[0]
        return expression if isinstance(expression, FunctionCall) else None


def _close_spans(container: Container) -> None:
    """Extend each container's span to cover its last child."""
    for child in container.nodes:
        if isinstance(child, Container):
            _close_spans(child)
    if isinstance(container, Root) or not container.nodes or container.span is None:
        return
    last = container.nodes[-1].span
    if last is not None and last.end > container.span.end:
        container.span = SourceSpan(container.span.start, last.end)


def parse(source: str) -> Root:
    """Parse an indented-syntax document into a :class:`Root`.

    Raises:
        ParseError: On indentation the grammar does not allow.
    """
    return _Builder(source).build()
