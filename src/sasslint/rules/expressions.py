"""Rules that inspect values: operator spacing, color literals, dimension building."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sasslint.engine.diagnostic import Diagnostic, prefix_rule
from sasslint.engine.fixes import fix_operator_spacing
from sasslint.engine.source_span import slice_between, slice_original
from sasslint.engine.walker import walk
from sasslint.rules.options import bool_option, check_keys, require_enabled, string_list_option
from sasslint.tree.expressions import BinaryOp, FunctionCall, Literal
from sasslint.tree.nodes import AtRule, Declaration

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from sasslint.engine.walker import Ancestors
    from sasslint.tree.expressions import Expression
    from sasslint.tree.nodes import Node, Root

OPERATOR_NO_UNSPACED = "operator-no-unspaced"
NO_COLOR_LITERALS = "no-color-literals"
DIMENSION_NO_NON_NUMERIC_VALUES = "dimension-no-non-numeric-values"

# ---------------------------------------------------------------------------
# operator-no-unspaced
# ---------------------------------------------------------------------------

# "and"/"or" are keywords and always spaced
CHECKED_OPERATORS: frozenset[str] = frozenset(
    {"+", "-", "*", "/", "%", "==", "!=", "<", ">", "<=", ">="}
)
OPERATOR_DIRECTIVES: frozenset[str] = frozenset(
    {"if", "else", "while", "for", "each", "return", "include"}
)


def unspaced_operator_message(operator: str) -> str:
    return f'Expected spaces around operator "{operator}"'


def _expression_owners(root: Root) -> Iterator[tuple[Node, Expression]]:
    for node in root.walk():
        if isinstance(node, Declaration) and node.expression is not None:
            yield node, node.expression
        elif (
            isinstance(node, AtRule)
            and node.name in OPERATOR_DIRECTIVES
            and node.expression is not None
        ):
            yield node, node.expression


def operator_is_spaced(binop: BinaryOp, source: str) -> bool | None:
    """Whether the original text has whitespace on both sides of the operator.

    Returns ``None`` when the operands have no usable spans or the operator
    cannot be found between them.
    """
    between = slice_between(binop.left, binop.right, source)
    if between is None:
        return None
    idx = between.find(binop.operator)
    if idx == -1:
        return None
    before = between[:idx]
    after = between[idx + len(binop.operator) :]
    return bool(before) and not before.strip() and bool(after) and not after.strip()


def check_operator_no_unspaced(root: Root, options: None = None) -> list[Diagnostic]:
    rule_id = prefix_rule(OPERATOR_NO_UNSPACED)
    diagnostics: list[Diagnostic] = []
    for owner, expression in _expression_owners(root):
        for node, _ in walk(expression):
            if not isinstance(node, BinaryOp) or node.operator not in CHECKED_OPERATORS:
                continue
            if operator_is_spaced(node, root.source) is not False:
                continue
            diagnostics.append(
                Diagnostic(
                    rule_id,
                    unspaced_operator_message(node.operator),
                    owner,
                    fix=fix_operator_spacing(node, root.source),
                )
            )
    return diagnostics


# ---------------------------------------------------------------------------
# no-color-literals
# ---------------------------------------------------------------------------

COLOR_FUNCTIONS: frozenset[str] = frozenset({"rgb", "rgba", "hsl", "hsla"})
DEFAULT_ALLOWED_COLORS: frozenset[str] = frozenset({"transparent", "currentcolor", "inherit"})


def color_literal_message(color: str) -> str:
    return f'Unexpected color literal "{color}". Use a variable instead'


@dataclass(frozen=True)
class ColorLiteralOptions:
    """Options for ``no-color-literals``.

    ``allowed_colors`` holds lowercase spellings.
    """

    allow_in_variables: bool = True
    allow_in_functions: bool = False
    allowed_colors: frozenset[str] = DEFAULT_ALLOWED_COLORS


def parse_color_literal_options(
    primary: object, secondary: Mapping[str, object]
) -> ColorLiteralOptions:
    require_enabled(primary)
    check_keys(secondary, ("allowInVariables", "allowInFunctions", "allowedColors"))
    allowed = string_list_option(secondary, "allowedColors")
    return ColorLiteralOptions(
        allow_in_variables=bool_option(secondary, "allowInVariables", default=True),
        allow_in_functions=bool_option(secondary, "allowInFunctions", default=False),
        allowed_colors=(
            DEFAULT_ALLOWED_COLORS if allowed is None else frozenset(c.lower() for c in allowed)
        ),
    )


def is_color_function(expr: Expression) -> bool:
    return isinstance(expr, FunctionCall) and expr.name.lower() in COLOR_FUNCTIONS


def _outside_color_function(node: Expression, ancestors: Ancestors) -> bool:
    return not is_color_function(node)


def find_color_literals(
    expression: Expression | None, source: str, options: ColorLiteralOptions
) -> list[str]:
    """Original spellings of the color literals in *expression*, in source order."""
    found: list[str] = []
    for node, ancestors in walk(expression, descend=_outside_color_function):
        if is_color_function(node):
            if options.allow_in_functions:
                continue
        elif isinstance(node, Literal) and node.kind == "color":
            if options.allow_in_functions and any(isinstance(a, FunctionCall) for a in ancestors):
                continue
        else:
            continue

        text = slice_original(node, source)
        if text is None or text.lower() in options.allowed_colors:
            continue
        found.append(text)
    return found


def check_no_color_literals(
    root: Root, options: ColorLiteralOptions | None = None
) -> list[Diagnostic]:
    opts = options or ColorLiteralOptions()
    rule_id = prefix_rule(NO_COLOR_LITERALS)
    diagnostics: list[Diagnostic] = []
    for decl in root.walk_decls():
        if opts.allow_in_variables and decl.is_variable:
            continue
        for color in find_color_literals(decl.expression, root.source, opts):
            diagnostics.append(Diagnostic(rule_id, color_literal_message(color), decl))
    return diagnostics


# ---------------------------------------------------------------------------
# dimension-no-non-numeric-values
# ---------------------------------------------------------------------------

UNITS = "px|em|rem|%|vh|vw|vmin|vmax|ch|ex|cm|mm|in|pt|pc|deg|rad|grad|turn|s|ms"

MSG_DIMENSION_CONCAT = (
    "Unexpected dimension built via string concatenation. "
    "Use multiplication by a unit literal (e.g., $n * 1px) instead"
)
MSG_DIMENSION_INTERPOLATION = (
    "Unexpected dimension built via interpolation. "
    "Use multiplication by a unit literal (e.g., $n * 1px) instead"
)

_STRING_CONCAT_RE = re.compile(rf"\+\s*[\"'](?:{UNITS})[\"']")
_INTERPOLATED_UNIT_RE = re.compile(rf"#\{{[^}}]+\}}(?:{UNITS})(?![a-zA-Z])")


def check_dimension_no_non_numeric_values(root: Root, options: None = None) -> list[Diagnostic]:
    rule_id = prefix_rule(DIMENSION_NO_NON_NUMERIC_VALUES)
    diagnostics: list[Diagnostic] = []
    for node in root.walk():
        if not isinstance(node, Declaration) and not (
            isinstance(node, AtRule) and node.name == "return"
        ):
            continue
        text = slice_original(node, root.source)
        if text is None:
            continue
        if _STRING_CONCAT_RE.search(text):
            diagnostics.append(Diagnostic(rule_id, MSG_DIMENSION_CONCAT, node))
        if _INTERPOLATED_UNIT_RE.search(text):
            diagnostics.append(Diagnostic(rule_id, MSG_DIMENSION_INTERPOLATION, node))
    return diagnostics
