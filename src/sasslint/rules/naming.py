"""Naming-pattern rules for variables, placeholders, mixins and functions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sasslint.engine.diagnostic import Diagnostic, prefix_rule
from sasslint.engine.patterns import (
    DEFAULT_PATTERN,
    compile_pattern,
    describe_pattern,
    matches_pattern,
)
from sasslint.rules.options import InvalidOptionError, check_keys
from sasslint.rules.ordering import mixin_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sasslint.tree.nodes import Root

DOLLAR_VARIABLE_PATTERN = "dollar-variable-pattern"
PERCENT_PLACEHOLDER_PATTERN = "percent-placeholder-pattern"
AT_MIXIN_PATTERN = "at-mixin-pattern"
AT_FUNCTION_PATTERN = "at-function-pattern"

_FUNCTION_NAME_RE = re.compile(r"[^\s(]+")


def parse_pattern_option(primary: object, secondary: Mapping[str, object]) -> re.Pattern[str]:
    """Accept ``true`` (default pattern), a regex string or a compiled pattern."""
    check_keys(secondary, ())
    pattern = compile_pattern(primary)
    if pattern is None:
        msg = f"invalid naming pattern {primary!r}"
        raise InvalidOptionError(msg)
    return pattern


def variable_message(name: str, pattern: re.Pattern[str]) -> str:
    return f'Expected ${name} to match pattern "{describe_pattern(pattern)}"'


def placeholder_message(name: str, pattern: re.Pattern[str]) -> str:
    return f'Expected %{name} to match pattern "{describe_pattern(pattern)}"'


def mixin_message(name: str, pattern: re.Pattern[str]) -> str:
    return f'Expected mixin "{name}" to match pattern "{describe_pattern(pattern)}"'


def function_message(name: str, pattern: re.Pattern[str]) -> str:
    return f'Expected @function "{name}" to match pattern "{describe_pattern(pattern)}"'


def function_name(params: str) -> str:
    trimmed = params.strip()
    match = _FUNCTION_NAME_RE.match(trimmed)
    return match.group(0) if match else trimmed


def check_dollar_variable_pattern(
    root: Root, pattern: re.Pattern[str] | None = None
) -> list[Diagnostic]:
    compiled = pattern or DEFAULT_PATTERN
    rule_id = prefix_rule(DOLLAR_VARIABLE_PATTERN)
    diagnostics: list[Diagnostic] = []
    for decl in root.walk_decls():
        if not decl.is_variable:
            continue
        name = decl.prop[1:]
        if not matches_pattern(name, compiled):
            diagnostics.append(Diagnostic(rule_id, variable_message(name, compiled), decl))
    return diagnostics


def check_percent_placeholder_pattern(
    root: Root, pattern: re.Pattern[str] | None = None
) -> list[Diagnostic]:
    """Check every ``%placeholder`` in a selector list, one report per bad name."""
    compiled = pattern or DEFAULT_PATTERN
    rule_id = prefix_rule(PERCENT_PLACEHOLDER_PATTERN)
    diagnostics: list[Diagnostic] = []
    for rule in root.walk_rules():
        for part in rule.selector.split(","):
            part = part.strip()
            if not part.startswith("%"):
                continue
            name = part[1:]
            if not matches_pattern(name, compiled):
                diagnostics.append(Diagnostic(rule_id, placeholder_message(name, compiled), rule))
    return diagnostics


def check_at_mixin_pattern(root: Root, pattern: re.Pattern[str] | None = None) -> list[Diagnostic]:
    compiled = pattern or DEFAULT_PATTERN
    rule_id = prefix_rule(AT_MIXIN_PATTERN)
    diagnostics: list[Diagnostic] = []
    for node in root.walk_at_rules("mixin"):
        name = mixin_name(node.params)
        if name and not matches_pattern(name, compiled):
            diagnostics.append(Diagnostic(rule_id, mixin_message(name, compiled), node))
    return diagnostics


def check_at_function_pattern(
    root: Root, pattern: re.Pattern[str] | None = None
) -> list[Diagnostic]:
    compiled = pattern or DEFAULT_PATTERN
    rule_id = prefix_rule(AT_FUNCTION_PATTERN)
    diagnostics: list[Diagnostic] = []
    for node in root.walk_at_rules("function"):
        name = function_name(node.params)
        if not matches_pattern(name, compiled):
            diagnostics.append(Diagnostic(rule_id, function_message(name, compiled), node))
    return diagnostics
