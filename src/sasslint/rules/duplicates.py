"""Duplicate-name rules: ``$variables`` and ``@mixin`` definitions within one scope."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sasslint.engine.diagnostic import Diagnostic, prefix_rule
from sasslint.engine.scope import ExcludeInside, Occurrence, ScopeIndex, ScopeTracker
from sasslint.engine.source_span import slice_original
from sasslint.rules.options import (
    InvalidOptionError,
    bool_option,
    check_keys,
    require_enabled,
    string_list_option,
)
from sasslint.rules.ordering import mixin_name

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sasslint.tree.nodes import Declaration, Root

NO_DUPLICATE_DOLLAR_VARIABLES = "no-duplicate-dollar-variables"
NO_DUPLICATE_MIXINS = "no-duplicate-mixins"


def duplicate_variable_message(name: str) -> str:
    return f"Unexpected duplicate variable declaration '{name}'"


def duplicate_mixin_message(name: str) -> str:
    return f"Unexpected duplicate mixin definition '{name}'"


@dataclass(frozen=True)
class DuplicateVariableOptions:
    """Options for ``no-duplicate-dollar-variables``.

    Attributes:
        ignore_defaults: Skip declarations flagged ``!default``.
        ignore_inside: Skip declarations nested in matching directives.
    """

    ignore_defaults: bool = False
    ignore_inside: tuple[ExcludeInside, ...] = ()


def parse_duplicate_variable_options(
    primary: object, secondary: Mapping[str, object]
) -> DuplicateVariableOptions:
    require_enabled(primary)
    check_keys(secondary, ("ignoreDefaults", "ignoreInside"))
    ignore_defaults = bool_option(secondary, "ignoreDefaults", default=False)
    try:
        ignore_inside = tuple(
            ExcludeInside.parse(v) for v in string_list_option(secondary, "ignoreInside") or ()
        )
    except ValueError as exc:
        raise InvalidOptionError(str(exc)) from exc
    return DuplicateVariableOptions(ignore_defaults=ignore_defaults, ignore_inside=ignore_inside)


def _is_default(decl: Declaration, source: str) -> bool | None:
    """True if the declaration's own text carries ``!default``; None without a span."""
    raw = slice_original(decl, source)
    if raw is None:
        return None
    return "!default" in raw


def check_duplicate_dollar_variables(
    root: Root, options: DuplicateVariableOptions | None = None
) -> list[Diagnostic]:
    opts = options or DuplicateVariableOptions()
    index = ScopeIndex.build(root)
    tracker = ScopeTracker(index)
    rule_id = prefix_rule(NO_DUPLICATE_DOLLAR_VARIABLES)
    diagnostics: list[Diagnostic] = []

    for decl in root.walk_decls():
        if not decl.is_variable:
            continue
        if opts.ignore_inside and index.is_inside(decl, opts.ignore_inside):
            continue
        if opts.ignore_defaults:
            is_default = _is_default(decl, root.source)
            if is_default is None or is_default:
                continue
        if tracker.record(decl, decl.prop) is Occurrence.DUPLICATE:
            diagnostics.append(Diagnostic(rule_id, duplicate_variable_message(decl.prop), decl))
    return diagnostics


def check_duplicate_mixins(root: Root, options: None = None) -> list[Diagnostic]:
    tracker = ScopeTracker(ScopeIndex.build(root))
    rule_id = prefix_rule(NO_DUPLICATE_MIXINS)
    diagnostics: list[Diagnostic] = []
    for node in root.walk_at_rules("mixin"):
        name = mixin_name(node.params)
        if not name:
            continue
        if tracker.record(node, name) is Occurrence.DUPLICATE:
            diagnostics.append(Diagnostic(rule_id, duplicate_mixin_message(name), node))
    return diagnostics
