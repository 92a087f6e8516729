"""Ordering rules for the children of a selector block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sasslint.engine.classifier import ChildKind, find_out_of_order
from sasslint.engine.diagnostic import Diagnostic, prefix_rule
from sasslint.rules.options import check_keys, require_enabled, string_list_option
from sasslint.tree.nodes import AtRule

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sasslint.tree.nodes import Root

DECLARATIONS_BEFORE_NESTING = "declarations-before-nesting"
EXTENDS_BEFORE_DECLARATIONS = "extends-before-declarations"
MIXINS_BEFORE_DECLARATIONS = "mixins-before-declarations"

MSG_DECLARATIONS_BEFORE_NESTING = "Declarations must come before nested rules"
MSG_EXTENDS_BEFORE_DECLARATIONS = "@extend must come before declarations"
MSG_MIXINS_BEFORE_DECLARATIONS = "@include must come before declarations"


@dataclass(frozen=True)
class MixinOrderOptions:
    ignore: frozenset[str] = frozenset()


def mixin_name(params: str) -> str:
    """Name part of ``@mixin``/``@include`` parameters: up to ``(`` or whitespace."""
    trimmed = params.strip()
    end = len(trimmed)
    for idx, char in enumerate(trimmed):
        if char == "(" or char.isspace():
            end = idx
            break
    return trimmed[:end]


def parse_mixin_order_options(
    primary: object, secondary: Mapping[str, object]
) -> MixinOrderOptions:
    require_enabled(primary)
    check_keys(secondary, ("ignore",))
    ignore = string_list_option(secondary, "ignore") or ()
    return MixinOrderOptions(ignore=frozenset(ignore))


def check_declarations_before_nesting(root: Root, options: None = None) -> list[Diagnostic]:
    rule_id = prefix_rule(DECLARATIONS_BEFORE_NESTING)
    return [
        Diagnostic(rule_id, MSG_DECLARATIONS_BEFORE_NESTING, node)
        for rule in root.walk_rules()
        for node in find_out_of_order(
            rule, seen=ChildKind.NESTED_RULE, offending=ChildKind.DECLARATION
        )
    ]


def check_extends_before_declarations(root: Root, options: None = None) -> list[Diagnostic]:
    rule_id = prefix_rule(EXTENDS_BEFORE_DECLARATIONS)
    return [
        Diagnostic(rule_id, MSG_EXTENDS_BEFORE_DECLARATIONS, node)
        for rule in root.walk_rules()
        for node in find_out_of_order(rule, seen=ChildKind.DECLARATION, offending=ChildKind.EXTEND)
    ]


def check_mixins_before_declarations(
    root: Root, options: MixinOrderOptions | None = None
) -> list[Diagnostic]:
    """Report ``@include`` after a declaration, unless the mixin is in ``ignore``."""
    ignore = options.ignore if options is not None else frozenset()
    rule_id = prefix_rule(MIXINS_BEFORE_DECLARATIONS)
    diagnostics: list[Diagnostic] = []
    for rule in root.walk_rules():
        for node in find_out_of_order(
            rule, seen=ChildKind.DECLARATION, offending=ChildKind.INCLUDE
        ):
            if isinstance(node, AtRule) and mixin_name(node.params) in ignore:
                continue
            diagnostics.append(Diagnostic(rule_id, MSG_MIXINS_BEFORE_DECLARATIONS, node))
    return diagnostics
