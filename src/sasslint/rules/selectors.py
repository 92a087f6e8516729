"""Selector rules around the parent selector ``&``."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sasslint.engine.diagnostic import Diagnostic, prefix_rule
from sasslint.engine.fixes import fix_redundant_nesting, has_redundant_nesting
from sasslint.tree.nodes import Root

if TYPE_CHECKING:
    from sasslint.tree.nodes import Rule

SELECTOR_NO_REDUNDANT_NESTING_SELECTOR = "selector-no-redundant-nesting-selector"
SELECTOR_NO_UNION_CLASS_NAME = "selector-no-union-class-name"

MSG_REDUNDANT_NESTING = "Unexpected redundant nesting selector (&)"
MSG_UNION_CLASS_NAME = "Unexpected union class name with parent selector (&)"

_UNION_RE = re.compile(r"&[a-zA-Z0-9_-]")


def _is_nested(rule: Rule) -> bool:
    return rule.parent is not None and not isinstance(rule.parent, Root)


def check_redundant_nesting_selector(root: Root, options: None = None) -> list[Diagnostic]:
    """Report nested rules whose selector starts with ``& `` (once per rule, fixable)."""
    rule_id = prefix_rule(SELECTOR_NO_REDUNDANT_NESTING_SELECTOR)
    return [
        Diagnostic(rule_id, MSG_REDUNDANT_NESTING, rule, fix=fix_redundant_nesting(rule))
        for rule in root.walk_rules()
        if _is_nested(rule) and any(has_redundant_nesting(p) for p in rule.selector.split(","))
    ]


def check_union_class_name(root: Root, options: None = None) -> list[Diagnostic]:
    """Report each selector part that glues ``&`` to a suffix (``&-item``, ``&__el``)."""
    rule_id = prefix_rule(SELECTOR_NO_UNION_CLASS_NAME)
    return [
        Diagnostic(rule_id, MSG_UNION_CLASS_NAME, rule)
        for rule in root.walk_rules()
        for part in rule.selector.split(",")
        if _UNION_RE.search(part.strip())
    ]
