"""Registry of every rule: id, description, check function and option parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sasslint.engine.diagnostic import NAMESPACE, prefix_rule
from sasslint.rules import directives, duplicates, expressions, modules, naming, ordering, selectors
from sasslint.rules.options import no_options

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from sasslint.engine.diagnostic import Diagnostic
    from sasslint.tree.nodes import Root

    CheckFn = Callable[[Root, Any], list[Diagnostic]]
    OptionParser = Callable[[object, Mapping[str, object]], Any]


@dataclass(frozen=True)
class RuleDefinition:
    """A lint rule.

    Attributes:
        name: Unprefixed rule name, e.g. ``no-debug``.
        description: One-line summary shown by ``sasslint rules``.
        check: ``check(root, options) -> list[Diagnostic]``.
        parse_options: Turns the configured primary and secondary options
            into the value passed to ``check``; raises ``InvalidOptionError``.
        fixable: Whether diagnostics carry automatic fixes.
    """

    name: str
    description: str
    check: CheckFn
    parse_options: OptionParser = no_options
    fixable: bool = False

    @property
    def rule_id(self) -> str:
        return prefix_rule(self.name)


ALL_RULES: tuple[RuleDefinition, ...] = (
    RuleDefinition(
        ordering.DECLARATIONS_BEFORE_NESTING,
        "Require declarations before nested rules",
        ordering.check_declarations_before_nesting,
    ),
    RuleDefinition(
        ordering.EXTENDS_BEFORE_DECLARATIONS,
        "Require @extend before declarations",
        ordering.check_extends_before_declarations,
    ),
    RuleDefinition(
        ordering.MIXINS_BEFORE_DECLARATIONS,
        "Require @include before declarations",
        ordering.check_mixins_before_declarations,
        ordering.parse_mixin_order_options,
    ),
    RuleDefinition(
        duplicates.NO_DUPLICATE_DOLLAR_VARIABLES,
        "Disallow re-declaring a $variable in the same scope",
        duplicates.check_duplicate_dollar_variables,
        duplicates.parse_duplicate_variable_options,
    ),
    RuleDefinition(
        duplicates.NO_DUPLICATE_MIXINS,
        "Disallow defining a mixin twice in the same scope",
        duplicates.check_duplicate_mixins,
    ),
    RuleDefinition(
        expressions.OPERATOR_NO_UNSPACED,
        "Require spaces around math and comparison operators",
        expressions.check_operator_no_unspaced,
        fixable=True,
    ),
    RuleDefinition(
        expressions.NO_COLOR_LITERALS,
        "Disallow color literals outside variables",
        expressions.check_no_color_literals,
        expressions.parse_color_literal_options,
    ),
    RuleDefinition(
        expressions.DIMENSION_NO_NON_NUMERIC_VALUES,
        "Disallow building dimensions from strings or interpolation",
        expressions.check_dimension_no_non_numeric_values,
    ),
    RuleDefinition(
        naming.DOLLAR_VARIABLE_PATTERN,
        "Enforce a naming pattern for $variables",
        naming.check_dollar_variable_pattern,
        naming.parse_pattern_option,
    ),
    RuleDefinition(
        naming.PERCENT_PLACEHOLDER_PATTERN,
        "Enforce a naming pattern for %placeholders",
        naming.check_percent_placeholder_pattern,
        naming.parse_pattern_option,
    ),
    RuleDefinition(
        naming.AT_MIXIN_PATTERN,
        "Enforce a naming pattern for mixins",
        naming.check_at_mixin_pattern,
        naming.parse_pattern_option,
    ),
    RuleDefinition(
        naming.AT_FUNCTION_PATTERN,
        "Enforce a naming pattern for functions",
        naming.check_at_function_pattern,
        naming.parse_pattern_option,
    ),
    RuleDefinition(
        selectors.SELECTOR_NO_REDUNDANT_NESTING_SELECTOR,
        "Disallow a leading & that adds nothing",
        selectors.check_redundant_nesting_selector,
        fixable=True,
    ),
    RuleDefinition(
        selectors.SELECTOR_NO_UNION_CLASS_NAME,
        "Disallow class names built by appending to &",
        selectors.check_union_class_name,
    ),
    RuleDefinition(
        modules.AT_USE_NO_REDUNDANT_ALIAS,
        "Disallow @use aliases equal to the default namespace",
        modules.check_use_no_redundant_alias,
    ),
    RuleDefinition(
        modules.AT_USE_NO_UNNAMESPACED,
        "Disallow @use ... as *",
        modules.check_use_no_unnamespaced,
    ),
    RuleDefinition(
        modules.NO_DUPLICATE_LOAD_RULES,
        "Disallow loading the same module twice",
        modules.check_no_duplicate_load_rules,
    ),
    RuleDefinition(
        directives.AT_EXTEND_NO_MISSING_PLACEHOLDER,
        "Require @extend to target a %placeholder",
        directives.check_extend_no_missing_placeholder,
    ),
    RuleDefinition(
        directives.AT_IF_NO_NULL,
        "Disallow comparing with null in @if",
        directives.check_if_no_null,
    ),
    RuleDefinition(
        directives.NO_GLOBAL_FUNCTION_NAMES,
        "Disallow global built-ins that have module replacements",
        directives.check_no_global_function_names,
    ),
    RuleDefinition(directives.NO_DEBUG, "Disallow @debug", directives.check_no_debug),
    RuleDefinition(directives.NO_WARN, "Disallow @warn", directives.check_no_warn),
    RuleDefinition(directives.NO_IMPORT, "Disallow @import", directives.check_no_import),
)

RULES_BY_ID: dict[str, RuleDefinition] = {rule.rule_id: rule for rule in ALL_RULES}


def get_rule(rule_id: str) -> RuleDefinition | None:
    """Look a rule up by id; the ``sass/`` prefix is optional."""
    if not rule_id.startswith(f"{NAMESPACE}/"):
        rule_id = prefix_rule(rule_id)
    return RULES_BY_ID.get(rule_id)
