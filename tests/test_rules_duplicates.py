"""Tests for sasslint.rules.duplicates: duplicate variables and mixins per scope."""

from __future__ import annotations

import pytest

from sasslint.engine.scope import ExcludeInside
from sasslint.parser import parse
from sasslint.rules.duplicates import (
    DuplicateVariableOptions,
    check_duplicate_dollar_variables,
    check_duplicate_mixins,
    parse_duplicate_variable_options,
)
from sasslint.rules.options import InvalidOptionError
from sasslint.tree.nodes import Declaration, Root

# ---------------------------------------------------------------------------
# no-duplicate-dollar-variables
# ---------------------------------------------------------------------------


class TestDuplicateDollarVariables:
    def test_second_declaration_reported(self) -> None:
        root = parse("$color: red\n$color: blue")
        diagnostics = check_duplicate_dollar_variables(root)
        assert len(diagnostics) == 1
        diag = diagnostics[0]
        assert diag.rule == "sass/no-duplicate-dollar-variables"
        assert "$color" in diag.message
        assert isinstance(diag.node, Declaration)
        assert diag.node.value == "blue"

    def test_outer_and_inner_scope(self) -> None:
        root = parse("$color: red\n.a\n  $color: blue")
        assert check_duplicate_dollar_variables(root) == []

    def test_three_declarations(self) -> None:
        root = parse("$x: 1\n$x: 2\n$x: 3")
        assert len(check_duplicate_dollar_variables(root)) == 2

    def test_properties_ignored(self) -> None:
        root = parse(".a\n  color: red\n  color: blue")
        assert check_duplicate_dollar_variables(root) == []

    def test_ignore_defaults(self) -> None:
        root = parse("$gap: 4px !default\n$gap: 8px")
        options = DuplicateVariableOptions(ignore_defaults=True)
        assert check_duplicate_dollar_variables(root, options) == []
        assert len(check_duplicate_dollar_variables(root)) == 1

    def test_ignore_defaults_skips_nodes_without_span(self) -> None:
        root = Root(source="")
        root.append(Declaration("$a", "1"))
        root.append(Declaration("$a", "2"))
        options = DuplicateVariableOptions(ignore_defaults=True)
        assert check_duplicate_dollar_variables(root, options) == []

    def test_ignore_inside_conditional(self) -> None:
        source = "$bg: white\n@if $dark\n  $bg: black\n  $bg: gray\n@else\n  $bg: white"
        root = parse(source)
        options = DuplicateVariableOptions(ignore_inside=(ExcludeInside.CONDITIONAL_BRANCH,))
        assert check_duplicate_dollar_variables(root, options) == []
        # without the option, only the re-declaration inside @if is in one scope
        assert len(check_duplicate_dollar_variables(root)) == 1

    def test_ignore_inside_any_directive(self) -> None:
        source = "@each $i in 1, 2\n  $w: 1\n  $w: 2"
        root = parse(source)
        options = DuplicateVariableOptions(ignore_inside=(ExcludeInside.ANY_DIRECTIVE,))
        assert check_duplicate_dollar_variables(root, options) == []
        conditional = DuplicateVariableOptions(ignore_inside=(ExcludeInside.CONDITIONAL_BRANCH,))
        assert len(check_duplicate_dollar_variables(root, conditional)) == 1


class TestDuplicateVariableOptions:
    def test_defaults(self) -> None:
        assert parse_duplicate_variable_options(True, {}) == DuplicateVariableOptions()

    def test_full(self) -> None:
        options = parse_duplicate_variable_options(
            True, {"ignoreDefaults": True, "ignoreInside": ["at-rule", "if-else"]}
        )
        assert options.ignore_defaults is True
        assert options.ignore_inside == (
            ExcludeInside.ANY_DIRECTIVE,
            ExcludeInside.CONDITIONAL_BRANCH,
        )

    @pytest.mark.parametrize(
        "secondary",
        [
            {"ignoreDefaults": "yes"},
            {"ignoreInside": ["loops"]},
            {"ignoreInside": [1]},
            {"unknown": True},
        ],
    )
    def test_invalid(self, secondary: dict[str, object]) -> None:
        with pytest.raises(InvalidOptionError):
            parse_duplicate_variable_options(True, secondary)


# ---------------------------------------------------------------------------
# no-duplicate-mixins
# ---------------------------------------------------------------------------


class TestDuplicateMixins:
    def test_same_name_twice(self) -> None:
        root = parse("=button\n  x: 1\n@mixin button($size)\n  x: 2")
        diagnostics = check_duplicate_mixins(root)
        assert len(diagnostics) == 1
        assert "'button'" in diagnostics[0].message

    def test_different_names(self) -> None:
        root = parse("@mixin a\n  x: 1\n@mixin b\n  x: 2")
        assert check_duplicate_mixins(root) == []

    def test_nested_scope(self) -> None:
        root = parse("@mixin a\n  x: 1\n.wrap\n  @mixin a\n    x: 2")
        assert check_duplicate_mixins(root) == []
