"""Tests for sasslint.rules.ordering: child ordering inside selector blocks."""

from __future__ import annotations

import pytest

from sasslint.parser import parse
from sasslint.rules.options import InvalidOptionError
from sasslint.rules.ordering import (
    MSG_DECLARATIONS_BEFORE_NESTING,
    MSG_EXTENDS_BEFORE_DECLARATIONS,
    MSG_MIXINS_BEFORE_DECLARATIONS,
    MixinOrderOptions,
    check_declarations_before_nesting,
    check_extends_before_declarations,
    check_mixins_before_declarations,
    mixin_name,
    parse_mixin_order_options,
)
from sasslint.tree.nodes import Declaration

# ---------------------------------------------------------------------------
# declarations-before-nesting
# ---------------------------------------------------------------------------


class TestDeclarationsBeforeNesting:
    def test_declaration_after_nested_rule(self) -> None:
        source = ".card\n  .title\n    font-weight: bold\n  padding: 16px"
        diagnostics = check_declarations_before_nesting(parse(source))
        assert len(diagnostics) == 1
        diag = diagnostics[0]
        assert diag.rule == "sass/declarations-before-nesting"
        assert diag.message == MSG_DECLARATIONS_BEFORE_NESTING
        assert isinstance(diag.node, Declaration)
        assert diag.node.prop == "padding"

    def test_one_per_offending_declaration(self) -> None:
        source = ".a\n  .b\n    x: 1\n  c: 1\n  $d: 2"
        assert len(check_declarations_before_nesting(parse(source))) == 2

    def test_declarations_first(self) -> None:
        source = ".card\n  padding: 16px\n  .title\n    font-weight: bold"
        assert check_declarations_before_nesting(parse(source)) == []

    def test_nested_blocks_checked_independently(self) -> None:
        source = ".a\n  .b\n    .c\n      x: 1\n    y: 2"
        diagnostics = check_declarations_before_nesting(parse(source))
        assert [d.node.prop for d in diagnostics] == ["y"]  # type: ignore[attr-defined]

    def test_directive_blocks_are_not_rules(self) -> None:
        """Children of @media are not scanned; only selector blocks are."""
        source = "@media print\n  .a\n    x: 1\n  y: 2"
        assert check_declarations_before_nesting(parse(source)) == []


# ---------------------------------------------------------------------------
# extends-before-declarations
# ---------------------------------------------------------------------------


class TestExtendsBeforeDeclarations:
    def test_extend_after_declaration(self) -> None:
        source = ".btn\n  color: red\n  @extend %button"
        diagnostics = check_extends_before_declarations(parse(source))
        assert len(diagnostics) == 1
        assert diagnostics[0].message == MSG_EXTENDS_BEFORE_DECLARATIONS

    def test_extend_first(self) -> None:
        source = ".btn\n  @extend %button\n  color: red"
        assert check_extends_before_declarations(parse(source)) == []


# ---------------------------------------------------------------------------
# mixins-before-declarations
# ---------------------------------------------------------------------------


class TestMixinsBeforeDeclarations:
    def test_include_after_declaration(self) -> None:
        source = ".a\n  color: red\n  @include shadow\n  +rounded(4px)"
        diagnostics = check_mixins_before_declarations(parse(source))
        assert len(diagnostics) == 2
        assert all(d.message == MSG_MIXINS_BEFORE_DECLARATIONS for d in diagnostics)

    def test_ignored_mixins(self) -> None:
        source = ".a\n  color: red\n  +breakpoint(md)\n    x: 1\n  @include shadow"
        options = MixinOrderOptions(ignore=frozenset({"breakpoint"}))
        diagnostics = check_mixins_before_declarations(parse(source), options)
        assert len(diagnostics) == 1
        assert diagnostics[0].node.params == "shadow"  # type: ignore[attr-defined]

    def test_includes_first(self) -> None:
        source = ".a\n  +shadow\n  color: red"
        assert check_mixins_before_declarations(parse(source)) == []


class TestMixinOptions:
    @pytest.mark.parametrize(
        ("params", "name"),
        [("shadow", "shadow"), ("shadow(1px)", "shadow"), ("foo bar", "foo"), ("  m  ", "m")],
    )
    def test_mixin_name(self, params: str, name: str) -> None:
        assert mixin_name(params) == name

    def test_parse_ignore_list(self) -> None:
        options = parse_mixin_order_options(True, {"ignore": ["a", "b"]})
        assert options.ignore == frozenset({"a", "b"})

    def test_parse_single_string(self) -> None:
        assert parse_mixin_order_options(True, {"ignore": "a"}).ignore == frozenset({"a"})

    def test_defaults(self) -> None:
        assert parse_mixin_order_options(True, {}) == MixinOrderOptions()

    def test_rejects_unknown_key(self) -> None:
        with pytest.raises(InvalidOptionError, match="unknown"):
            parse_mixin_order_options(True, {"ignores": ["a"]})

    def test_rejects_non_true_primary(self) -> None:
        with pytest.raises(InvalidOptionError):
            parse_mixin_order_options("yes", {})
