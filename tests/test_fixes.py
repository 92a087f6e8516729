"""Tests for sasslint.engine.fixes: fix builders and the application pass."""

from __future__ import annotations

import pytest

from sasslint.engine.fixes import (
    Fix,
    NodeEdit,
    TextEdit,
    apply_fixes,
    apply_text_edits,
    fix_operator_spacing,
    fix_redundant_nesting,
    has_redundant_nesting,
    strip_redundant_nesting,
)
from sasslint.parser import parse
from sasslint.tree.expressions import BinaryOp, VariableRef
from sasslint.tree.nodes import Rule

# ---------------------------------------------------------------------------
# Redundant nesting selector
# ---------------------------------------------------------------------------


class TestStripRedundantNesting:
    def test_single_part(self) -> None:
        assert strip_redundant_nesting("& .child") == ".child"

    def test_list_fixed_per_part(self) -> None:
        assert strip_redundant_nesting("& .a, &:hover, & > .b") == ".a, &:hover, > .b"

    @pytest.mark.parametrize("selector", ["&:hover", "&--mod", ".a &", "&.active", ".plain"])
    def test_meaningful_ampersand_kept(self, selector: str) -> None:
        assert strip_redundant_nesting(selector) == selector
        assert not has_redundant_nesting(selector)

    def test_idempotent(self) -> None:
        once = strip_redundant_nesting("& .a, & .b")
        assert strip_redundant_nesting(once) == once


class TestFixRedundantNesting:
    def test_updates_tree_and_text(self) -> None:
        source = ".card\n  & .title\n    color: red"
        root = parse(source)
        nested = list(root.walk_rules())[1]
        fixed = apply_fixes(root, [fix_redundant_nesting(nested)])
        assert nested.selector == ".title"
        assert fixed == ".card\n  .title\n    color: red"

    def test_without_span_only_edits_tree(self) -> None:
        rule = Rule("& .x")
        fix = fix_redundant_nesting(rule)
        assert fix.text_edits == ()
        assert fix.node_edits == (NodeEdit(rule, "selector", ".x"),)


# ---------------------------------------------------------------------------
# Operator spacing
# ---------------------------------------------------------------------------


class TestFixOperatorSpacing:
    def test_inserts_single_spaces(self) -> None:
        source = ".box\n  width: $a+$b"
        root = parse(source)
        decl = next(root.walk_decls())
        binop = decl.expression
        assert isinstance(binop, BinaryOp)
        fix = fix_operator_spacing(binop, source)
        assert fix is not None
        fixed = apply_fixes(root, [fix])
        assert "$a + $b" in fixed
        assert binop.before_operator == " "
        assert binop.after_operator == " "
        assert str(binop) == "$a + $b"

    def test_normalizes_uneven_spacing(self) -> None:
        source = "$w: $a   *$b"
        root = parse(source)
        binop = next(root.walk_decls()).expression
        assert isinstance(binop, BinaryOp)
        fix = fix_operator_spacing(binop, source)
        assert fix is not None
        assert apply_fixes(root, [fix]) == "$w: $a * $b"

    def test_operands_untouched(self) -> None:
        source = "$w: math.div($a,2)*$b"
        root = parse(source)
        binop = next(root.walk_decls()).expression
        assert isinstance(binop, BinaryOp)
        fix = fix_operator_spacing(binop, source)
        assert fix is not None
        assert apply_fixes(root, [fix]) == "$w: math.div($a,2) * $b"

    def test_missing_spans(self) -> None:
        binop = BinaryOp(VariableRef("a"), "+", VariableRef("b"))
        assert fix_operator_spacing(binop, "$a+$b") is None

    def test_applying_twice_is_idempotent(self) -> None:
        source = ".box\n  width: $a+$b"
        root = parse(source)
        binop = next(root.walk_decls()).expression
        assert isinstance(binop, BinaryOp)
        fix = fix_operator_spacing(binop, source)
        assert fix is not None
        once = apply_fixes(root, [fix])
        twice = apply_fixes(root, [fix, fix])
        assert once == twice


# ---------------------------------------------------------------------------
# Text edits
# ---------------------------------------------------------------------------


class TestApplyTextEdits:
    def test_edits_applied_right_to_left(self) -> None:
        edits = [TextEdit(0, 1, "X"), TextEdit(4, 5, "Y")]
        assert apply_text_edits("abcdef", edits) == "XbcdYf"

    def test_overlapping_edit_dropped(self) -> None:
        edits = [TextEdit(0, 3, "X"), TextEdit(2, 4, "Y")]
        assert apply_text_edits("abcdef", edits) == "Xdef"

    def test_no_edits(self) -> None:
        assert apply_text_edits("abc", []) == "abc"

    def test_empty_fix_list(self) -> None:
        root = parse(".a\n  color: red")
        assert apply_fixes(root, []) == root.source

    def test_fix_defaults(self) -> None:
        assert Fix() == Fix((), ())
