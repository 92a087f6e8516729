"""Tests for sasslint.engine.scope: scope index and duplicate tracking."""

from __future__ import annotations

import pytest

from sasslint.engine.scope import ExcludeInside, Occurrence, ScopeIndex, ScopeTracker
from sasslint.parser import parse
from sasslint.tree.nodes import Declaration, Root, Rule

# ---------------------------------------------------------------------------
# ExcludeInside
# ---------------------------------------------------------------------------


class TestExcludeInside:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("if-else", ExcludeInside.CONDITIONAL_BRANCH),
            ("conditional-branch", ExcludeInside.CONDITIONAL_BRANCH),
            ("at-rule", ExcludeInside.ANY_DIRECTIVE),
            ("any-directive", ExcludeInside.ANY_DIRECTIVE),
        ],
    )
    def test_parse_aliases(self, text: str, expected: ExcludeInside) -> None:
        assert ExcludeInside.parse(text) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="ignoreInside"):
            ExcludeInside.parse("loops")

    def test_matches(self) -> None:
        assert ExcludeInside.CONDITIONAL_BRANCH.matches("if")
        assert ExcludeInside.CONDITIONAL_BRANCH.matches("else")
        assert not ExcludeInside.CONDITIONAL_BRANCH.matches("each")
        assert ExcludeInside.ANY_DIRECTIVE.matches("each")


# ---------------------------------------------------------------------------
# ScopeIndex
# ---------------------------------------------------------------------------


class TestScopeIndex:
    def test_scope_is_owning_container(self) -> None:
        root = parse("$a: 1\n.x\n  $a: 2")
        outer, inner = list(root.walk_decls())
        index = ScopeIndex.build(root)
        assert index.scope_of(outer) is root
        assert isinstance(index.scope_of(inner), Rule)

    def test_directive_ancestry_nearest_first(self) -> None:
        root = parse("@each $i in 1, 2\n  @if $i == 1\n    $x: 1")
        decl = next(root.walk_decls())
        index = ScopeIndex.build(root)
        assert index.directives[decl] == ("if", "each")

    def test_rules_do_not_count_as_directives(self) -> None:
        root = parse(".a\n  $x: 1")
        decl = next(root.walk_decls())
        index = ScopeIndex.build(root)
        assert index.directives[decl] == ()
        assert not index.is_inside(decl, [ExcludeInside.ANY_DIRECTIVE])

    def test_is_inside(self) -> None:
        root = parse("@if $dark\n  $bg: black\n@each $i in 1\n  $bg: white")
        in_if, in_each = list(root.walk_decls())
        index = ScopeIndex.build(root)
        assert index.is_inside(in_if, [ExcludeInside.CONDITIONAL_BRANCH])
        assert not index.is_inside(in_each, [ExcludeInside.CONDITIONAL_BRANCH])
        assert index.is_inside(in_each, [ExcludeInside.ANY_DIRECTIVE])

    def test_unindexed_node_falls_back_to_parent(self) -> None:
        root = Root()
        rule = Rule(".a")
        root.append(rule)
        index = ScopeIndex.build(root)
        late = Declaration("$x", "1")
        rule.append(late)
        assert index.scope_of(late) is rule


# ---------------------------------------------------------------------------
# ScopeTracker
# ---------------------------------------------------------------------------


class TestScopeTracker:
    def test_second_occurrence_in_scope_is_duplicate(self) -> None:
        root = parse("$color: red\n$color: blue")
        first, second = list(root.walk_decls())
        tracker = ScopeTracker(ScopeIndex.build(root))
        assert tracker.record(first, "$color") is Occurrence.FIRST
        assert tracker.record(second, "$color") is Occurrence.DUPLICATE

    def test_shadowing_in_nested_scope_is_allowed(self) -> None:
        root = parse("$color: red\n.a\n  $color: blue")
        outer, inner = list(root.walk_decls())
        tracker = ScopeTracker(ScopeIndex.build(root))
        assert tracker.record(outer, "$color") is Occurrence.FIRST
        assert tracker.record(inner, "$color") is Occurrence.FIRST

    def test_sibling_scopes_are_separate(self) -> None:
        root = parse(".a\n  $x: 1\n.b\n  $x: 2")
        first, second = list(root.walk_decls())
        tracker = ScopeTracker(ScopeIndex.build(root))
        assert tracker.record(first, "$x") is Occurrence.FIRST
        assert tracker.record(second, "$x") is Occurrence.FIRST

    def test_fresh_tracker_forgets(self) -> None:
        root = parse("$x: 1")
        decl = next(root.walk_decls())
        index = ScopeIndex.build(root)
        ScopeTracker(index).record(decl, "$x")
        assert ScopeTracker(index).record(decl, "$x") is Occurrence.FIRST
