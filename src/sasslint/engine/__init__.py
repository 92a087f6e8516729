"""Rule-analysis engine shared by every rule."""

from sasslint.engine.classifier import ChildKind, classify_child, find_out_of_order
from sasslint.engine.diagnostic import Diagnostic, Severity, prefix_rule
from sasslint.engine.fixes import (
    Fix,
    NodeEdit,
    TextEdit,
    apply_fixes,
    fix_operator_spacing,
    fix_redundant_nesting,
    strip_redundant_nesting,
)
from sasslint.engine.patterns import DEFAULT_PATTERN, compile_pattern, matches_pattern
from sasslint.engine.scope import ExcludeInside, Occurrence, ScopeIndex, ScopeTracker
from sasslint.engine.source_span import LineIndex, slice_between, slice_original
from sasslint.engine.walker import collect, walk

__all__ = [
    "DEFAULT_PATTERN",
    "ChildKind",
    "Diagnostic",
    "ExcludeInside",
    "Fix",
    "LineIndex",
    "NodeEdit",
    "Occurrence",
    "ScopeIndex",
    "ScopeTracker",
    "Severity",
    "TextEdit",
    "apply_fixes",
    "classify_child",
    "collect",
    "compile_pattern",
    "find_out_of_order",
    "fix_operator_spacing",
    "fix_redundant_nesting",
    "matches_pattern",
    "prefix_rule",
    "slice_between",
    "slice_original",
    "strip_redundant_nesting",
    "walk",
]
