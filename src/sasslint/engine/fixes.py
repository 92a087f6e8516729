"""Autofix instructions and the single pass that applies them.

Rules never mutate the tree. A fixable rule builds a :class:`Fix` describing
the change: node-field assignments (:class:`NodeEdit`) so the tree matches
the corrected text, and source replacements (:class:`TextEdit`) so the host
can write the corrected document. :func:`apply_fixes` runs after every rule
has finished.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sasslint.engine.source_span import slice_between

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sasslint.tree.expressions import BinaryOp
    from sasslint.tree.nodes import Root, Rule

logger = logging.getLogger(__name__)

_REDUNDANT_NESTING_RE = re.compile(r"^&\s+")
_NESTING_PREFIX_RE = re.compile(r"&\s+")


@dataclass(frozen=True)
class TextEdit:
    """Replace ``source[start:end]`` (end exclusive) with *replacement*."""

    start: int
    end: int
    replacement: str


@dataclass(frozen=True)
class NodeEdit:
    """Assign *value* to ``target.<attribute>``."""

    target: object
    attribute: str
    value: object


@dataclass(frozen=True)
class Fix:
    node_edits: tuple[NodeEdit, ...] = ()
    text_edits: tuple[TextEdit, ...] = ()


# ---------------------------------------------------------------------------
# Fix builders (pure)
# ---------------------------------------------------------------------------


def fix_operator_spacing(binop: BinaryOp, source: str) -> Fix | None:
    """Build the fix putting exactly one space on each side of *binop*'s operator.

    Operand text is left untouched. Returns ``None`` when spans are missing.
    """
    between = slice_between(binop.left, binop.right, source)
    if between is None or binop.left.span is None or binop.right.span is None:
        return None
    return Fix(
        node_edits=(
            NodeEdit(binop, "before_operator", " "),
            NodeEdit(binop, "after_operator", " "),
        ),
        text_edits=(
            TextEdit(binop.left.span.end + 1, binop.right.span.start, f" {binop.operator} "),
        ),
    )


def has_redundant_nesting(part: str) -> bool:
    """True if a selector part starts with ``&`` followed by whitespace."""
    return _REDUNDANT_NESTING_RE.match(part.strip()) is not None


def strip_redundant_nesting(selector: str) -> str:
    """Drop the leading ``& `` from every comma-separated part that has one.

    Parts using ``&`` meaningfully (``&:hover``, ``&--mod``, ``.a &``) are
    returned unchanged, as is the whitespace around each part.
    """
    parts = selector.split(",")
    fixed = [
        _NESTING_PREFIX_RE.sub("", part, count=1) if has_redundant_nesting(part) else part
        for part in parts
    ]
    return ",".join(fixed)


def fix_redundant_nesting(rule: Rule) -> Fix:
    new_selector = strip_redundant_nesting(rule.selector)
    text_edits: tuple[TextEdit, ...] = ()
    if rule.selector_span is not None:
        text_edits = (
            TextEdit(rule.selector_span.start, rule.selector_span.end + 1, new_selector),
        )
    return Fix(node_edits=(NodeEdit(rule, "selector", new_selector),), text_edits=text_edits)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def apply_text_edits(source: str, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits to *source*; later overlapping edits are dropped."""
    accepted: list[TextEdit] = []
    for edit in sorted(set(edits), key=lambda e: (e.start, e.end)):
        if accepted and edit.start < accepted[-1].end:
            logger.debug("Skipping overlapping edit at %d-%d", edit.start, edit.end)
            continue
        accepted.append(edit)

    result = source
    for edit in reversed(accepted):
        result = result[: edit.start] + edit.replacement + result[edit.end :]
    return result


def apply_fixes(root: Root, fixes: Iterable[Fix]) -> str:
    """Apply every fix to the tree and return the corrected document text.

    This is the only place the tree is mutated. Applying the same fixes twice
    yields the same tree and text.
    """
    fix_list = list(fixes)
    for fix in fix_list:
        for edit in fix.node_edits:
            setattr(edit.target, edit.attribute, edit.value)
    fixed = apply_text_edits(root.source, (e for f in fix_list for e in f.text_edits))
    logger.debug("Applied %d fix(es)", len(fix_list))
    return fixed
