"""Source span extraction: recover original text the normalized tree discarded.

The parser normalizes values (flags dropped, colors rewritten to long hex,
``=``/``+`` shorthands renamed). Rules that need the author's exact spelling
slice it back out of the document text here. None of these helpers raise:
missing or out-of-range spans come back as ``None`` and the caller skips the
node.
"""

from __future__ import annotations

import bisect
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sasslint.tree.nodes import SourceSpan


class HasSpan(Protocol):
    span: SourceSpan | None


def _valid(span: SourceSpan, source: str) -> bool:
    return 0 <= span.start <= span.end < len(source)


def slice_original(node: HasSpan, source: str) -> str | None:
    """Return the exact text *node* was parsed from, or ``None``.

    The end offset is inclusive, so a one-character node yields one character.
    """
    span = getattr(node, "span", None)
    if span is None or not _valid(span, source):
        return None
    return source[span.start : span.end + 1]


def slice_between(left: HasSpan, right: HasSpan, source: str) -> str | None:
    """Return the text strictly between two adjacent spans.

    Used to read the operator and its surrounding whitespace in
    ``left <op> right`` without trusting the normalized tree.
    """
    left_span = getattr(left, "span", None)
    right_span = getattr(right, "span", None)
    if left_span is None or right_span is None:
        return None
    if not _valid(left_span, source) or not _valid(right_span, source):
        return None
    if right_span.start <= left_span.end:
        return None
    return source[left_span.end + 1 : right_span.start]


class LineIndex:
    """Maps byte offsets to 1-based (line, column) pairs.

    Built once per document; lookups are a binary search over line starts.
    """

    def __init__(self, source: str) -> None:
        self._starts: list[int] = [0]
        for idx, char in enumerate(source):
            if char == "\n":
                self._starts.append(idx + 1)

    def position(self, offset: int) -> tuple[int, int]:
        line = bisect.bisect_right(self._starts, offset) - 1
        line = max(line, 0)
        return line + 1, offset - self._starts[line] + 1
