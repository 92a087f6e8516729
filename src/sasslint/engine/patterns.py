"""Naming pattern compilation for the *-pattern rules."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

# lowercase words of letters/digits joined by single hyphens, starting with a letter
DEFAULT_PATTERN: re.Pattern[str] = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")


def compile_pattern(pattern: object) -> re.Pattern[str] | None:
    """Turn a configured pattern into a compiled regex.

    ``None`` and ``True`` select :data:`DEFAULT_PATTERN`. Strings may be wrapped
    in one pair of ``/`` delimiters (``"/^[a-z]+$/"``); flags inside the
    delimiters are not supported. Returns ``None`` for anything that does not
    compile, in which case the calling rule does nothing for the document.
    """
    if pattern is None or pattern is True:
        return DEFAULT_PATTERN
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str):
        return None

    text = pattern
    if len(text) >= 2 and text.startswith("/") and text.endswith("/"):
        text = text[1:-1]

    try:
        return re.compile(text)
    except re.error as exc:
        logger.debug("Invalid naming pattern %r: %s", pattern, exc)
        return None


def matches_pattern(name: str, pattern: re.Pattern[str]) -> bool:
    """Return True if the whole of *name* matches *pattern*."""
    return pattern.fullmatch(name) is not None


def describe_pattern(pattern: re.Pattern[str]) -> str:
    return f"/{pattern.pattern}/"
