"""Module-loading rules for ``@use``, ``@forward`` and ``@import``.

These read the directive's original text and match it with regular
expressions; unusual comment placement can hide a violation.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sasslint.engine.diagnostic import Diagnostic, prefix_rule
from sasslint.engine.source_span import slice_original

if TYPE_CHECKING:
    from sasslint.tree.nodes import Root

AT_USE_NO_REDUNDANT_ALIAS = "at-use-no-redundant-alias"
AT_USE_NO_UNNAMESPACED = "at-use-no-unnamespaced"
NO_DUPLICATE_LOAD_RULES = "no-duplicate-load-rules"

MSG_UNNAMESPACED = "Unexpected @use with `as *`. Use an explicit namespace instead"

LOAD_DIRECTIVES: tuple[str, ...] = ("use", "forward", "import")

_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_ALIAS_RE = re.compile(r"\bas\s+(\S+)\s*$")
_UNNAMESPACED_RE = re.compile(r"\bas\s+\*\s*(?:with\s*\(|$)", re.IGNORECASE)
_QUOTED_URL_RE = re.compile(r"(['\"])(.+?)\1")
_LOAD_URL_RE = re.compile(r"['\"]([^'\"]+)['\"]")
_STYLESHEET_EXT_RE = re.compile(r"\.(sass|scss|css)$")
_EXTENSION_RE = re.compile(r"\.[^.]+$")


def redundant_alias_message(alias: str) -> str:
    return f"Unexpected redundant alias '{alias}'. The default namespace is already '{alias}'"


def duplicate_load_message(directive: str, url: str) -> str:
    return f"Unexpected duplicate @{directive} of '{url}'"


def strip_comments(text: str) -> str:
    return _BLOCK_COMMENT_RE.sub("", _LINE_COMMENT_RE.sub("", text)).strip()


def default_namespace(url: str) -> str:
    """Namespace ``@use`` assigns without ``as``.

    ``sass:math`` gives ``math``; ``"theme/_colors.sass"`` gives ``colors``.
    """
    if url.startswith("sass:"):
        return url[len("sass:") :]
    last_segment = url.rsplit("/", 1)[-1]
    stem = _EXTENSION_RE.sub("", last_segment)
    return stem[1:] if stem.startswith("_") else stem


def check_use_no_redundant_alias(root: Root, options: None = None) -> list[Diagnostic]:
    rule_id = prefix_rule(AT_USE_NO_REDUNDANT_ALIAS)
    diagnostics: list[Diagnostic] = []
    for node in root.walk_at_rules("use"):
        original = slice_original(node, root.source)
        if original is None:
            continue
        alias_match = _ALIAS_RE.search(strip_comments(original))
        if alias_match is None or alias_match.group(1) == "*":
            continue
        url_match = _QUOTED_URL_RE.search(original)
        if url_match is None:
            continue
        alias = alias_match.group(1)
        if alias == default_namespace(url_match.group(2)):
            diagnostics.append(Diagnostic(rule_id, redundant_alias_message(alias), node))
    return diagnostics


def check_use_no_unnamespaced(root: Root, options: None = None) -> list[Diagnostic]:
    rule_id = prefix_rule(AT_USE_NO_UNNAMESPACED)
    diagnostics: list[Diagnostic] = []
    for node in root.walk_at_rules("use"):
        original = slice_original(node, root.source)
        if original is None:
            continue
        if _UNNAMESPACED_RE.search(strip_comments(original)):
            diagnostics.append(Diagnostic(rule_id, MSG_UNNAMESPACED, node))
    return diagnostics


def check_no_duplicate_load_rules(root: Root, options: None = None) -> list[Diagnostic]:
    """Report a second load of the same URL by the same directive.

    ``.sass``/``.scss``/``.css`` extensions are ignored when comparing, so
    ``"a"`` and ``"a.sass"`` are the same module.
    """
    rule_id = prefix_rule(NO_DUPLICATE_LOAD_RULES)
    seen: dict[str, set[str]] = {}
    diagnostics: list[Diagnostic] = []
    for node in root.walk_at_rules(*LOAD_DIRECTIVES):
        match = _LOAD_URL_RE.search(node.params)
        if match is None:
            continue
        url = match.group(1)
        normalized = _STYLESHEET_EXT_RE.sub("", url)
        urls = seen.setdefault(node.name, set())
        if normalized in urls:
            diagnostics.append(Diagnostic(rule_id, duplicate_load_message(node.name, url), node))
        else:
            urls.add(normalized)
    return diagnostics
