"""Directive rules: debugging output, legacy imports, @extend targets, null checks,
and global built-in functions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sasslint.engine.diagnostic import Diagnostic, prefix_rule
from sasslint.tree.nodes import AtRule, Declaration

if TYPE_CHECKING:
    from sasslint.tree.nodes import Root

NO_DEBUG = "no-debug"
NO_WARN = "no-warn"
NO_IMPORT = "no-import"
AT_EXTEND_NO_MISSING_PLACEHOLDER = "at-extend-no-missing-placeholder"
AT_IF_NO_NULL = "at-if-no-null"
NO_GLOBAL_FUNCTION_NAMES = "no-global-function-names"

MSG_DEBUG = "Unexpected @debug statement"
MSG_WARN = "Unexpected @warn statement"
MSG_IMPORT = "Unexpected @import. Use @use or @forward instead"
MSG_EXTEND_PLACEHOLDER = "Expected a placeholder selector (e.g. %placeholder) to follow @extend"
MSG_NULL_COMPARISON = "Unexpected null comparison. Use Sass truthiness instead"

_NULL_COMPARISON_RE = re.compile(r"\bnull\b\s*(?:==|!=)|(?:==|!=)\s*\bnull\b")
_OPTIONAL_FLAG = "!optional"

# Global names replaced by module functions. CSS-native names (alpha, grayscale,
# invert, opacity, saturate, abs, max, min, round) are not listed.
MODULE_FUNCTIONS: dict[str, str] = {
    # sass:color
    "adjust-color": "color.adjust",
    "adjust-hue": "color.adjust",
    "blue": "color.blue",
    "change-color": "color.change",
    "complement": "color.complement",
    "darken": "color.adjust",
    "desaturate": "color.adjust",
    "green": "color.green",
    "hue": "color.hue",
    "ie-hex-str": "color.ie-hex-str",
    "lighten": "color.adjust",
    "lightness": "color.lightness",
    "mix": "color.mix",
    "opacify": "color.adjust",
    "red": "color.red",
    "saturation": "color.saturation",
    "scale-color": "color.scale",
    "transparentize": "color.adjust",
    "fade-in": "color.adjust",
    "fade-out": "color.adjust",
    # sass:list
    "append": "list.append",
    "index": "list.index",
    "is-bracketed": "list.is-bracketed",
    "join": "list.join",
    "length": "list.length",
    "list-separator": "list.separator",
    "nth": "list.nth",
    "set-nth": "list.set-nth",
    "zip": "list.zip",
    # sass:map
    "map-get": "map.get",
    "map-has-key": "map.has-key",
    "map-keys": "map.keys",
    "map-merge": "map.merge",
    "map-remove": "map.remove",
    "map-values": "map.values",
    # sass:math
    "ceil": "math.ceil",
    "comparable": "math.compatible",
    "floor": "math.floor",
    "percentage": "math.percentage",
    "random": "math.random",
    "unit": "math.unit",
    "unitless": "math.is-unitless",
    # sass:meta
    "call": "meta.call",
    "content-exists": "meta.content-exists",
    "feature-exists": "meta.feature-exists",
    "function-exists": "meta.function-exists",
    "get-function": "meta.get-function",
    "global-variable-exists": "meta.global-variable-exists",
    "inspect": "meta.inspect",
    "mixin-exists": "meta.mixin-exists",
    "type-of": "meta.type-of",
    "variable-exists": "meta.variable-exists",
    # sass:selector
    "is-superselector": "selector.is-superselector",
    "selector-append": "selector.append",
    "selector-extend": "selector.extend",
    "selector-nest": "selector.nest",
    "selector-parse": "selector.parse",
    "selector-replace": "selector.replace",
    "selector-unify": "selector.unify",
    "simple-selectors": "selector.simple-selectors",
    # sass:string
    "quote": "string.quote",
    "str-index": "string.index",
    "str-insert": "string.insert",
    "str-length": "string.length",
    "str-slice": "string.slice",
    "to-lower-case": "string.to-lower-case",
    "to-upper-case": "string.to-upper-case",
    "unique-id": "string.unique-id",
    "unquote": "string.unquote",
}

# longest first so "adjust-color" wins over a shorter prefix
_GLOBAL_FUNCTION_RE = re.compile(
    r"(?<![.$\w-])(?:"
    + "|".join(re.escape(n) for n in sorted(MODULE_FUNCTIONS, key=len, reverse=True))
    + r")(?=\()"
)


def global_function_message(name: str) -> str:
    return f"Unexpected global function '{name}'. Use '{MODULE_FUNCTIONS[name]}' instead"


def _report_every(root: Root, name: str, rule: str, message: str) -> list[Diagnostic]:
    rule_id = prefix_rule(rule)
    return [Diagnostic(rule_id, message, node) for node in root.walk_at_rules(name)]


def check_no_debug(root: Root, options: None = None) -> list[Diagnostic]:
    return _report_every(root, "debug", NO_DEBUG, MSG_DEBUG)


def check_no_warn(root: Root, options: None = None) -> list[Diagnostic]:
    return _report_every(root, "warn", NO_WARN, MSG_WARN)


def check_no_import(root: Root, options: None = None) -> list[Diagnostic]:
    return _report_every(root, "import", NO_IMPORT, MSG_IMPORT)


def extend_targets(params: str) -> list[str]:
    """Selectors named by ``@extend`` parameters, ``!optional`` removed."""
    text = params.strip()
    if text.endswith(_OPTIONAL_FLAG):
        text = text[: -len(_OPTIONAL_FLAG)].strip()
    return [s.strip() for s in text.split(",") if s.strip()]


def check_extend_no_missing_placeholder(root: Root, options: None = None) -> list[Diagnostic]:
    """One report per ``@extend`` naming anything other than a ``%placeholder``."""
    rule_id = prefix_rule(AT_EXTEND_NO_MISSING_PLACEHOLDER)
    return [
        Diagnostic(rule_id, MSG_EXTEND_PLACEHOLDER, node)
        for node in root.walk_at_rules("extend")
        if any(not target.startswith("%") for target in extend_targets(node.params))
    ]


def check_if_no_null(root: Root, options: None = None) -> list[Diagnostic]:
    rule_id = prefix_rule(AT_IF_NO_NULL)
    return [
        Diagnostic(rule_id, MSG_NULL_COMPARISON, node)
        for node in root.walk_at_rules("if")
        if _NULL_COMPARISON_RE.search(node.params)
    ]


def check_no_global_function_names(root: Root, options: None = None) -> list[Diagnostic]:
    """Report each call to a global function that has a module replacement.

    Declaration values and all directive parameters are scanned textually.
    """
    rule_id = prefix_rule(NO_GLOBAL_FUNCTION_NAMES)
    diagnostics: list[Diagnostic] = []
    for node in root.walk():
        if isinstance(node, Declaration):
            text = node.value
        elif isinstance(node, AtRule):
            text = node.params
        else:
            continue
        for match in _GLOBAL_FUNCTION_RE.finditer(text):
            diagnostics.append(Diagnostic(rule_id, global_function_message(match.group(0)), node))
    return diagnostics
