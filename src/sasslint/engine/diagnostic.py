"""Diagnostic model produced by every rule."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sasslint.engine.fixes import Fix
    from sasslint.tree.nodes import Node

NAMESPACE = "sass"


def prefix_rule(name: str) -> str:
    """Return the namespaced rule id, e.g. ``sass/no-debug``."""
    return f"{NAMESPACE}/{name}"


class Severity(enum.Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding.

    Attributes:
        rule: Namespaced rule id.
        message: Human-readable description, including the offending text.
        node: The document node the finding is attached to; the host derives
            line and column from its span.
        severity: Reporting level configured for the rule.
        fix: Optional correction, applied only when the host asks for fixes.
    """

    rule: str
    message: str
    node: Node
    severity: Severity = Severity.ERROR
    fix: Fix | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR
