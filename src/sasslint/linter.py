"""Linter orchestrator: parse documents, run enabled rules, apply fixes, format results."""

from __future__ import annotations

import dataclasses
import json
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sasslint.engine.fixes import apply_fixes
from sasslint.engine.source_span import LineIndex
from sasslint.parser import ParseError, parse

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from sasslint.config import Config, InvalidOption
    from sasslint.engine.diagnostic import Diagnostic
    from sasslint.tree.nodes import Root

logger = logging.getLogger(__name__)

SASS_SUFFIX = ".sass"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class LintError(Exception):
    """Raised when lint is asked to check something it cannot read."""


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Violation:
    """A diagnostic resolved to a file position."""

    path: str
    line: int
    column: int
    rule: str
    severity: str
    message: str


@dataclass
class FileResult:
    path: str
    violations: list[Violation] = field(default_factory=list)
    parse_error: ParseError | None = None
    fixed_source: str | None = None

    @property
    def was_fixed(self) -> bool:
        return self.fixed_source is not None


@dataclass
class LintResult:
    """Result of a lint run."""

    files: list[FileResult] = field(default_factory=list)
    rules_evaluated: int = 0
    invalid_options: tuple[InvalidOption, ...] = ()
    elapsed_ms: float = 0.0

    @property
    def violations(self) -> list[Violation]:
        return [v for f in self.files for v in f.violations]

    @property
    def parse_errors(self) -> list[tuple[str, ParseError]]:
        return [(f.path, f.parse_error) for f in self.files if f.parse_error is not None]

    @property
    def fixed_files(self) -> list[str]:
        return [f.path for f in self.files if f.was_fixed]

    @property
    def has_problems(self) -> bool:
        return bool(self.violations or self.parse_errors)


# ---------------------------------------------------------------------------
# Linting
# ---------------------------------------------------------------------------


def run_rules(root: Root, config: Config) -> list[Diagnostic]:
    """Run every enabled rule over *root*, stamping the configured severity."""
    diagnostics: list[Diagnostic] = []
    for setting in config.settings:
        found = setting.rule.check(root, setting.options)
        diagnostics.extend(dataclasses.replace(d, severity=setting.severity) for d in found)
    return diagnostics


def _to_violation(diagnostic: Diagnostic, path: str, index: LineIndex) -> Violation:
    span = diagnostic.node.span
    line, column = index.position(span.start) if span is not None else (1, 1)
    return Violation(
        path=path,
        line=line,
        column=column,
        rule=diagnostic.rule,
        severity=diagnostic.severity.value,
        message=diagnostic.message,
    )


def lint_source(
    source: str,
    config: Config,
    *,
    path: str = "<input>",
    fix: bool = False,
) -> FileResult:
    """Lint one document.

    With *fix*, every fix the rules offered is applied in a single pass and
    the corrected text is linted again; the returned violations are the ones
    that remain, and ``fixed_source`` holds the corrected text when it differs
    from *source*.
    """
    try:
        root = parse(source)
    except ParseError as exc:
        logger.debug("Cannot parse %s: %s", path, exc)
        return FileResult(path=path, parse_error=exc)

    diagnostics = run_rules(root, config)

    if fix:
        fixes = [d.fix for d in diagnostics if d.fix is not None]
        if fixes:
            fixed = apply_fixes(root, fixes)
            if fixed != source:
                remaining = lint_source(fixed, config, path=path)
                if remaining.parse_error is None:
                    remaining.fixed_source = fixed
                    return remaining
                logger.warning("Discarding fixes for %s: %s", path, remaining.parse_error)

    index = LineIndex(source)
    violations = sorted(
        (_to_violation(d, path, index) for d in diagnostics),
        key=lambda v: (v.line, v.column, v.rule),
    )
    return FileResult(path=path, violations=violations)


def collect_files(paths: Iterable[Path]) -> list[Path]:
    """Expand directories to the ``*.sass`` files beneath them.

    Raises ``LintError`` for paths that do not exist.
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob(f"*{SASS_SUFFIX}") if p.is_file()))
        elif path.is_file():
            files.append(path)
        else:
            msg = f"no such file or directory: {path}"
            raise LintError(msg)
    return files


def lint_paths(paths: Iterable[Path], config: Config, *, fix: bool = False) -> LintResult:
    """Lint every file under *paths*; with *fix*, write corrected text back."""
    start = time.monotonic()
    results: list[FileResult] = []

    for file_path in collect_files(paths):
        try:
            source = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"cannot read {file_path}: {exc}"
            raise LintError(msg) from exc

        result = lint_source(source, config, path=str(file_path), fix=fix)
        if result.fixed_source is not None:
            file_path.write_text(result.fixed_source, encoding="utf-8")
            logger.info("Fixed %s", file_path)
        results.append(result)

    elapsed = (time.monotonic() - start) * 1000
    return LintResult(
        files=results,
        rules_evaluated=len(config.settings),
        invalid_options=config.invalid_options,
        elapsed_ms=elapsed,
    )


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------


def format_rich(result: LintResult) -> str:
    """Format a LintResult as human-readable text.

    Example output with violations::

        Rules: 23 enabled
        Files: 2 checked

        ✗ sass/no-debug
          src/main.sass:4:3 → Unexpected @debug statement

        1 violations found (23 rules evaluated, 0.1s)

    Example output without violations::

        Rules: 23 enabled
        Files: 2 checked

        ✓ No violations found (23 rules evaluated, 0.1s)
    """
    lines: list[str] = []

    # Header
    lines.append(f"Rules: {result.rules_evaluated} enabled")
    lines.append(f"Files: {len(result.files)} checked")
    lines.append("")

    for invalid in result.invalid_options:
        lines.append(f"⚠ {invalid.rule_id} disabled: {invalid.reason}")
    if result.invalid_options:
        lines.append("")

    elapsed_s = result.elapsed_ms / 1000
    elapsed_str = f"{elapsed_s:.1f}s"

    for path, error in result.parse_errors:
        lines.append("✗ parse error")
        lines.append(f"  {path}:{error.line} → {error.reason}")
        lines.append("")

    for v in result.violations:
        suffix = " (warning)" if v.severity == "warning" else ""
        lines.append(f"✗ {v.rule}{suffix}")
        lines.append(f"  {v.path}:{v.line}:{v.column} → {v.message}")
        lines.append("")

    if result.fixed_files:
        lines.append(f"Fixed {len(result.fixed_files)} file(s)")

    if result.has_problems:
        count = len(result.violations)
        lines.append(
            f"{count} violations found ({result.rules_evaluated} rules evaluated, {elapsed_str})"
        )
        if result.parse_errors:
            lines.append(f"{len(result.parse_errors)} file(s) could not be parsed")
    else:
        lines.append(
            f"✓ No violations found ({result.rules_evaluated} rules evaluated, {elapsed_str})"
        )

    return "\n".join(lines)


def format_json(result: LintResult) -> str:
    """Format a LintResult as structured JSON.

    Returns a JSON string with ``violations``, ``parse_errors``,
    ``invalid_options`` arrays and a ``summary`` object.
    """
    violations_list = [dataclasses.asdict(v) for v in result.violations]
    parse_errors = [
        {"path": path, "line": error.line, "message": error.reason}
        for path, error in result.parse_errors
    ]
    invalid = [{"rule": i.rule_id, "reason": i.reason} for i in result.invalid_options]

    output: dict[str, object] = {
        "violations": violations_list,
        "parse_errors": parse_errors,
        "invalid_options": invalid,
        "summary": {
            "files_checked": len(result.files),
            "files_fixed": len(result.fixed_files),
            "rules_evaluated": result.rules_evaluated,
            "violations_count": len(violations_list),
            "elapsed_ms": result.elapsed_ms,
        },
    }

    return json.dumps(output, indent=2)


def format_porcelain(result: LintResult) -> str:
    """Format a LintResult as one line per problem.

    Format: ``path:line:column:severity:rule:message``. Parse errors use the
    rule name ``parse-error`` and column 0. Returns empty string when there
    is nothing to report.
    """
    if not result.has_problems:
        return ""

    lines: list[str] = []
    for path, error in result.parse_errors:
        lines.append(f"{path}:{error.line}:0:error:parse-error:{error.reason}")
    for v in result.violations:
        lines.append(f"{v.path}:{v.line}:{v.column}:{v.severity}:{v.rule}:{v.message}")

    return "\n".join(lines)
