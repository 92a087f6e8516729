"""sasslint CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from sasslint import __version__


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", force=True)


@click.group()
@click.version_option(version=__version__, prog_name="sasslint")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool, quiet: bool) -> None:
    """sasslint - lint rules for indented-syntax Sass."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    _configure_logging(verbose=verbose, quiet=quiet)


@main.command()
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: .sasslintrc.yml in the current directory).",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich for TTY, porcelain for pipes).",
)
@click.option(
    "--fix",
    is_flag=True,
    default=False,
    help="Apply automatic fixes and write them back.",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 if violations found.",
)
def lint(
    *,
    paths: tuple[Path, ...],
    config_path: Path | None,
    fmt: str | None,
    fix: bool,
    strict: bool,
) -> None:
    """Lint .sass files (default: the current directory).

    Exit codes: 0 = clean or violations without --strict,
    1 = violations with --strict, 2 = configuration error.
    """
    from sasslint.config import ConfigError, resolve_config
    from sasslint.linter import LintError, lint_paths
    from sasslint.linter import format_json as _format_json
    from sasslint.linter import format_porcelain as _format_porcelain
    from sasslint.linter import format_rich as _format_rich

    cwd = Path.cwd()

    # Resolve output format: explicit flag > TTY detection.
    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        config = resolve_config(config_path, cwd)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    try:
        result = lint_paths(list(paths) or [cwd], config, fix=fix)
    except LintError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    formatters = {
        "rich": _format_rich,
        "json": _format_json,
        "porcelain": _format_porcelain,
    }
    output = formatters[fmt](result)
    if output:
        click.echo(output)

    if strict and result.has_problems:
        sys.exit(1)


@main.command("rules")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Mark the rules this configuration enables.",
)
def rules_cmd(*, config_path: Path | None) -> None:
    """List every available rule."""
    from rich.console import Console
    from rich.table import Table

    from sasslint.config import ConfigError, resolve_config
    from sasslint.rules import ALL_RULES

    try:
        config = resolve_config(config_path, Path.cwd())
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    enabled = set(config.rule_ids)

    table = Table(title="Rules")
    table.add_column("Rule", style="cyan")
    table.add_column("Enabled", justify="center")
    table.add_column("Fixable", justify="center")
    table.add_column("Description")
    for rule in ALL_RULES:
        table.add_row(
            rule.rule_id,
            "✓" if rule.rule_id in enabled else "",
            "✓" if rule.fixable else "",
            rule.description,
        )

    console = Console()
    console.print(table)
