"""Tests for the sasslint CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

from sasslint import __version__
from sasslint.cli import main

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


class TestVersion:
    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
        assert "sasslint" in result.output


# ---------------------------------------------------------------------------
# lint
# ---------------------------------------------------------------------------


class TestLintCommand:
    def test_clean_project(self, sass_project: Callable[..., Path]) -> None:
        project = sass_project({"a.sass": "$gap: 4px\n.card\n  margin: $gap\n"})
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(project), "--format", "rich"])
        assert result.exit_code == 0, result.output
        assert "No violations found" in result.output

    def test_violations_exit_zero_without_strict(
        self, sass_project: Callable[..., Path]
    ) -> None:
        project = sass_project({"a.sass": "@debug 1\n"})
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(project), "--format", "porcelain"])
        assert result.exit_code == 0
        assert ":1:1:error:sass/no-debug:Unexpected @debug statement" in result.output

    def test_strict_exits_one(self, sass_project: Callable[..., Path]) -> None:
        project = sass_project({"a.sass": "@debug 1\n"})
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(project), "--strict", "--format", "porcelain"])
        assert result.exit_code == 1

    def test_strict_fails_on_parse_error(self, sass_project: Callable[..., Path]) -> None:
        project = sass_project({"a.sass": "@ x\n"})
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(project), "--strict", "--format", "porcelain"])
        assert result.exit_code == 1
        assert "parse-error" in result.output

    def test_strict_clean_exits_zero(self, sass_project: Callable[..., Path]) -> None:
        project = sass_project({"a.sass": "$gap: 4px\n"})
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(project), "--strict"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_json_format(self, sass_project: Callable[..., Path]) -> None:
        project = sass_project({"a.sass": "$color: red\n$color: blue\n"})
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(project), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["summary"]["files_checked"] == 1
        assert [v["rule"] for v in data["violations"]] == ["sass/no-duplicate-dollar-variables"]

    def test_default_format_is_porcelain_when_piped(
        self, sass_project: Callable[..., Path]
    ) -> None:
        project = sass_project({"a.sass": "@debug 1\n"})
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(project)])
        assert result.output.strip().endswith("sass/no-debug:Unexpected @debug statement")

    def test_fix_writes_files(self, sass_project: Callable[..., Path]) -> None:
        project = sass_project({"a.sass": ".box\n  width: $a+$b\n"})
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(project), "--fix", "--strict"])
        assert result.exit_code == 0, result.output
        assert (project / "a.sass").read_text(encoding="utf-8") == ".box\n  width: $a + $b\n"

    def test_config_file_discovered_in_cwd(
        self, sass_project: Callable[..., Path], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Without arguments the current directory and its config file are used."""
        project = sass_project(
            {
                "a.sass": "@debug 1\n@warn 'x'\n",
                ".sasslintrc.yml": "rules:\n  sass/no-warn: true\n",
            }
        )
        monkeypatch.chdir(project)
        runner = CliRunner()
        result = runner.invoke(main, ["lint"])
        assert "sass/no-warn" in result.output
        assert "sass/no-debug" not in result.output

    def test_explicit_config(self, sass_project: Callable[..., Path]) -> None:
        project = sass_project(
            {"a.sass": "@debug 1\n@warn 'x'\n", "lint.yml": "rules:\n  no-debug: true\n"}
        )
        runner = CliRunner()
        result = runner.invoke(
            main, ["lint", str(project / "a.sass"), "--config", str(project / "lint.yml")]
        )
        assert "sass/no-debug" in result.output
        assert "sass/no-warn" not in result.output

    def test_bad_config_exits_two(self, sass_project: Callable[..., Path]) -> None:
        project = sass_project(
            {"a.sass": "$gap: 4px\n", "bad.yml": "rules:\n  sass/no-such-rule: true\n"}
        )
        runner = CliRunner()
        result = runner.invoke(
            main, ["lint", str(project), "--config", str(project / "bad.yml")]
        )
        assert result.exit_code == 2
        assert "unknown rule" in result.output

    def test_missing_path_rejected(self, tmp_path: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lint", str(tmp_path / "missing.sass")])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# rules
# ---------------------------------------------------------------------------


class TestRulesCommand:
    def test_lists_every_rule(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["rules"], env={"COLUMNS": "200"})
        assert result.exit_code == 0
        assert "sass/no-debug" in result.output
        assert "sass/operator-no-unspaced" in result.output
        assert "sass/selector-no-union-class-name" in result.output

    def test_rules_with_config(self, tmp_path: Path) -> None:
        config = tmp_path / "sasslint.yml"
        config.write_text("rules:\n  no-debug: true\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["rules", "--config", str(config)], env={"COLUMNS": "200"})
        assert result.exit_code == 0
        debug_line = next(line for line in result.output.splitlines() if "sass/no-debug" in line)
        warn_line = next(line for line in result.output.splitlines() if "sass/no-warn" in line)
        assert "✓" in debug_line
        assert "✓" not in warn_line

    def test_rules_bad_config(self, tmp_path: Path) -> None:
        config = tmp_path / "sasslint.yml"
        config.write_text("just a string\n", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(main, ["rules", "--config", str(config)])
        assert result.exit_code == 2
        assert "must be a YAML mapping" in result.output
