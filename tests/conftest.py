"""Shared test fixtures for sasslint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sasslint.config import recommended_config

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from sasslint.config import Config


@pytest.fixture()
def recommended() -> Config:
    """Every rule enabled with default options."""
    return recommended_config()


@pytest.fixture()
def sass_project(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing ``{relative_path: text}`` files under a fresh project dir."""
    project = tmp_path / "proj"
    project.mkdir()

    def _write(files: dict[str, str]) -> Path:
        for rel, text in files.items():
            target = project / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
        return project

    return _write
