"""Tests for repository toolchain baseline configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _pyproject() -> dict:
    pyproject_path = _project_root() / "pyproject.toml"
    return tomllib.loads(pyproject_path.read_text(encoding="utf-8"))


def test_project_uses_python_311_baseline_in_pyproject() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["requires-python"] == ">=3.11"
    assert pyproject["tool"]["ruff"]["target-version"] == "py311"
    assert pyproject["tool"]["mypy"]["python_version"] == "3.11"


def test_project_uses_uv_style_metadata_without_poetry() -> None:
    pyproject = _pyproject()
    dev_dependencies = pyproject["dependency-groups"]["dev"]

    assert "black" not in dev_dependencies
    assert "black" not in pyproject["tool"]
    assert "poetry" not in pyproject["tool"]
    assert pyproject["build-system"]["build-backend"] != "poetry.core.masonry.api"


def test_console_script_points_at_cli_entry_point() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["scripts"]["field-group-schema"] == "field_group_schema.cli:main"


def test_every_cli_command_is_documented_in_readme() -> None:
    readme = (_project_root() / "README.md").read_text(encoding="utf-8")

    for command in (
        "build",
        "preview-locations",
        "list-types",
        "describe",
        "field-type-settings",
        "generate-config",
    ):
        assert f"`{command}" in readme, f"README does not document {command}"
