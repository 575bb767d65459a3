"""Tests for repository toolchain baseline configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _pyproject() -> dict[str, Any]:
    return tomllib.loads((_project_root() / "pyproject.toml").read_text(encoding="utf-8"))


def test_project_uses_python_311_baseline_in_pyproject() -> None:
    pyproject = _pyproject()

    assert pyproject["project"]["requires-python"] == ">=3.11"
    assert pyproject["tool"]["ruff"]["target-version"] == "py311"
    assert pyproject["tool"]["mypy"]["python_version"] == "3.11"


def test_runtime_dependencies_are_limited_to_cli_and_yaml_parsing() -> None:
    dependencies = _pyproject()["project"]["dependencies"]

    assert sorted(entry.split(">=")[0] for entry in dependencies) == ["PyYAML", "click"]


def test_wheel_ships_the_src_layout_package() -> None:
    pyproject = _pyproject()
    packages = pyproject["tool"]["hatch"]["build"]["targets"]["wheel"]["packages"]

    assert packages == ["src/oas_type_model"]
    assert (_project_root() / packages[0] / "__init__.py").is_file()
    assert pyproject["build-system"]["build-backend"] == "hatchling.build"


def test_console_script_points_at_cli_main() -> None:
    assert _pyproject()["project"]["scripts"]["oas-type-model"] == "oas_type_model.cli:main"
