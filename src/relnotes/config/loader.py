"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from relnotes.config.models import RelnotesConfig
from relnotes.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_TABLE = "relnotes"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml by walking up from ``start``.

    Args:
        start: Directory to start searching from (defaults to cwd)

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the filesystem root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_relnotes_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.relnotes]`` table, or an empty dict when absent.

    Raises:
        ConfigValidationError: If ``tool`` or ``tool.relnotes`` is not a table
    """
    tool = pyproject.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigValidationError("[tool] must be a table")
    table = tool.get(TOOL_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigValidationError(f"[tool.{TOOL_TABLE}] must be a table")
    return dict(table)


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: Path | None,
    repository: str,
    *,
    token: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> RelnotesConfig:
    """Build the run configuration.

    File settings are read from the nearest pyproject.toml (if any), then
    command line overrides are applied on top.

    Args:
        path: Repository directory to search for pyproject.toml from
        repository: ``owner/repo`` identifier used for hyperlinks
        token: GitHub access token, or None to disable lookups
        overrides: Nested settings that take precedence over the file

    Returns:
        Validated configuration

    Raises:
        ConfigValidationError: If the merged settings are invalid
    """
    try:
        file_settings = extract_relnotes_config(load_pyproject_toml(find_pyproject_toml(path)))
    except ConfigNotFoundError:
        file_settings = {}

    # Secrets never come from the file
    github_settings = file_settings.get("github")
    if isinstance(github_settings, dict):
        github_settings.pop("token", None)

    settings = _merge(file_settings, overrides or {})
    settings["repository"] = repository
    if token:
        settings = _merge(settings, {"github": {"token": token}})

    try:
        return RelnotesConfig.model_validate(settings)
    except ValidationError as e:
        raise ConfigValidationError(str(e)) from e
