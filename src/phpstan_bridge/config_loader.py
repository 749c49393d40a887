# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Load analyser settings from project files and cache detected versions."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from .settings import AnalyzerSettings

PYPROJECT_FILE: Final[str] = "pyproject.toml"
STANDALONE_FILE: Final[str] = "phpstan-bridge.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "phpstan-bridge"
_PATH_KEYS: Final[tuple[str, ...]] = ("config_file", "autoload_file")
_VERSION_FILE: Final[str] = "tool-versions.json"
_VERSION_KEY: Final[str] = "phpstan"


class ConfigError(Exception):
    """Raised when configuration files are malformed or invalid."""


def _read_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _pyproject_section(path: Path) -> dict[str, Any]:
    tool_section = _read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return dict(section)


def _normalise_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key).replace("-", "_"): value for key, value in data.items()}


def _resolve_paths(data: dict[str, Any], root: Path) -> dict[str, Any]:
    for key in _PATH_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            candidate = Path(value)
            data[key] = str(candidate if candidate.is_absolute() else (root / candidate))
    return data


def load_settings(root: Path, *, overrides: Mapping[str, Any] | None = None) -> AnalyzerSettings:
    """Return settings for the project at ``root``.

    Defaults are overlaid by ``[tool.phpstan-bridge]`` in ``pyproject.toml``,
    then by ``phpstan-bridge.toml``, then by ``overrides``. Relative config and
    autoload paths are resolved against ``root``.

    Raises:
        ConfigError: If a file cannot be parsed or a value fails validation.
    """

    merged: dict[str, Any] = {}
    merged.update(_normalise_keys(_pyproject_section(root / PYPROJECT_FILE)))
    merged.update(_normalise_keys(_read_toml(root / STANDALONE_FILE)))
    if overrides:
        merged.update({key: value for key, value in _normalise_keys(overrides).items() if value is not None})
    merged = _resolve_paths(merged, root)
    try:
        return AnalyzerSettings.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings for {root}: {exc}") from exc


def load_cached_version(cache_dir: Path) -> str | None:
    """Return the PHPStan version stored in ``cache_dir``, if any."""

    path = cache_dir / _VERSION_FILE
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        return None
    value = data.get(_VERSION_KEY) if isinstance(data, dict) else None
    return value if isinstance(value, str) and value else None


def save_detected_version(cache_dir: Path, version: str | None) -> None:
    """Persist ``version`` into ``cache_dir``; ``None`` removes the entry."""

    cache_dir.mkdir(parents=True, exist_ok=True)
    path = cache_dir / _VERSION_FILE
    data: dict[str, str] = {}
    if path.is_file():
        try:
            loaded = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            loaded = {}
        if isinstance(loaded, dict):
            data = {str(k): str(v) for k, v in loaded.items() if isinstance(v, str)}
    if version is None:
        data.pop(_VERSION_KEY, None)
    else:
        data[_VERSION_KEY] = version
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


__all__ = [
    "ConfigError",
    "load_cached_version",
    "load_settings",
    "save_detected_version",
]
