# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings consumed when building PHPStan invocations."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_LEVEL,
    DEFAULT_MAX_MESSAGES_PER_FILE,
    DEFAULT_MEMORY_LIMIT,
    DEFAULT_TIMEOUT_MS,
    MAX_LEVEL,
)


class AnalyzerSettings(BaseModel):
    """Tool location plus the analysis options PHPStan is run with.

    ``detected_version`` is a cache: command builders fill it in when they
    auto-detect the tool version, so callers should keep passing the same
    instance between invocations.

    ``timeout_ms`` and ``max_messages_per_file`` are not used to build
    commands. They are limits for the host that spawns the analysis and
    reports its diagnostics. They are loaded and validated here so that every
    setting comes from one place, and ``phpstan-bridge settings`` prints them.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    tool_path: str = ""
    detected_version: str | None = None
    level: int = Field(default=DEFAULT_LEVEL, ge=0, le=MAX_LEVEL)
    config_file: str | None = None
    autoload_file: str | None = None
    memory_limit: str = DEFAULT_MEMORY_LIMIT
    analyze_full_project: bool = False
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    max_messages_per_file: int = Field(default=DEFAULT_MAX_MESSAGES_PER_FILE, gt=0)

    @field_validator("detected_version", "config_file", "autoload_file", mode="before")
    @classmethod
    def _blank_as_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("tool_path", "memory_limit", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @property
    def timeout_seconds(self) -> float:
        """Return ``timeout_ms`` in seconds for ``subprocess`` style timeouts."""

        return self.timeout_ms / 1000

    @property
    def is_configured(self) -> bool:
        """Return ``True`` when a tool path has been set."""

        return bool(self.tool_path)

    def remember_version(self, version: str | None) -> None:
        """Store *version* as the detected tool version (``None`` clears it)."""

        self.detected_version = version


__all__ = ["AnalyzerSettings"]
