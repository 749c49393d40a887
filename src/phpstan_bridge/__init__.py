# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""PHPStan command-line construction and editor mode negotiation."""

from __future__ import annotations

from importlib import metadata

from .commands import (
    Command,
    PhpStanCommand,
    batch_targets,
    build_batch_command,
    build_live_command,
    build_options,
)
from .path_registry import DEFAULT_PATH_REGISTRY, TempFilePathRegistry
from .remote import IdentityPathMapper, PathMapper, PrefixPathMapper
from .settings import AnalyzerSettings
from .versioning import (
    ToolVersion,
    detect_version,
    extract_version_string,
    parse_version,
    supports_editor_mode,
)

try:
    __version__ = metadata.version("phpstan-bridge")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "AnalyzerSettings",
    "Command",
    "DEFAULT_PATH_REGISTRY",
    "IdentityPathMapper",
    "PathMapper",
    "PhpStanCommand",
    "PrefixPathMapper",
    "TempFilePathRegistry",
    "ToolVersion",
    "batch_targets",
    "build_batch_command",
    "build_live_command",
    "build_options",
    "detect_version",
    "extract_version_string",
    "parse_version",
    "supports_editor_mode",
]
