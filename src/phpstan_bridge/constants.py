# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants for PHPStan invocation."""

from __future__ import annotations

from typing import Final

PHPSTAN_NAME: Final[str] = "PHPStan"

ANALYZE_COMMAND: Final[str] = "analyze"
CONFIG_FLAG: Final[str] = "-c"
AUTOLOAD_FLAG: Final[str] = "-a"
LEVEL_OPTION: Final[str] = "--level"
MEMORY_LIMIT_OPTION: Final[str] = "--memory-limit"
ERROR_FORMAT_OPTION: Final[str] = "--error-format=checkstyle"
BATCH_FLAGS: Final[tuple[str, ...]] = ("--no-progress", "--no-ansi", "--no-interaction")
TMP_FILE_FLAG: Final[str] = "--tmp-file"
INSTEAD_OF_FLAG: Final[str] = "--instead-of"
VERSION_FLAG: Final[str] = "--version"

DEFAULT_LEVEL: Final[int] = 4
MAX_LEVEL: Final[int] = 9
DEFAULT_MEMORY_LIMIT: Final[str] = "2G"
DEFAULT_TIMEOUT_MS: Final[int] = 30000
DEFAULT_MAX_MESSAGES_PER_FILE: Final[int] = 50

VERSION_DETECTION_TIMEOUT_SECONDS: Final[float] = 5.0

# Editor mode (--tmp-file/--instead-of) landed in these releases.
MIN_EDITOR_MODE_1X: Final[str] = "1.12.27"
MIN_EDITOR_MODE_2X: Final[str] = "2.1.17"

XDEBUG_ADVISORY: Final[str] = 'The Xdebug PHP extension is active, but "--xdebug" is not used'

__all__ = [
    "ANALYZE_COMMAND",
    "AUTOLOAD_FLAG",
    "BATCH_FLAGS",
    "CONFIG_FLAG",
    "DEFAULT_LEVEL",
    "DEFAULT_MAX_MESSAGES_PER_FILE",
    "DEFAULT_MEMORY_LIMIT",
    "DEFAULT_TIMEOUT_MS",
    "ERROR_FORMAT_OPTION",
    "INSTEAD_OF_FLAG",
    "LEVEL_OPTION",
    "MAX_LEVEL",
    "MEMORY_LIMIT_OPTION",
    "MIN_EDITOR_MODE_1X",
    "MIN_EDITOR_MODE_2X",
    "PHPSTAN_NAME",
    "TMP_FILE_FLAG",
    "VERSION_DETECTION_TIMEOUT_SECONDS",
    "VERSION_FLAG",
    "XDEBUG_ADVISORY",
]
