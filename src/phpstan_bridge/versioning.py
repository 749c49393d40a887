# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for detecting PHPStan versions and gating editor mode on them.

PHPStan's editor mode (``--tmp-file``/``--instead-of``) lets an editor analyse
unsaved buffer content while ``ignoreErrors`` entries keyed on the real file
path keep matching. It shipped in 1.12.27 on the 1.x branch and 2.1.17 on the
2.x branch; later major releases are assumed to keep it.
"""

from __future__ import annotations

import logging
import re
import subprocess  # nosec B404
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from packaging.version import Version

from .constants import (
    MIN_EDITOR_MODE_1X,
    MIN_EDITOR_MODE_2X,
    PHPSTAN_NAME,
    VERSION_DETECTION_TIMEOUT_SECONDS,
    VERSION_FLAG,
)
from .process_utils import run_command, timed_out

if TYPE_CHECKING:
    from .settings import AnalyzerSettings

LOGGER = logging.getLogger(__name__)

# "PHPStan - PHP Static Analysis Tool 1.12.27" -> "1.12.27"
VERSION_PATTERN: Final[re.Pattern[str]] = re.compile(r"PHPStan.*?\s(\d[\d.]*)")
_LEADING_VERSION: Final[re.Pattern[str]] = re.compile(r"\d[\d.]*")
_COMPONENT: Final[re.Pattern[str]] = re.compile(r"[0-9]+")

_EDITOR_MODE_MINIMUMS: Final[dict[int, Version]] = {
    1: Version(MIN_EDITOR_MODE_1X),
    2: Version(MIN_EDITOR_MODE_2X),
}
_FIRST_UNCONDITIONAL_MAJOR: Final[int] = 3


@dataclass(frozen=True, slots=True, order=True)
class ToolVersion:
    """Parsed ``major.minor.patch`` triple ordered lexicographically."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def as_packaging(self) -> Version:
        """Return the equivalent :class:`packaging.version.Version`."""

        return Version(str(self))


def extract_version_string(raw_output: str | None) -> str | None:
    """Return the dotted version embedded in PHPStan's ``--version`` output.

    Args:
        raw_output: Free-form text printed by the tool.

    Returns:
        str | None: The leading digit/dot run of the version, or ``None`` when
        the output carries no version starting with a digit.
    """

    if raw_output is None:
        return None
    text = raw_output.strip()
    if not text:
        return None
    match = VERSION_PATTERN.search(text)
    if match is None:
        match = _LEADING_VERSION.match(text)
        if match is None:
            return None
        return match.group(0)
    return match.group(1)


def parse_version(version_string: str | None) -> ToolVersion | None:
    """Parse ``version_string`` into a :class:`ToolVersion`.

    Missing minor/patch components default to ``0``; any present component
    that is not a plain non-negative integer makes the parse fail. Components
    past the patch level are ignored.
    """

    if version_string is None:
        return None
    text = version_string.strip().rstrip(".")
    if not text:
        return None
    chunks = text.split(".")
    numbers = [0, 0, 0]
    for index, chunk in enumerate(chunks[:3]):
        if not _COMPONENT.fullmatch(chunk):
            return None
        try:
            numbers[index] = int(chunk)
        except ValueError:
            # Longer than the interpreter's int string conversion limit.
            return None
    return ToolVersion(*numbers)


def supports_editor_mode(version_string: str | None) -> bool:
    """Return ``True`` when ``version_string`` accepts ``--tmp-file``/``--instead-of``."""

    parsed = parse_version(version_string)
    if parsed is None:
        return False
    if parsed.major >= _FIRST_UNCONDITIONAL_MAJOR:
        return True
    minimum = _EDITOR_MODE_MINIMUMS.get(parsed.major)
    if minimum is None:
        return False
    return parsed.as_packaging() >= minimum


def detect_version(
    tool_path: str,
    *,
    timeout: float = VERSION_DETECTION_TIMEOUT_SECONDS,
) -> str | None:
    """Run ``tool_path --version`` and return the reported version.

    Stdout and stderr are read together. The process is killed once
    ``timeout`` seconds elapse. Every failure is logged and reported as
    ``None``; nothing is raised to the caller.
    """

    LOGGER.info("Attempting to auto-detect PHPStan version from: %s", tool_path)
    try:
        completed = run_command(
            [tool_path, VERSION_FLAG],
            check=False,
            merge_stderr=True,
            timeout=timeout,
            discard_stdin=True,
        )
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        LOGGER.warning("Failed to detect PHPStan version: %s", exc)
        return None

    output = completed.stdout or ""
    if timed_out(completed):
        LOGGER.warning("PHPStan version detection timed out after %.0f seconds", timeout)
        return None
    if completed.returncode != 0:
        LOGGER.warning("PHPStan --version exited with code %s: %s", completed.returncode, output)
        return None

    version = extract_version_string(output)
    if version is None:
        LOGGER.warning("Could not parse PHPStan version from output: %s", output)
        return None
    LOGGER.info("Auto-detected PHPStan version: %s", version)
    return version


def validate_version_message(message: str, settings: AnalyzerSettings) -> tuple[bool, str]:
    """Validate the output of a tool check and cache its version on ``settings``.

    The output must name PHPStan and carry a parseable version; otherwise the
    cached version is cleared.
    """

    version_string = extract_version_string(message)
    if parse_version(version_string) is None or PHPSTAN_NAME not in message:
        settings.remember_version(None)
        return False, f"Can not determine version. Output: {message}"
    settings.remember_version(version_string)
    return True, f"OK, {message}"


__all__ = [
    "ToolVersion",
    "VERSION_PATTERN",
    "detect_version",
    "extract_version_string",
    "parse_version",
    "supports_editor_mode",
    "validate_version_message",
]
