# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for PHPStan version parsing and editor mode gating."""

from __future__ import annotations

import pytest

from phpstan_bridge.settings import AnalyzerSettings
from phpstan_bridge.versioning import (
    ToolVersion,
    extract_version_string,
    parse_version,
    supports_editor_mode,
    validate_version_message,
)


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("1.12.27", True),
        ("1.12.28", True),
        ("1.13.0", True),
        ("1.99.0", True),
        ("1.12.26", False),
        ("1.11.99", False),
        ("1.0.0", False),
        ("2.1.17", True),
        ("2.1.18", True),
        ("2.2.0", True),
        ("2.99.99", True),
        ("2.1.16", False),
        ("2.0.99", False),
        ("2.0.0", False),
        ("3.0.0", True),
        ("3.5.10", True),
        ("10.0.0", True),
        ("0.12.25", False),
        ("0.12.99", False),
        ("0.99.99", False),
        ("0.0.1", False),
    ],
)
def test_supports_editor_mode_thresholds(version: str, expected: bool) -> None:
    assert supports_editor_mode(version) is expected


@pytest.mark.parametrize("version", [None, "", "   ", "abc", "1.x", "version1.0", "v1.12.27"])
def test_supports_editor_mode_rejects_unparseable(version: str | None) -> None:
    assert supports_editor_mode(version) is False


def test_supports_editor_mode_partial_versions_default_patch_to_zero() -> None:
    assert supports_editor_mode("1.12") is False
    assert supports_editor_mode("2.1") is False
    assert supports_editor_mode("2.2") is True
    assert supports_editor_mode("3") is True


def test_parse_version_fills_missing_components() -> None:
    assert parse_version("1.12.27") == ToolVersion(1, 12, 27)
    assert parse_version("1.12") == ToolVersion(1, 12, 0)
    assert parse_version("2") == ToolVersion(2, 0, 0)


@pytest.mark.parametrize("raw", [None, "", "  ", "1.x.0", "abc", "1..2", "-1.0.0", "+1.0.0"])
def test_parse_version_failures(raw: str | None) -> None:
    assert parse_version(raw) is None


def test_parse_version_accepts_trailing_dot_from_dev_builds() -> None:
    assert parse_version("0.12.") == ToolVersion(0, 12, 0)


def test_tool_version_round_trips_and_orders() -> None:
    parsed = parse_version("2.1.17")
    assert parsed is not None
    assert str(parsed) == "2.1.17"
    assert ToolVersion(1, 12, 27) < ToolVersion(1, 13, 0) < ToolVersion(2, 0, 0)


def test_editor_mode_is_monotonic_within_a_major_branch() -> None:
    versions = sorted(
        ToolVersion(major, minor, patch)
        for major in (1, 2)
        for minor in (0, 1, 11, 12, 13)
        for patch in (0, 16, 17, 26, 27, 28)
    )
    for earlier, later in zip(versions, versions[1:]):
        if earlier.major == later.major and supports_editor_mode(str(earlier)):
            assert supports_editor_mode(str(later))


@pytest.mark.parametrize(
    ("output", "expected"),
    [
        ("PHPStan - PHP Static Analysis Tool 1.12.27", "1.12.27"),
        ("PHPStan - PHP Static Analysis Tool 2.1.17", "2.1.17"),
        ("PHPStan - PHP Static Analysis Tool 0.12.25", "0.12.25"),
        ("PHPStan - PHP Static Analysis Tool 1.12.27\n", "1.12.27"),
        ("\nPHPStan - PHP Static Analysis Tool 2.1.17\n", "2.1.17"),
        ("Note: Using configuration file.\nPHPStan - PHP Static Analysis Tool 2.1.17", "2.1.17"),
        ("1.12.27", "1.12.27"),
    ],
)
def test_extract_version_string(output: str, expected: str) -> None:
    assert extract_version_string(output) == expected


@pytest.mark.parametrize(
    "output",
    [None, "", "   ", "Some random text", "PHPStan - PHP Static Analysis Tool"],
)
def test_extract_version_string_without_version(output: str | None) -> None:
    assert extract_version_string(output) is None


def test_extract_version_string_dev_build() -> None:
    extracted = extract_version_string("PHPStan - PHP Static Analysis Tool 0.12.x-dev@41b16d5")
    assert extracted is not None
    assert extracted.startswith("0.12")
    assert supports_editor_mode(extracted) is False


def test_validate_version_message_stores_version() -> None:
    settings = AnalyzerSettings(tool_path="/usr/bin/phpstan")
    valid, message = validate_version_message("PHPStan - PHP Static Analysis Tool 2.1.17", settings)

    assert valid is True
    assert message == "OK, PHPStan - PHP Static Analysis Tool 2.1.17"
    assert settings.detected_version == "2.1.17"


@pytest.mark.parametrize("output", ["command not found", "Psalm 5.0.0", "PHPStan - PHP Static Analysis Tool"])
def test_validate_version_message_clears_version_on_failure(output: str) -> None:
    settings = AnalyzerSettings(tool_path="/usr/bin/phpstan", detected_version="2.1.17")
    valid, message = validate_version_message(output, settings)

    assert valid is False
    assert output in message
    assert settings.detected_version is None


def test_oversized_version_component_is_unparseable() -> None:
    huge = "9" * 5000

    assert parse_version(f"1.{huge}.0") is None
    assert supports_editor_mode(f"1.{huge}") is False

    settings = AnalyzerSettings(detected_version="2.1.17")
    valid, _ = validate_version_message(f"PHPStan - PHP Static Analysis Tool {huge}.1.17", settings)
    assert valid is False
    assert settings.detected_version is None
