# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for local-to-remote path translation."""

from __future__ import annotations

from phpstan_bridge.remote import IDENTITY_MAPPER, PathMapper, PrefixPathMapper


def test_identity_mapper_returns_path() -> None:
    assert IDENTITY_MAPPER.map_path("/proj/a.php") == "/proj/a.php"
    assert isinstance(IDENTITY_MAPPER, PathMapper)


def test_prefix_mapper_prefers_longest_prefix() -> None:
    mapper = PrefixPathMapper.from_pairs(
        [("/home/dev/proj", "/app"), ("/home/dev/proj/vendor", "/opt/vendor")],
    )

    assert mapper.map_path("/home/dev/proj/src/a.php") == "/app/src/a.php"
    assert mapper.map_path("/home/dev/proj/vendor/autoload.php") == "/opt/vendor/autoload.php"
    assert mapper.map_path("/home/dev/proj") == "/app"


def test_prefix_mapper_requires_component_boundary() -> None:
    mapper = PrefixPathMapper.from_pairs([("/home/dev/proj", "/app")])

    assert mapper.map_path("/home/dev/project/a.php") == "/home/dev/project/a.php"


def test_prefix_mapper_converts_windows_paths() -> None:
    mapper = PrefixPathMapper.from_pairs([("C:\\work\\proj\\", "/var/www")])

    assert mapper.map_path("C:\\work\\proj\\src\\a.php") == "/var/www/src/a.php"
