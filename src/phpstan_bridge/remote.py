# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Translate local paths for a PHPStan that runs in another filesystem namespace."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class PathMapper(Protocol):
    """Map a local path to the path the analyser process sees."""

    def map_path(self, path: str) -> str:
        """Return the remote equivalent of ``path``.

        Args:
            path: Path as seen by the editor.

        Returns:
            str: Path to hand to the PHPStan process.
        """


@dataclass(frozen=True, slots=True)
class IdentityPathMapper:
    """Mapper used when PHPStan runs on the local filesystem."""

    def map_path(self, path: str) -> str:
        """Return ``path`` unchanged.

        Args:
            path: Path as seen by the editor.

        Returns:
            str: The same path.
        """

        return path


@dataclass(frozen=True, slots=True)
class PrefixPathMapper:
    """Rewrite paths by the first matching ``(local, remote)`` prefix pair.

    Suitable for containers or remote interpreters where the project is
    mounted at a different location, e.g. ``/home/me/app`` -> ``/var/www``.
    Paths under no known prefix are returned unchanged.

    Attributes:
        mappings: ``(local, remote)`` prefixes without trailing separators,
            checked in order.
    """

    mappings: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> PrefixPathMapper:
        """Build a mapper from ``(local, remote)`` prefix pairs.

        Args:
            pairs: Prefix pairs in any order; empty local prefixes are skipped.

        Returns:
            PrefixPathMapper: Mapper checking the longest local prefix first.
        """

        # Longest local prefix first so nested mounts win over their parents.
        ordered = sorted(
            ((local.rstrip("/\\"), remote.rstrip("/\\")) for local, remote in pairs if local),
            key=lambda pair: len(pair[0]),
            reverse=True,
        )
        return cls(mappings=tuple(ordered))

    def map_path(self, path: str) -> str:
        """Return ``path`` rewritten onto the remote side of its prefix.

        Args:
            path: Local path using ``/`` or ``\\`` separators.

        Returns:
            str: Remote path with ``/`` separators in the rewritten tail, or
            ``path`` itself when no prefix covers it.
        """

        for local, remote in self.mappings:
            if path == local:
                return remote
            for separator in ("/", "\\"):
                if path.startswith(local + separator):
                    tail = path[len(local) + 1 :].replace("\\", "/")
                    return f"{remote}/{tail}"
        return path


IDENTITY_MAPPER = IdentityPathMapper()

__all__ = ["IDENTITY_MAPPER", "IdentityPathMapper", "PathMapper", "PrefixPathMapper"]
