# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map editor temp-file paths back to the project files they stand in for.

Editors analyse unsaved buffers by writing them to a temporary location that
mirrors the file's project-relative path. Each time analysis of a file begins
its real path is recorded here under that relative path (and its bare
filename), so the temp copy can later be resolved to the original for
``--instead-of``.

Entries are overwritten rather than accumulated and are never evicted; the
key space is bounded by the files opened during a session.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from threading import Lock
from typing import Final

LOGGER = logging.getLogger(__name__)

_SEPARATORS: Final[tuple[str, ...]] = ("/", "\\")


def relative_key_for(original_path: str, project_root: str | None) -> str | None:
    """Return ``original_path`` relative to ``project_root``.

    Args:
        original_path: Absolute path of a project file.
        project_root: Project base directory, if known.

    Returns:
        str | None: The path below the root without a leading separator, or
        ``None`` when no root is known or the path lies outside it.
    """

    if not project_root or not original_path.startswith(project_root):
        return None
    remainder = original_path[len(project_root) :]
    if remainder and not project_root.endswith(_SEPARATORS) and not remainder.startswith(_SEPARATORS):
        # "/proj2/a.php" is not inside "/proj".
        return None
    if remainder.startswith(_SEPARATORS):
        remainder = remainder[1:]
    return remainder or None


def filename_of(path: str) -> str:
    """Return the last component of ``path`` for either separator style.

    Args:
        path: POSIX or Windows style path.

    Returns:
        str: The bare filename.
    """

    for separator in _SEPARATORS:
        path = path.rsplit(separator, 1)[-1]
    return path


def _key_matches(candidate: str, key: str) -> bool:
    return candidate.endswith(key) or any(f"{separator}{key}" in candidate for separator in _SEPARATORS)


class TempFilePathRegistry:
    """Thread-safe, last-write-wins mapping of path keys to original paths.

    Writers replace the mapping under a lock. Readers scan an immutable
    snapshot, so a lookup racing a registration sees either the old or the
    new mapping.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._entries: dict[str, str] = {}

    def register(
        self,
        original_path: str,
        relative_key: str | None = None,
        filename: str | None = None,
        *,
        project_root: str | None = None,
    ) -> None:
        """Record ``original_path`` under its relative key and bare filename.

        Args:
            original_path: Absolute on-disk path of the file being analysed.
            relative_key: Project-relative key; derived from ``project_root``
                when omitted.
            filename: Fallback key; defaults to the last path component.
            project_root: Project base directory used to derive the key.

        Empty ``original_path`` values are ignored.
        """

        if not original_path:
            return
        key = relative_key or relative_key_for(original_path, project_root)
        fallback = filename or filename_of(original_path)
        with self._lock:
            updated = dict(self._entries)
            if key:
                updated[key] = original_path
            if fallback:
                updated[fallback] = original_path
            self._entries = updated
        LOGGER.debug("Registered original path %s (key=%s, filename=%s)", original_path, key, fallback)

    def resolve(self, candidate_path: str | None) -> str | None:
        """Return the original path registered for ``candidate_path``.

        The first key that ends ``candidate_path``, or appears in it right
        after a path separator, wins. Two originals sharing a trailing path
        segment can therefore shadow each other.

        Args:
            candidate_path: Temp-file path handed over by the editor.

        Returns:
            str | None: The registered original path, or ``None`` when the
            candidate is absent or no key matches.
        """

        if candidate_path is None:
            return None
        for key, original in self._entries.items():
            if _key_matches(candidate_path, key):
                return original
        return None

    def clear(self) -> None:
        """Drop every registered mapping."""

        with self._lock:
            self._entries = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._entries.items())


DEFAULT_PATH_REGISTRY = TempFilePathRegistry()

__all__ = [
    "DEFAULT_PATH_REGISTRY",
    "TempFilePathRegistry",
    "filename_of",
    "relative_key_for",
]
