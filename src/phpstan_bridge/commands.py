# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build PHPStan ``analyze`` argument vectors."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from .constants import (
    ANALYZE_COMMAND,
    AUTOLOAD_FLAG,
    BATCH_FLAGS,
    CONFIG_FLAG,
    ERROR_FORMAT_OPTION,
    INSTEAD_OF_FLAG,
    LEVEL_OPTION,
    MEMORY_LIMIT_OPTION,
    TMP_FILE_FLAG,
    XDEBUG_ADVISORY,
)
from .path_registry import DEFAULT_PATH_REGISTRY, TempFilePathRegistry
from .remote import IDENTITY_MAPPER, PathMapper
from .settings import AnalyzerSettings
from .versioning import detect_version, supports_editor_mode

LOGGER = logging.getLogger(__name__)

Command = tuple[str, ...]
VersionDetector = Callable[[str], str | None]


@dataclass(slots=True)
class PhpStanCommand:
    """Assemble PHPStan invocations for one settings object.

    ``settings`` is shared with the caller: :meth:`live` writes an
    auto-detected version back to ``settings.detected_version``.
    """

    settings: AnalyzerSettings
    mapper: PathMapper = IDENTITY_MAPPER
    detector: VersionDetector | None = None

    def _path(self, path: str) -> str:
        return self.mapper.map_path(path)

    def prefix(self) -> list[str]:
        """Return the options shared by every invocation mode.

        Returns:
            list[str]: ``analyze``, the config file or level, the optional
            autoload file, then the memory limit and output flags.
        """

        settings = self.settings
        cmd = [ANALYZE_COMMAND]
        if settings.config_file:
            cmd.extend([CONFIG_FLAG, self._path(settings.config_file)])
        else:
            cmd.append(f"{LEVEL_OPTION}={settings.level}")
        if settings.autoload_file:
            cmd.extend([AUTOLOAD_FLAG, self._path(settings.autoload_file)])
        cmd.append(f"{MEMORY_LIMIT_OPTION}={settings.memory_limit}")
        cmd.append(ERROR_FORMAT_OPTION)
        cmd.extend(BATCH_FLAGS)
        return cmd

    def batch(self, paths: Iterable[str | None]) -> Command:
        """Return the whole-set command for ``paths``.

        Args:
            paths: Analysis targets; ``None`` entries are dropped and the rest
                keep their order.

        Returns:
            Command: The argument vector without the executable.
        """

        cmd = self.prefix()
        cmd.extend(self._path(path) for path in paths if path is not None)
        return tuple(cmd)

    def resolve_version(self) -> str | None:
        """Return the known tool version, detecting and caching it when missing.

        Returns:
            str | None: The cached or newly detected version, or ``None`` when
            no tool path is set or detection fails. Failures are not cached.
        """

        settings = self.settings
        if settings.detected_version is not None:
            return settings.detected_version
        if not settings.tool_path:
            return None
        detector = self.detector or detect_version
        version = detector(settings.tool_path)
        if version is not None:
            settings.remember_version(version)
            LOGGER.info("Auto-detected and stored PHPStan version: %s", version)
        return version

    def live(self, tmp_file_path: str | None, original_file_path: str | None) -> Command:
        """Return the command analysing an editor buffer saved at ``tmp_file_path``.

        With editor mode available and both paths known, PHPStan analyses the
        original path while reading content from the temp file. Otherwise the
        temp file is analysed directly and path-keyed ``ignoreErrors`` entries
        will not match it.

        Args:
            tmp_file_path: Temp copy of the buffer, if any.
            original_file_path: Real path of the buffer, if known.

        Returns:
            Command: The argument vector without the executable.
        """

        cmd = self.prefix()
        editor_mode = supports_editor_mode(self.resolve_version())
        if editor_mode and tmp_file_path and original_file_path:
            original = self._path(original_file_path)
            cmd.extend([TMP_FILE_FLAG, self._path(tmp_file_path), INSTEAD_OF_FLAG, original, original])
        elif tmp_file_path:
            cmd.append(self._path(tmp_file_path))
        LOGGER.info("PHPStan command: %s", format_command_line(self.settings.tool_path, cmd))
        return tuple(cmd)


def build_batch_command(
    paths: Iterable[str | None],
    settings: AnalyzerSettings,
    *,
    mapper: PathMapper = IDENTITY_MAPPER,
) -> Command:
    """Return the whole-set ``analyze`` command for ``paths``.

    Args:
        paths: Analysis targets; ``None`` entries are dropped.
        settings: Analyser settings.
        mapper: Remote path mapping applied to every path token.

    Returns:
        Command: The argument vector without the executable.
    """

    return PhpStanCommand(settings, mapper).batch(paths)


def build_live_command(
    tmp_file_path: str | None,
    original_file_path: str | None,
    settings: AnalyzerSettings,
    *,
    mapper: PathMapper = IDENTITY_MAPPER,
    detector: VersionDetector | None = None,
) -> Command:
    """Return the on-the-fly ``analyze`` command for an editor buffer.

    Args:
        tmp_file_path: Temp copy of the buffer, if any.
        original_file_path: Real path of the buffer, if known.
        settings: Analyser settings; receives the detected version.
        mapper: Remote path mapping applied to every path token.
        detector: Version detector; defaults to :func:`detect_version`.

    Returns:
        Command: The argument vector without the executable.
    """

    return PhpStanCommand(settings, mapper, detector).live(tmp_file_path, original_file_path)


def batch_targets(
    file_path: str | None,
    project_root: str | None,
    source_roots: Sequence[str],
    settings: AnalyzerSettings,
) -> list[str | None]:
    """Return the paths a whole-set run should analyse.

    Full-project runs cover the project root. Without that flag an explicit
    config file decides the paths itself, otherwise the source roots are used.

    Args:
        file_path: File that triggered the run, if any.
        project_root: Project base directory, if known.
        source_roots: Source directories of the project.
        settings: Analyser settings.

    Returns:
        list[str | None]: Targets for :func:`build_batch_command`.
    """

    if settings.analyze_full_project:
        return [file_path, project_root]
    if settings.config_file:
        return []
    return list(source_roots)


def build_options(
    file_path: str | None,
    settings: AnalyzerSettings,
    *,
    on_the_fly: bool,
    project_root: str | None = None,
    source_roots: Sequence[str] = (),
    registry: TempFilePathRegistry = DEFAULT_PATH_REGISTRY,
    mapper: PathMapper = IDENTITY_MAPPER,
) -> Command:
    """Return the command for one analysis request from the editor.

    On-the-fly requests pass the temp copy of the buffer as ``file_path`` and
    look its original up in ``registry``; whole-set requests analyse the
    targets chosen by :func:`batch_targets`.

    Args:
        file_path: Temp copy of the buffer, or the file that triggered a
            whole-set run.
        settings: Analyser settings.
        on_the_fly: ``True`` for live per-buffer analysis.
        project_root: Project base directory, if known.
        source_roots: Source directories of the project.
        registry: Temp-file path registry used for live requests.
        mapper: Remote path mapping applied to every path token.

    Returns:
        Command: The argument vector without the executable.
    """

    if on_the_fly:
        original = registry.resolve(file_path)
        return build_live_command(file_path, original, settings, mapper=mapper)
    targets = batch_targets(file_path, project_root, source_roots, settings)
    return build_batch_command(targets, settings, mapper=mapper)


def should_show_message(message: str) -> bool:
    """Return ``False`` for tool chatter that should not reach the user.

    Args:
        message: Message text reported by PHPStan.

    Returns:
        bool: ``False`` for the Xdebug advisory, ``True`` otherwise.
    """

    return XDEBUG_ADVISORY not in message


def format_command_line(tool_path: str, options: Sequence[str]) -> str:
    """Return a shell-quoted rendering of the full invocation for logs.

    Args:
        tool_path: PHPStan executable; omitted when empty.
        options: Argument vector produced by the builders.

    Returns:
        str: Command line suitable for logging.
    """

    parts = [tool_path, *options] if tool_path else list(options)
    return shlex.join(parts)


__all__ = [
    "Command",
    "PhpStanCommand",
    "batch_targets",
    "build_batch_command",
    "build_live_command",
    "build_options",
    "format_command_line",
    "should_show_message",
]
