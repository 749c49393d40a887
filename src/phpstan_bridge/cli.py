# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line front end for PHPStan invocation helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from .commands import Command, batch_targets, build_batch_command, build_live_command, format_command_line
from .config_loader import ConfigError, load_cached_version, load_settings, save_detected_version
from .logging import configure_logging, fail, info, ok, warn
from .settings import AnalyzerSettings
from .versioning import detect_version, parse_version, supports_editor_mode

app = typer.Typer(help="Build PHPStan command lines for editors.", no_args_is_help=True)

RootOption = Annotated[Path, typer.Option("--root", "-r", help="Project root.")]
ToolPathOption = Annotated[str | None, typer.Option("--tool-path", help="PHPStan executable.")]
LevelOption = Annotated[int | None, typer.Option("--level", "-l", min=0, max=9, help="Rule level.")]
MemoryOption = Annotated[str | None, typer.Option("--memory-limit", help="Memory limit, e.g. 2G.")]
ConfigOption = Annotated[str | None, typer.Option("--config", "-c", help="PHPStan config file.")]
AutoloadOption = Annotated[str | None, typer.Option("--autoload", "-a", help="Extra autoload file.")]
VersionOption = Annotated[str | None, typer.Option("--phpstan-version", help="Skip detection and assume this version.")]
CacheDirOption = Annotated[Path | None, typer.Option("--cache-dir", help="Directory holding the version cache.")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the argument vector as JSON.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Configure logging for every sub-command."""

    configure_logging(verbose)


def _load(root: Path, cache_dir: Path | None, **overrides: Any) -> AnalyzerSettings:
    try:
        settings = load_settings(root.resolve(), overrides=overrides)
    except ConfigError as exc:
        fail(str(exc))
        raise typer.Exit(code=2) from exc
    if settings.detected_version is None and cache_dir is not None:
        settings.remember_version(load_cached_version(cache_dir))
    return settings


def _emit(command: Command, settings: AnalyzerSettings, as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps([settings.tool_path, *command] if settings.tool_path else list(command)))
    else:
        typer.echo(format_command_line(settings.tool_path, command))


@app.command("settings")
def settings_command(
    root: RootOption = Path("."),
    cache_dir: CacheDirOption = None,
) -> None:
    """Print the resolved settings, host limits included, as JSON."""

    settings = _load(root, cache_dir)
    payload = settings.model_dump(mode="json")
    payload["timeout_seconds"] = settings.timeout_seconds
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))


@app.command("version")
def version_command(
    tool_path: Annotated[str, typer.Argument(help="PHPStan executable to query.")],
    cache_dir: CacheDirOption = None,
) -> None:
    """Detect the version of ``tool_path`` and report editor mode support."""

    version = detect_version(tool_path)
    if version is None:
        fail(f"Could not determine PHPStan version from {tool_path}")
        raise typer.Exit(code=1)
    if cache_dir is not None:
        save_detected_version(cache_dir, version)
    ok(f"PHPStan {version}")
    if supports_editor_mode(version):
        info("Editor mode (--tmp-file/--instead-of) is supported.")
    else:
        warn("Editor mode is not supported; buffers are analysed from their temp copies.")


@app.command("supports")
def supports_command(
    version: Annotated[str, typer.Argument(help="Version string such as 1.12.27.")],
) -> None:
    """Exit with status 0 when ``version`` supports editor mode, 1 otherwise."""

    if parse_version(version) is None:
        fail(f"Unparseable version: {version}")
        raise typer.Exit(code=2)
    if supports_editor_mode(version):
        ok(f"{version} supports editor mode")
        return
    warn(f"{version} does not support editor mode")
    raise typer.Exit(code=1)


@app.command("live")
def live_command(
    tmp_file: Annotated[str, typer.Argument(help="Temporary copy of the edited buffer.")],
    original: Annotated[str | None, typer.Option("--original", "-o", help="Real path of the buffer.")] = None,
    root: RootOption = Path("."),
    tool_path: ToolPathOption = None,
    level: LevelOption = None,
    memory_limit: MemoryOption = None,
    config: ConfigOption = None,
    autoload: AutoloadOption = None,
    phpstan_version: VersionOption = None,
    cache_dir: CacheDirOption = None,
    as_json: JsonOption = False,
) -> None:
    """Print the on-the-fly command for an edited buffer."""

    settings = _load(
        root,
        cache_dir,
        tool_path=tool_path,
        level=level,
        memory_limit=memory_limit,
        config_file=config,
        autoload_file=autoload,
        detected_version=phpstan_version,
    )
    had_version = settings.detected_version is not None
    command = build_live_command(tmp_file, original, settings)
    if not had_version and settings.detected_version is not None and cache_dir is not None:
        save_detected_version(cache_dir, settings.detected_version)
    _emit(command, settings, as_json)


@app.command("batch")
def batch_command(
    paths: Annotated[list[str] | None, typer.Argument(help="Files or directories to analyse.")] = None,
    root: RootOption = Path("."),
    tool_path: ToolPathOption = None,
    level: LevelOption = None,
    memory_limit: MemoryOption = None,
    config: ConfigOption = None,
    autoload: AutoloadOption = None,
    full_project: Annotated[
        bool | None,
        typer.Option("--full-project/--no-full-project", help="Analyse the whole project root."),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Print the whole-set command for ``paths`` or the project defaults."""

    settings = _load(
        root,
        None,
        tool_path=tool_path,
        level=level,
        memory_limit=memory_limit,
        config_file=config,
        autoload_file=autoload,
        analyze_full_project=full_project,
    )
    targets: list[str | None] = list(paths or [])
    if not targets:
        project_root = str(root.resolve())
        targets = batch_targets(None, project_root, (project_root,), settings)
    _emit(build_batch_command(targets, settings), settings, as_json)


__all__ = ["app"]
