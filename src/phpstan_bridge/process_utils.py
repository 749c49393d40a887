# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; the wrapper normalises arguments
# and never enables ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404

TIMEOUT_RETURNCODE: Final[int] = 124


class TimedOutProcess(subprocess.CompletedProcess):
    """Completed process standing in for a command killed at its timeout."""

    def __init__(
        self,
        args: Sequence[str],
        stdout: str,
        stderr: str,
        timeout: float | None,
    ) -> None:
        super().__init__(args=list(args), returncode=TIMEOUT_RETURNCODE, stdout=stdout, stderr=stderr)
        self.timeout = timeout


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
    capture_output: bool = False,
    merge_stderr: bool = False,
    timeout: float | None = None,
    discard_stdin: bool = False,
) -> _CompletedProcess[str]:
    """Execute *args* after normalising the executable path.

    When ``merge_stderr`` is set the child's stderr is folded into ``stdout``.
    A command exceeding ``timeout`` is killed and reported as a
    :class:`TimedOutProcess` (return code ``124``) instead of raising
    ``TimeoutExpired``.
    """

    normalized = _normalize_args(args)
    if merge_stderr:
        streams = {"stdout": subprocess.PIPE, "stderr": subprocess.STDOUT}
    else:
        streams = {"capture_output": capture_output}

    try:
        # Bandit: argument lists are passed directly without shell expansion.
        completed: _CompletedProcess[str] = subprocess.run(  # nosec B603
            normalized,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            check=False,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            stdin=subprocess.DEVNULL if discard_stdin else None,
            **streams,
        )
    except subprocess.TimeoutExpired as exc:
        # ``subprocess.run`` has already killed and reaped the child here.
        stdout = _ensure_text(exc.stdout) or ""
        stderr = _ensure_text(exc.stderr)
        timeout_msg = (
            f"Command timed out after {timeout:.1f}s" if timeout is not None else "Command timed out"
        )
        combined_stderr = f"{stderr}\n{timeout_msg}" if stderr else timeout_msg
        completed = TimedOutProcess(normalized, stdout, combined_stderr, timeout)

    if check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


def timed_out(completed: _CompletedProcess[str]) -> bool:
    """Return ``True`` when *completed* stands in for a command killed at its timeout.

    Args:
        completed: Result returned by :func:`run_command`.

    Returns:
        bool: ``True`` for :class:`TimedOutProcess` results; ``False`` for a
        tool that exits with status 124 on its own.
    """

    return isinstance(completed, TimedOutProcess)


__all__ = [
    "SubprocessExecutionError",
    "TIMEOUT_RETURNCODE",
    "TimedOutProcess",
    "run_command",
    "timed_out",
]
