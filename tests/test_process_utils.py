# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the subprocess wrapper."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from phpstan_bridge.process_utils import (
    TIMEOUT_RETURNCODE,
    SubprocessExecutionError,
    TimedOutProcess,
    run_command,
    timed_out,
)


def test_run_command_requires_arguments() -> None:
    with pytest.raises(ValueError):
        run_command([])


def test_run_command_reports_missing_executable() -> None:
    with pytest.raises(FileNotFoundError):
        run_command(["phpstan-bridge-definitely-not-installed"])


def test_run_command_merges_stderr() -> None:
    completed = run_command(
        [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"],
        check=False,
        merge_stderr=True,
    )

    assert "out" in completed.stdout
    assert "err" in completed.stdout


def test_run_command_check_raises_with_details() -> None:
    with pytest.raises(SubprocessExecutionError) as excinfo:
        run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(2)"],
            capture_output=True,
        )

    assert excinfo.value.returncode == 2
    assert excinfo.value.stderr == "boom"


def test_run_command_timeout_returns_sentinel(tmp_path: Path) -> None:
    completed = run_command(
        [sys.executable, "-c", "import time; time.sleep(10)"],
        check=False,
        capture_output=True,
        timeout=0.5,
        cwd=tmp_path,
    )

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert isinstance(completed, TimedOutProcess)
    assert completed.timeout == 0.5
    assert timed_out(completed)
    assert "timed out after 0.5s" in completed.stderr


def test_exit_status_124_is_not_a_timeout() -> None:
    completed = run_command(
        [sys.executable, "-c", "import sys; sys.stderr.write('timed out waiting for lock'); sys.exit(124)"],
        check=False,
        capture_output=True,
    )

    assert completed.returncode == TIMEOUT_RETURNCODE
    assert "timed out" in completed.stderr
    assert timed_out(completed) is False
