# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from phpstan_bridge.path_registry import DEFAULT_PATH_REGISTRY


@pytest.fixture(autouse=True)
def _reset_path_registry() -> Iterator[None]:
    """Keep the process-wide path registry isolated between tests."""
    DEFAULT_PATH_REGISTRY.clear()
    yield
    DEFAULT_PATH_REGISTRY.clear()


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so ``caplog`` keeps seeing package records."""
    logger = logging.getLogger("phpstan_bridge")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
