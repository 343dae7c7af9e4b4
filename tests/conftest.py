"""Shared pytest fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from steerengine.config import get_steering_settings
from steerengine.logging_config import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog keeps working across tests."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Start every test from freshly loaded settings."""
    get_steering_settings.cache_clear()
    yield
    get_steering_settings.cache_clear()
