# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for CLI tests."""

from __future__ import annotations

import logging
from typing import Generator

import pytest
from click.testing import CliRunner

from yunos_cli.main import LOGGER_NAMES, ClickHandler


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_cli_logging() -> Generator[None, None, None]:
    """Detach the handlers each CLI invocation installs."""
    yield
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if isinstance(handler, ClickHandler):
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
