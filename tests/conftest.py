"""Shared fixtures for the adrus test suite."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_adrus_logging():
    """Drop handlers and levels the CLI installs so tests don't leak into each other."""
    yield
    logger = logging.getLogger("adrus")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
