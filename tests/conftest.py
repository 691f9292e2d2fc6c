"""Shared pytest fixtures."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installs so later tests do not write to closed streams."""

    yield
    logger = logging.getLogger("kerala_results")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
