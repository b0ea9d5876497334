"""Shared fixtures for the extractor test suite."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_salespage_logger():
    """Drop handlers the CLI attaches so they don't outlive captured streams."""
    yield
    logger = logging.getLogger("salespage")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
