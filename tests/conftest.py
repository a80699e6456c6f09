# tests/conftest.py

"""Shared pytest fixtures for the catalog tests."""

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def isolate_snackbar_logger() -> Generator[None, None, None]:
    """Close and drop handlers that a test attached to ``snackbar``."""
    root_logger = logging.getLogger("snackbar")
    before = list(root_logger.handlers)
    yield
    for handler in list(root_logger.handlers):
        if handler not in before:
            root_logger.removeHandler(handler)
            handler.close()
