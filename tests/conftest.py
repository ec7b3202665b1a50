"""Shared fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by setup_logging so they never outlive a captured stream."""
    yield
    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, "_wordlist_forge", False)]:
        root.removeHandler(h)
        h.close()
