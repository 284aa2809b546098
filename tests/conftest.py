"""Shared fixtures."""

import pytest

from propgen.core.random_source import reset_default_source
from propgen.core.settings import reset_settings


@pytest.fixture(autouse=True)
def clean_global_state():
    """Give every test the default settings and a fresh default source."""
    reset_settings()
    reset_default_source()
    yield
    reset_settings()
    reset_default_source()
