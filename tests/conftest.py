"""Shared test configuration."""

import os

import pytest

from orator.config import get_settings

os.environ["ENVIRONMENT"] = "development"


@pytest.fixture(autouse=True)
def reset_cached_settings():
    """Drop cached settings so env overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
