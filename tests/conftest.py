"""Root fixtures for all tests."""

import pytest

from mockster.config import get_settings


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop cached settings so env changes in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
