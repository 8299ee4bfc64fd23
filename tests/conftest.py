"""
numlit Test Configuration
=========================

pytest fixtures shared by all numlit tests.

The process-wide configuration is read from the environment once and
cached, so every test starts from a clean environment and an empty cache.
"""

import pytest

from numlit.config import get_config


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Remove NUMLIT_* variables and reset the cached configuration."""
    for name in ("NUMLIT_BUILD_MODE", "NUMLIT_DEFAULT_INT", "NUMLIT_DEFAULT_FLOAT"):
        monkeypatch.delenv(name, raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()
