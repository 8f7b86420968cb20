"""Shared test fixtures for tablerender."""

from __future__ import annotations

import pytest

from tablerender.config import get_config


@pytest.fixture(autouse=True)
def _clear_config_cache(monkeypatch):
    """Re-read the default profile around each test."""
    monkeypatch.delenv("TABLERENDER_CONFIG_NAME", raising=False)
    get_config.cache_clear()
    yield
    get_config.cache_clear()
