"""Shared fixtures for Steam Lookup tests."""

from typing import Any

import pytest

from steam_lookup.config import SteamAPIConfig, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Any:
    """Make every test read settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def steam_config() -> SteamAPIConfig:
    """Steam settings with a test API key."""
    return SteamAPIConfig(api_key="test_api_key_123")
