"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from sellerdesk.config.settings import get_settings


@pytest.fixture(autouse=True)
def _clear_cache() -> None:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SELLER_API_BASE_URL", "https://api.shop.test")
    monkeypatch.setenv("SELLER_API_TIMEOUT", "12.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.seller_api_base_url == "https://api.shop.test"
    assert settings.seller_api_timeout == 12.5
    assert settings.log_level == "debug"


def test_settings_are_cached() -> None:
    assert get_settings() is get_settings()
