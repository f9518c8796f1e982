"""Tests for the application service factories."""

import pytest

from folio.application.services import (
    get_click_rate_limiter,
    get_search_rate_limiter,
    reset_services,
)
from folio.config import reset_settings
from folio.core.exceptions import ConfigurationError


class TestRateLimiterFactories:
    """Tests for limiter wiring from settings."""

    def test_default_presets(self):
        """Search uses the api preset and click tracking the strict one."""
        search = get_search_rate_limiter()
        click = get_click_rate_limiter()

        assert (search.config.max_requests, search.config.window_ms) == (60, 60_000)
        assert (click.config.max_requests, click.config.window_ms) == (10, 60_000)
        assert search.store is click.store

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch):
        """Explicit budgets replace the preset values."""
        monkeypatch.setenv("RATE_LIMIT_CLICK_PRESET", "auth")
        monkeypatch.setenv("RATE_LIMIT_SEARCH_MAX_REQUESTS", "5")
        reset_settings()
        reset_services()

        assert get_click_rate_limiter().config.window_ms == 15 * 60 * 1000
        assert get_search_rate_limiter().config.max_requests == 5

    def test_unknown_preset(self, monkeypatch: pytest.MonkeyPatch):
        """An unknown preset name fails at construction."""
        monkeypatch.setenv("RATE_LIMIT_SEARCH_PRESET", "lenient")
        reset_settings()
        reset_services()

        with pytest.raises(ConfigurationError):
            get_search_rate_limiter()
