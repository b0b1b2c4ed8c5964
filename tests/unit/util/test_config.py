"""Unit tests for settings and provider selection."""

import pytest

from discuss.config import Settings
from discuss.util.di import BackendProvider, ProdBackendProvider, get_provider
from discuss.util.di.core import ProdConfigProvider
from tests.di import MockBackendProvider, build_test_container


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BACKEND__BASE_URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.backend.root_page_size == 20
        assert settings.threads.max_display_depth == 5
        assert settings.api.base_url == "http://localhost:8000"

    def test_nested_values_from_environment(self, monkeypatch):
        monkeypatch.setenv("BACKEND__BASE_URL", "https://comments.example.com/api")
        monkeypatch.setenv("THREADS__MAX_DISPLAY_DEPTH", "3")

        settings = Settings(_env_file=None)

        assert settings.backend.base_url == "https://comments.example.com/api"
        assert settings.threads.max_display_depth == 3

    def test_production_uses_https(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("HOST", "threads.example.com")

        settings = Settings(_env_file=None)

        assert settings.api.base_url == "https://threads.example.com"


class TestProviderSelection:
    """Tests for get_provider and the test container."""

    def test_mockable_component_resolves_by_flag(self):
        assert get_provider(BackendProvider, use_mock=False) is ProdBackendProvider
        assert get_provider(BackendProvider, use_mock=True) is MockBackendProvider

    def test_concrete_provider_is_returned_as_is(self):
        assert get_provider(ProdConfigProvider, use_mock=True) is ProdConfigProvider

    def test_unknown_component_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"database"})
