"""Tests for Settings (environment configuration)."""

import pytest

from dumpling.config import DEFAULT_BASE_URL, DEFAULT_PREVIEW_LENGTH, Settings
from dumpling.errors import AuthError, ConfigError


class TestSettingsFromEnv:
    """Settings.from_env() parsing."""

    def test_defaults(self):
        """An empty environment gives the documented defaults."""
        settings = Settings.from_env({})

        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout is None
        assert settings.preview_length == DEFAULT_PREVIEW_LENGTH == 100
        assert settings.log_level == "INFO"

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "DUMPLING_BASE_URL": "https://staging.dumpling.test/",
                "DUMPLING_TIMEOUT": "45",
                "DUMPLING_PREVIEW_LENGTH": "20",
                "DUMPLING_LOG_LEVEL": "debug",
            }
        )

        assert settings.base_url == "https://staging.dumpling.test"
        assert settings.timeout == 45.0
        assert settings.preview_length == 20
        assert settings.log_level == "DEBUG"

    def test_blank_values_fall_back_to_defaults(self):
        settings = Settings.from_env({"DUMPLING_BASE_URL": "  ", "DUMPLING_TIMEOUT": ""})

        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout is None

    @pytest.mark.parametrize(
        "env",
        [
            {"DUMPLING_TIMEOUT": "soon"},
            {"DUMPLING_TIMEOUT": "0"},
            {"DUMPLING_PREVIEW_LENGTH": "ten"},
            {"DUMPLING_PREVIEW_LENGTH": "-1"},
        ],
    )
    def test_invalid_numbers_raise_config_error(self, env):
        with pytest.raises(ConfigError):
            Settings.from_env(env)

    def test_api_key_is_not_read_at_construction(self, no_api_key):
        """Settings can be built without a key; tool listing depends on it."""
        settings = Settings.from_env({})
        assert settings.api_key_env == "DUMPLING_API_KEY"


class TestResolveApiKey:
    """Settings.resolve_api_key() reads the key on every call."""

    def test_returns_key(self, api_key):
        assert Settings().resolve_api_key() == api_key

    def test_missing_key_raises_auth_error(self, no_api_key):
        with pytest.raises(AuthError) as exc_info:
            Settings().resolve_api_key()

        assert "DUMPLING_API_KEY environment variable not set" in str(exc_info.value)
        assert isinstance(exc_info.value, ConfigError)

    def test_blank_key_counts_as_missing(self, monkeypatch):
        monkeypatch.setenv("DUMPLING_API_KEY", "   ")
        with pytest.raises(AuthError):
            Settings().resolve_api_key()

    def test_key_changes_are_picked_up(self, monkeypatch):
        settings = Settings()
        monkeypatch.setenv("DUMPLING_API_KEY", "first")
        assert settings.resolve_api_key() == "first"
        monkeypatch.setenv("DUMPLING_API_KEY", "second")
        assert settings.resolve_api_key() == "second"
