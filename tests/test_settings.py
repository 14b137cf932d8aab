"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from imageforge.core.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings.from_env()."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.abort_early is False
        assert settings.error_history == 100
        assert settings.recent_window_seconds == 60
        assert settings.max_retries == 3
        assert settings.config_cache_ttl == 300
        assert settings.registry is None

    def test_reads_prefixed_variables(self):
        settings = Settings.from_env(
            {
                "IMAGEFORGE_ABORT_EARLY": "true",
                "IMAGEFORGE_ERROR_HISTORY": "10",
                "IMAGEFORGE_REGISTRY": "ghcr.io/acme",
            }
        )
        assert settings.abort_early is True
        assert settings.error_history == 10
        assert settings.registry == "ghcr.io/acme"

    def test_empty_values_are_ignored(self):
        assert Settings.from_env({"IMAGEFORGE_MAX_RETRIES": ""}).max_retries == 3

    def test_unprefixed_variables_are_ignored(self):
        assert Settings.from_env({"ABORT_EARLY": "true"}).abort_early is False

    def test_invalid_values_are_rejected(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"IMAGEFORGE_ERROR_HISTORY": "0"})

    def test_get_settings_reads_environment(self, monkeypatch):
        monkeypatch.setenv("IMAGEFORGE_MAX_RETRIES", "7")
        assert get_settings(dotenv=False).max_retries == 7
