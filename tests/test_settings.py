"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from course_progression.config import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Defaults should be usable without any environment."""
        settings = Settings(_env_file=None)
        assert settings.navigation_warning_message == "You must proceed in order."
        assert settings.course_list_cache_prefix == "courses:list"
        assert settings.api_page_size == 100
        assert settings.is_development is True

    def test_environment_override(self, monkeypatch) -> None:
        """Environment variables should override defaults."""
        monkeypatch.setenv("API_BASE_URL", "https://lms.example.com/api")
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("API_PAGE_SIZE", "25")

        settings = Settings(_env_file=None)

        assert settings.api_base_url == "https://lms.example.com/api"
        assert settings.is_production is True
        assert settings.api_page_size == 25

    def test_invalid_page_size(self) -> None:
        """Page size must be positive."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, api_page_size=0)

    def test_get_settings_cached(self) -> None:
        """get_settings should return the same instance."""
        assert get_settings() is get_settings()
