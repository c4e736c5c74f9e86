"""
Unit tests for src/core/config.py - Settings class and singleton.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError


# =============================================================================
# Defaults
# =============================================================================


class TestSettingsDefaults:
    """Tests for default values."""

    def test_settings_extends_base_settings(self):
        from pydantic_settings import BaseSettings

        from src.core.config import Settings

        assert issubclass(Settings, BaseSettings)

    def test_service_defaults(self):
        from src.core.config import Settings

        settings = Settings()

        assert settings.service_name == "lazy-session"
        assert settings.environment == "development"
        assert settings.log_level == "INFO"

    def test_session_defaults(self):
        from src.core.config import Settings

        settings = Settings()

        assert settings.sessions_enabled is True
        assert settings.session_name == "LAZYSESSID"
        assert settings.session_save_path == ""
        assert settings.session_auto_start is True
        assert settings.session_cookie_max_age is None
        assert settings.session_cookie_samesite == "lax"
        assert settings.csrf_token_bytes == 20

    def test_secret_key_is_masked(self):
        from src.core.config import DEFAULT_SECRET_KEY, Settings

        settings = Settings()

        assert DEFAULT_SECRET_KEY not in repr(settings)
        assert settings.session_secret_key.get_secret_value() == DEFAULT_SECRET_KEY


# =============================================================================
# Environment variables
# =============================================================================


class TestSettingsEnvironment:
    """Settings are read from LAZY_SESSION_ prefixed variables."""

    def test_env_prefix(self):
        from src.core.config import Settings

        env = {
            "LAZY_SESSION_SESSIONS_ENABLED": "false",
            "LAZY_SESSION_SESSION_NAME": "APPSESSID",
            "LAZY_SESSION_CSRF_TOKEN_BYTES": "32",
            "LAZY_SESSION_SESSION_COOKIE_MAX_AGE": "3600",
        }
        with patch.dict(os.environ, env):
            settings = Settings()

        assert settings.sessions_enabled is False
        assert settings.session_name == "APPSESSID"
        assert settings.csrf_token_bytes == 32
        assert settings.session_cookie_max_age == 3600

    def test_unprefixed_variables_are_ignored(self):
        from src.core.config import Settings

        with patch.dict(os.environ, {"SESSION_NAME": "OTHER"}):
            settings = Settings()

        assert settings.session_name == "LAZYSESSID"


# =============================================================================
# Validation
# =============================================================================


class TestSettingsValidation:
    """Tests for field and model validators."""

    def test_log_level_is_normalized(self):
        from src.core.config import Settings

        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        from src.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(log_level="VERBOSE")

    def test_invalid_environment(self):
        from src.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(environment="qa")

    @pytest.mark.parametrize("value", [0, -1, 257])
    def test_csrf_token_bytes_bounds(self, value):
        from src.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(csrf_token_bytes=value)

    def test_invalid_samesite(self):
        from src.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(session_cookie_samesite="sometimes")

    def test_empty_session_name(self):
        from src.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(session_name="")

    def test_production_rejects_default_secret(self):
        from src.core.config import Settings

        with pytest.raises(ValidationError, match="session_secret_key"):
            Settings(environment="production")

    def test_production_rejects_empty_secret(self):
        from src.core.config import Settings

        with pytest.raises(ValidationError):
            Settings(environment="production", session_secret_key="")

    def test_production_accepts_private_secret(self):
        from src.core.config import Settings

        settings = Settings(environment="production", session_secret_key="s3cr3t-value")

        assert settings.environment == "production"


# =============================================================================
# Singleton
# =============================================================================


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_get_settings_returns_same_instance(self):
        from src.core.config import get_settings

        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def test_cache_clear_rereads_environment(self):
        from src.core.config import get_settings

        get_settings.cache_clear()
        try:
            with patch.dict(os.environ, {"LAZY_SESSION_SESSION_NAME": "FIRST"}):
                first = get_settings()
            get_settings.cache_clear()
            with patch.dict(os.environ, {"LAZY_SESSION_SESSION_NAME": "SECOND"}):
                second = get_settings()
        finally:
            get_settings.cache_clear()

        assert first.session_name == "FIRST"
        assert second.session_name == "SECOND"
