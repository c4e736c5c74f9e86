"""
Core configuration module for Lazy Session.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the LAZY_SESSION_ prefix.

Sections:
- Service configuration (name, environment, log level)
- Session engine configuration (enabled flag, cookie name, save path)
- Cookie transport configuration (signing secret, flags)
- CSRF configuration (token length)
"""

from enum import Enum
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings


DEFAULT_SECRET_KEY = "dev-secret-key-change-in-production"


class Environment(str, Enum):
    """Valid environment values."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the LAZY_SESSION_ prefix for environment variables.
    Example: LAZY_SESSION_SESSIONS_ENABLED=false
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="lazy-session",
        description="Name of the service for logging and identification",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for structured logging",
    )

    # =========================================================================
    # Session Engine Configuration
    # =========================================================================
    sessions_enabled: bool = Field(
        default=True,
        description="When false the session store reports itself as disabled",
    )
    session_name: str = Field(
        default="LAZYSESSID",
        min_length=1,
        description="Session name, used as the session cookie name",
    )
    session_save_path: str = Field(
        default="",
        description="Save path handed to the save handler on open",
    )
    session_auto_start: bool = Field(
        default=True,
        description="Start the session store lazily on first access",
    )

    # =========================================================================
    # Cookie Transport Configuration
    # Pattern: SecretStr for sensitive values (masked in logs/repr)
    # =========================================================================
    session_secret_key: SecretStr = Field(
        default=SecretStr(DEFAULT_SECRET_KEY),
        description="Secret used to sign the session id cookie",
    )
    session_cookie_secure: bool = Field(
        default=False,
        description="Send the session cookie over HTTPS only",
    )
    session_cookie_samesite: Literal["lax", "strict", "none"] = Field(
        default="lax",
        description="SameSite attribute of the session cookie",
    )
    session_cookie_max_age: Optional[int] = Field(
        default=None,
        ge=1,
        description="Cookie lifetime in seconds; None for a browser-session cookie",
    )

    # =========================================================================
    # CSRF Configuration
    # =========================================================================
    csrf_token_bytes: int = Field(
        default=20,
        ge=1,
        le=256,
        description="Random bytes used for a CSRF token (hex length is twice this)",
    )

    model_config = {
        "env_prefix": "LAZY_SESSION_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return level

    @model_validator(mode="after")
    def validate_production_secret(self) -> "Settings":
        """Refuse the development signing secret in production."""
        if self.environment == Environment.PRODUCTION.value:
            secret = self.session_secret_key.get_secret_value()
            if not secret or secret == DEFAULT_SECRET_KEY:
                raise ValueError(
                    "session_secret_key must be set to a private value in production"
                )
        return self


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.
    Tests that change the environment call get_settings.cache_clear().

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
