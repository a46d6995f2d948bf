"""
StoreGate API - Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory, the entrypoint and the logging setup.
When:  Loaded once at module import time; validated before the app starts.

Environment variables (case-insensitive):
    PORT / HOST                  Listening address (default 0.0.0.0:3000)
    ENVIRONMENT                  development | production | test
    LOG_LEVEL                    DEBUG, INFO, WARNING, ERROR, CRITICAL
    CORS_ORIGINS                 Comma-separated origins, "*" for any
    DEFAULT_LANGUAGE             Fallback language for responses (es | en)
    LOGIN_RATE_LIMIT_REQUESTS    Login attempts allowed per window (default 5)
    LOGIN_RATE_LIMIT_WINDOW      Login window in seconds (default 900)
    API_RATE_LIMIT_REQUESTS      /api requests allowed per window (default 100)
    API_RATE_LIMIT_WINDOW        /api window in seconds (default 900)
    API_TOKEN                    Static bearer token accepted by the auth gate
    ADMIN_EMAIL / ADMIN_PASSWORD The single credential pair accepted by login
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from app.i18n import SUPPORTED_LANGUAGES


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for a local demo:
    one admin account, one static token, a strict login limiter and a
    looser limiter for the resource API.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # What: Deployment mode. Only "development" exposes exception messages
    # in 500 responses; every other value keeps them server-side.
    environment: str = Field(default="production")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Normalizes and checks the deployment mode."""
        valid = {"development", "production", "test"}
        lower = v.lower()
        if lower not in valid:
            raise ValueError(f"Invalid environment '{v}'. Must be one of: {valid}")
        return lower

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── i18n ──────────────────────────────────────────────────────────────
    default_language: str = Field(default="es")

    @field_validator("default_language")
    @classmethod
    def validate_default_language(cls, v: str) -> str:
        lower = v.lower()
        if lower not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported default_language '{v}'. Must be one of: {sorted(SUPPORTED_LANGUAGES)}"
            )
        return lower

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # Fixed window per client IP. The login limiter guards POST /auth/login;
    # the API limiter is shared by every /api route.
    login_rate_limit_requests: int = Field(default=5, ge=1)
    login_rate_limit_window: int = Field(default=15 * 60, ge=1)  # seconds
    api_rate_limit_requests: int = Field(default=100, ge=1)
    api_rate_limit_window: int = Field(default=15 * 60, ge=1)  # seconds

    # ── Credentials ───────────────────────────────────────────────────────
    # Static values consumed by StaticCredentialVerifier. Swap the verifier
    # (see app.services.auth) to plug in real authentication.
    api_token: str = Field(default="mi-token-secreto")
    admin_email: str = Field(default="admin@example.com")
    admin_password: str = Field(default="admin123")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
