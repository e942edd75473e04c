"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class AuthConfig(BaseSettings):
    """Authentication configuration.

    The fallback credential is disabled unless ``fallback_identifier`` and
    one of ``fallback_secret_hash`` / ``fallback_secret`` are set.
    """

    model_config = {"env_prefix": "NRFDESK_AUTH_"}

    fallback_identifier: str | None = None
    fallback_secret: str | None = None
    fallback_secret_hash: str | None = None
    fallback_principal_id: str = "fallback-admin"
    bcrypt_rounds: int = 12
    token_expiry_minutes: int = 480
    cookie_name: str = "nrf_admin"
    cookie_secure: bool = False


class DatabaseConfig(BaseSettings):
    """Relational store configuration. No URL means in-memory stores."""

    model_config = {"env_prefix": "NRFDESK_DATABASE_"}

    url: str | None = None
    echo: bool = False
    pool_size: int = 5


class ClassificationConfig(BaseSettings):
    """Exhibitor tagging configuration."""

    model_config = {"env_prefix": "NRFDESK_CLASSIFICATION_"}

    rules_path: str | None = None


class AdminUserConfig(BaseSettings):
    """Admin-user management configuration."""

    model_config = {"env_prefix": "NRFDESK_ADMIN_USERS_"}

    min_password_length: int = 8
    page_size: int = 20


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "NRFDESK_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    auth: AuthConfig = Field(default_factory=AuthConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    admin_users: AdminUserConfig = Field(default_factory=AdminUserConfig)
