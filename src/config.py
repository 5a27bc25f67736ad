"""Application configuration using pydantic-settings."""

from enum import Enum
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


DEFAULT_JWT_SECRET = "dev-secret-key-change-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Environment = Environment.DEVELOPMENT
    debug: bool = True
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./data/worku.db"
    database_auto_create: bool = True  # Production schemas are managed by alembic

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:3000"

    # JWT Settings
    jwt_secret_key: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "worku"
    access_token_expire_minutes: int = Field(default=1440, ge=1)
    refresh_token_expire_days: int = Field(default=7, ge=1)

    # Password hashing
    bcrypt_rounds: int = Field(default=12, ge=4, le=16)

    # Provision every known role at startup
    seed_default_roles: bool = True

    @model_validator(mode="after")
    def _require_secret_in_production(self) -> "Settings":
        if self.app_env == Environment.PRODUCTION and self.jwt_secret_key == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET_KEY must be set in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.app_env == Environment.DEVELOPMENT

    @property
    def access_token_expire_seconds(self) -> int:
        """Access token lifetime in seconds, as reported to clients."""
        return self.access_token_expire_minutes * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience access
settings = get_settings()
