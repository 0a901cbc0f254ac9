"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from the environment and an optional ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "AllRails API"
    app_env: Literal["development", "test", "staging", "production"] = "development"
    debug: bool = False

    host: str = "0.0.0.0"
    port: int = 8000

    public_base_url: str = Field(
        default="http://localhost:5173",
        description="Origin of the web app; share links are {public_base_url}/p/{username}",
    )

    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/allrails",
        description="PostgreSQL URL; a plain postgresql:// scheme is accepted",
    )

    # Identity provider
    auth_jwks_url: str = Field(
        default="",
        description="JWKS endpoint for ES256 tokens; empty disables ES256",
    )
    jwt_secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Shared secret for HS256 tokens",
    )
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 30

    rate_limit_enabled: bool = True

    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed origins",
    )

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """``database_url`` with the asyncpg driver, as hosting providers hand out ``postgresql://``."""
        if self.database_url.startswith("postgresql://"):
            return self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.database_url

    def share_url(self, username: str) -> str:
        """Public page link for a username."""
        return f"{self.public_base_url.rstrip('/')}/p/{username}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
