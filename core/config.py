"""
Application configuration using Pydantic settings.

Usage:
    from core.config import get_settings
    settings = get_settings()

For constants, import from core.constants:
    from core.constants import ROLE_ADMIN, DOMAIN_STATUSES
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder secrets that must never reach production
FORBIDDEN_SECRET_VALUES = [
    "CHANGE_ME",
    "CHANGE_ME_ACCESS",
    "CHANGE_ME_REFRESH",
    "changeme",
    "secret",
    "your-secret-key",
    "jwt-secret",
    "supersecret",
    "development",
    "test",
]


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for production:
        - JWT_ACCESS_SECRET (min 32 chars)
        - JWT_REFRESH_SECRET (min 32 chars, different from the access secret)
        - DATABASE_URL
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "Domain Registry API"
    api_prefix: str = "/api"
    debug: bool = Field(default=False)

    # Database
    database_url: str = Field(default="sqlite:///domain_registry.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # JWT / Authentication
    jwt_access_secret: str = Field(default="CHANGE_ME_ACCESS", validation_alias="JWT_ACCESS_SECRET")
    jwt_refresh_secret: str = Field(default="CHANGE_ME_REFRESH", validation_alias="JWT_REFRESH_SECRET")
    jwt_algorithm: str = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=15, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    refresh_token_expire_days: int = Field(default=7, validation_alias="REFRESH_TOKEN_EXPIRE_DAYS")

    # Password hashing cost factor
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, validation_alias="BCRYPT_ROUNDS")

    # HTTP
    cors_allowed_origins: str = Field(default="http://localhost:5173", validation_alias="CORS_ALLOWED_ORIGINS")
    max_request_size_mb: int = Field(default=1, validation_alias="MAX_REQUEST_SIZE_MB")

    @field_validator("jwt_access_secret", "jwt_refresh_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Validate JWT secrets - warns in dev, errors in production."""
        import os
        import warnings

        env = os.getenv("ENV", "development")
        is_production = env.lower() in ("production", "prod")

        is_forbidden = v.lower() in [fv.lower() for fv in FORBIDDEN_SECRET_VALUES]
        is_too_short = len(v) < 32

        if is_production:
            if is_forbidden:
                raise ValueError(
                    "JWT secrets cannot be a default value in production. "
                    "Generate a secure key with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
                )
            if is_too_short:
                raise ValueError(
                    f"JWT secrets must be at least 32 characters in production (got {len(v)})"
                )
        elif is_forbidden:
            warnings.warn(
                "A JWT secret is set to a default value. "
                "This is insecure - set a proper key for production.",
                UserWarning,
                stacklevel=2,
            )
        elif is_too_short:
            warnings.warn(
                f"JWT secrets should be at least 32 characters (got {len(v)})",
                UserWarning,
                stacklevel=2,
            )

        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if self.jwt_access_secret == self.jwt_refresh_secret:
            errors.append("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must be different")

        if self.database_url.startswith("sqlite"):
            warnings.append("DATABASE_URL points to SQLite - use PostgreSQL in production")

        if self.bcrypt_rounds < 12:
            warnings.append(f"BCRYPT_ROUNDS={self.bcrypt_rounds} is below the recommended 12")

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
