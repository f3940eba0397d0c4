"""
Security configuration validation.

Ensures the token secrets and database settings are sane before the
application starts serving requests.
"""

import os
import re
from dataclasses import dataclass

from core.config import FORBIDDEN_SECRET_VALUES
from core.logging import get_logger

logger = get_logger("security.validation")


class SecurityConfigError(Exception):
    """Raised when security configuration is invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        message = "Security configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(message)


@dataclass
class ValidationResult:
    """Result of security validation."""

    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_jwt_secret(secret: str, name: str) -> tuple[bool, str | None]:
    """
    Validate one JWT signing secret.

    Requirements:
    - Must be at least 32 characters
    - Must not be a default/placeholder value
    - Should contain letters or digits

    Args:
        secret: The secret value
        name: Environment variable name, used in messages

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not secret:
        return False, f"{name} is not set"

    if secret.lower() in [v.lower() for v in FORBIDDEN_SECRET_VALUES]:
        return False, f"{name} cannot be a default value"

    if len(secret) < 32:
        return False, f"{name} must be at least 32 characters (got {len(secret)})"

    has_letter = bool(re.search(r"[A-Za-z]", secret))
    has_digit = bool(re.search(r"\d", secret))
    if not has_letter and not has_digit:
        return False, f"{name} should contain a mix of letters and numbers"

    return True, None


def validate_database_url(url: str) -> tuple[bool, str | None, str | None]:
    """
    Validate database URL security.

    Returns:
        Tuple of (is_valid, error_message, warning_message)
    """
    if not url:
        return False, "DATABASE_URL is not set", None

    if url.startswith("sqlite") and os.getenv("ENV") == "production":
        return True, None, "Using SQLite in production - consider PostgreSQL"

    if "@" in url and "://" in url:
        credentials = url.split("://")[1].split("@")[0]
        if ":" in credentials:
            _, password = credentials.split(":", 1)
            if password in ["password", "postgres", "admin", "root", ""]:
                return True, None, "Database password appears to be weak or default"

    return True, None, None


def validate_security_config(
    access_secret: str,
    refresh_secret: str,
    database_url: str | None = None,
    strict: bool = False,
) -> ValidationResult:
    """
    Validate all security configuration.

    Access and refresh tokens must be signed with different secrets so a
    token of one class can never verify as the other.

    Args:
        access_secret: JWT_ACCESS_SECRET
        refresh_secret: JWT_REFRESH_SECRET
        database_url: Database connection URL
        strict: If True, treat warnings as errors

    Returns:
        ValidationResult with errors and warnings

    Raises:
        SecurityConfigError: If validation fails
    """
    errors: list[str] = []
    warnings: list[str] = []

    for secret, name in (
        (access_secret, "JWT_ACCESS_SECRET"),
        (refresh_secret, "JWT_REFRESH_SECRET"),
    ):
        valid, error = validate_jwt_secret(secret, name)
        if not valid and error:
            errors.append(error)

    if access_secret and access_secret == refresh_secret:
        errors.append("JWT_ACCESS_SECRET and JWT_REFRESH_SECRET must be different")

    if database_url is not None:
        valid, error, warning = validate_database_url(database_url)
        if not valid and error:
            errors.append(error)
        if warning:
            warnings.append(warning)

    for error in errors:
        logger.error("config_validation_error", error=error)
    for warning in warnings:
        logger.warning("config_validation_warning", warning=warning)

    if strict and (errors or warnings):
        raise SecurityConfigError(errors + warnings)
    if errors:
        raise SecurityConfigError(errors)

    return ValidationResult(valid=True, errors=errors, warnings=warnings)


def generate_secure_key() -> str:
    """Generate a random JWT signing secret."""
    import secrets

    return secrets.token_urlsafe(48)
