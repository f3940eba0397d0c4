"""
Canonicalization and validation of user-supplied values.

Every value is normalized before it is compared or stored, so lookups,
uniqueness constraints and the stored data always agree.
"""

import uuid
from typing import Any

from .constants import (
    DOMAIN_PATTERN,
    DOMAIN_SCHEME_PATTERN,
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
    ROLE_ADMIN,
    ROLE_USER,
    TRAILING_SLASHES_PATTERN,
)
from .exceptions import ValidationError


def normalize_email(value: Any) -> str:
    return str(value).strip().lower()


def normalize_name(value: Any) -> str:
    return str(value).strip()


def normalize_domain(value: str) -> str:
    """
    Canonicalize a domain name.

    Lowercases, trims, drops a leading http:// or https:// and any trailing
    slashes. Idempotent: ``normalize_domain(normalize_domain(x)) == normalize_domain(x)``.

    >>> normalize_domain("HTTP://Example.com/")
    'example.com'
    """
    normalized = value.strip().lower()
    normalized = DOMAIN_SCHEME_PATTERN.sub("", normalized)
    normalized = TRAILING_SLASHES_PATTERN.sub("", normalized)
    return normalized


def is_valid_domain(value: str) -> bool:
    return DOMAIN_PATTERN.match(value) is not None


def coerce_role(value: Any) -> str:
    """Anything other than exactly "admin" becomes "user"."""
    return ROLE_ADMIN if value == ROLE_ADMIN else ROLE_USER


def parse_object_id(value: Any, message: str = "invalid id") -> uuid.UUID:
    """
    Parse a record identifier.

    Raises:
        ValidationError: If the value is not a well-formed UUID.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(message) from None


def validate_password(value: Any) -> str:
    """
    Check password strength limits and return it as a string.

    Raises:
        ValidationError: If shorter than MIN_PASSWORD_LENGTH characters or
            longer than bcrypt's input limit.
    """
    if not isinstance(value, str) or len(value) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


__all__ = [
    "normalize_email",
    "normalize_name",
    "normalize_domain",
    "is_valid_domain",
    "coerce_role",
    "parse_object_id",
    "validate_password",
]
