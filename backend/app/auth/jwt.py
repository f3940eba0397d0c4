"""
JWT helper utilities.

Two token classes are issued, each with its own secret and lifetime:

* access tokens (short-lived) authorize API calls,
* refresh tokens (long-lived) can only be exchanged for a new pair.

Both carry the subject (user id) and the user's role. Embedding the role
means authorization needs no database lookup per request; the trade-off is
that a role change only applies once the previous access token expires.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from core.constants import ROLES

from ..config import get_settings
from ..models import User

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"


class InvalidTokenError(ValueError):
    """Raised when a token fails signature, expiry or claim checks."""


@dataclass(frozen=True)
class TokenPayload:
    subject: str
    role: str


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


def _encode(claims: Dict[str, Any], secret: str, expires_delta: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    to_encode = claims.copy()
    to_encode.update({
        "iat": now,
        "exp": now + expires_delta,
        "jti": str(uuid.uuid4()),
    })
    return jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)


def create_access_token(user: User, expires_minutes: int | None = None) -> str:
    """
    Create a signed access token for a user.

    Args:
        user: Token subject; its id and role are embedded.
        expires_minutes: Optional override for the expiration window.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    return _encode(
        {"sub": str(user.id), "role": user.role, "type": TOKEN_TYPE_ACCESS},
        settings.jwt_access_secret,
        timedelta(minutes=expires_minutes or settings.access_token_expire_minutes),
    )


def create_refresh_token(user: User, expires_days: int | None = None) -> str:
    """Create a signed refresh token for a user."""
    settings = get_settings()
    return _encode(
        {"sub": str(user.id), "role": user.role, "type": TOKEN_TYPE_REFRESH},
        settings.jwt_refresh_secret,
        timedelta(days=expires_days or settings.refresh_token_expire_days),
    )


def create_token_pair(user: User) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user),
        refresh_token=create_refresh_token(user),
    )


def _decode(token: str, secret: str, expected_type: str) -> TokenPayload:
    settings = get_settings()
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidTokenError("Invalid token") from exc

    if payload.get("type") != expected_type:
        raise InvalidTokenError(f"Expected a {expected_type} token")

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or role not in ROLES:
        raise InvalidTokenError("Token is missing required claims")

    return TokenPayload(subject=subject, role=role)


def decode_access_token(token: str) -> TokenPayload:
    """
    Decode and validate an access token.

    Raises:
        InvalidTokenError: If the signature, expiry or claims are invalid,
            including when a refresh token is presented.
    """
    return _decode(token, get_settings().jwt_access_secret, TOKEN_TYPE_ACCESS)


def decode_refresh_token(token: str) -> TokenPayload:
    """
    Decode and validate a refresh token.

    Raises:
        InvalidTokenError: As for decode_access_token.
    """
    return _decode(token, get_settings().jwt_refresh_secret, TOKEN_TYPE_REFRESH)
