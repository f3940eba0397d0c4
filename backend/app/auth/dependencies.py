"""
Authentication dependencies for FastAPI routes.

Two gates, meant to be chained:
- require_auth: a valid access token in the Authorization header
- require_admin: the authenticated caller has the admin role
"""

import uuid
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.constants import ROLE_ADMIN
from core.exceptions import AuthError, ForbiddenError
from core.logging import bind_context, get_logger

from .jwt import InvalidTokenError, decode_access_token

logger = get_logger("auth.gates")

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Caller identity taken from the access token."""

    id: uuid.UUID
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def require_auth(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthContext:
    """
    Resolve the caller from an ``Authorization: Bearer <token>`` header.

    The identity comes from the token alone; no database lookup happens.
    On success it is also attached to ``request.state.user``.

    Raises:
        AuthError: If the header is missing, uses another scheme, or the
            token does not verify.
    """
    # HTTPBearer accepts any casing of the scheme; only "Bearer" is honoured here
    if credentials is None or credentials.scheme != "Bearer" or not credentials.credentials:
        raise AuthError("missing access token")

    try:
        payload = decode_access_token(credentials.credentials)
        identity = AuthContext(id=uuid.UUID(payload.subject), role=payload.role)
    except (InvalidTokenError, ValueError):
        raise AuthError("invalid or expired access token") from None

    request.state.user = identity
    bind_context(user_id=str(identity.id))
    return identity


def require_admin(identity: AuthContext | None = Depends(require_auth)) -> AuthContext:
    """
    Allow only administrators through.

    Raises:
        AuthError: If no identity is attached (require_auth did not run).
        ForbiddenError: If the caller is not an admin.
    """
    if identity is None:
        raise AuthError("unauthorized")

    if not identity.is_admin:
        logger.warning("admin_access_denied", user_id=str(identity.id), role=identity.role)
        raise ForbiddenError("admin access required")

    return identity
