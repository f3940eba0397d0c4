"""
Login and token refresh.
"""

import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.constants import STATUS_INACTIVE
from core.exceptions import AuthError, InternalError, ValidationError
from core.logging import get_logger
from core.normalization import normalize_email
from core.repositories import UserRepository
from core.security import verify_password

from ..auth.jwt import InvalidTokenError, TokenPair, create_token_pair, decode_refresh_token
from ..models import User
from ..schemas import LoginRequest

logger = get_logger("auth")


def login(db: Session, payload: LoginRequest) -> tuple[User, TokenPair]:
    """
    Check credentials and issue an access/refresh token pair.

    Unknown email and wrong password produce the same error.

    Raises:
        ValidationError: Email or password missing.
        AuthError: Bad credentials or an inactive account.
    """
    if not payload.email or not payload.password:
        raise ValidationError("email and password are required")

    email = normalize_email(payload.email)

    try:
        user = UserRepository(db).get_by_email(email)
    except SQLAlchemyError:
        logger.exception("login_lookup_failed")
        raise InternalError() from None

    if user is None or not verify_password(str(payload.password), user.password_hash):
        logger.warning("login_failed", email=email)
        raise AuthError("invalid credentials")

    if user.status == STATUS_INACTIVE:
        logger.warning("login_inactive_account", user_id=str(user.id))
        raise AuthError("account is inactive")

    logger.info("login_succeeded", user_id=str(user.id))
    return user, create_token_pair(user)


def refresh(db: Session, refresh_token: object) -> TokenPair:
    """
    Exchange a refresh token for a new pair.

    The user is re-read so the new tokens carry the current role.

    Raises:
        ValidationError: No refresh token supplied.
        AuthError: Invalid/expired token, deleted user, or inactive account.
    """
    if not refresh_token or not isinstance(refresh_token, str):
        raise ValidationError("refreshToken is required")

    try:
        payload = decode_refresh_token(refresh_token)
        user_id = uuid.UUID(payload.subject)
    except (InvalidTokenError, ValueError):
        raise AuthError("invalid/expired refresh token") from None

    try:
        user = UserRepository(db).get_by_id(user_id)
    except SQLAlchemyError:
        logger.exception("refresh_lookup_failed", user_id=str(user_id))
        raise InternalError() from None

    if user is None:
        raise AuthError("user not found")

    if user.status == STATUS_INACTIVE:
        raise AuthError("account is inactive")

    logger.info("token_refreshed", user_id=str(user.id))
    return create_token_pair(user)
