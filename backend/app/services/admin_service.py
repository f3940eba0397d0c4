"""
Admin directory service functions.

Create, update, list and delete user accounts. Callers are already gated
by require_admin; everything here is about input rules and the store.
"""

import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PASSWORD_HASH_FIELDS,
    USER_STATUSES,
    USER_UPDATABLE_FIELDS,
)
from core.exceptions import ConflictError, InternalError, NotFoundError, ValidationError
from core.logging import get_logger
from core.normalization import (
    coerce_role,
    normalize_email,
    normalize_name,
    parse_object_id,
    validate_password,
)
from core.repositories import UserPage, UserRepository
from core.security import hash_password

from ..models import User
from ..schemas import CreateUserRequest

logger = get_logger("admin")


def _is_missing(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def create_user(db: Session, payload: CreateUserRequest) -> User:
    """
    Create a user account.

    The email is checked up front and again through the unique constraint,
    since the check and the insert are not atomic.

    Raises:
        ValidationError: Missing fields or a weak password.
        ConflictError: The normalized email is already registered.
    """
    if _is_missing(payload.name) or _is_missing(payload.email) or _is_missing(payload.password):
        raise ValidationError("name, email and password are required")

    password = validate_password(payload.password)
    email = normalize_email(payload.email)
    name = normalize_name(payload.name)
    role = coerce_role(payload.role)

    repo = UserRepository(db)
    try:
        if repo.get_by_email(email) is not None:
            raise ConflictError("email already registered")

        user = repo.create(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
    except IntegrityError:
        db.rollback()
        logger.warning("user_create_conflict", email=email)
        raise ConflictError("email already registered") from None
    except SQLAlchemyError:
        logger.exception("user_create_failed", email=email)
        raise InternalError() from None

    logger.info("user_created", user_id=str(user.id), role=user.role)
    return user


def _prepare_updates(payload: dict[str, Any]) -> dict[str, Any]:
    """Apply the allow-list and normalization rules to an update payload."""
    if any(field in payload for field in PASSWORD_HASH_FIELDS):
        raise ValidationError("passwordHash cannot be updated directly")

    unknown = sorted(set(payload) - set(USER_UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(f"field(s) cannot be updated: {', '.join(unknown)}")

    updates = {key: value for key, value in payload.items() if value is not None}

    if "name" in updates:
        updates["name"] = normalize_name(updates["name"])
        if not updates["name"]:
            raise ValidationError("name cannot be empty")

    if "email" in updates:
        updates["email"] = normalize_email(updates["email"])
        if not updates["email"]:
            raise ValidationError("email cannot be empty")

    if "password" in updates:
        updates["password"] = validate_password(updates["password"])

    if "role" in updates:
        updates["role"] = coerce_role(updates["role"])

    if "status" in updates and updates["status"] not in USER_STATUSES:
        raise ValidationError("status must be active/inactive")

    return updates


def update_user(db: Session, user_id: str, payload: dict[str, Any]) -> User:
    """
    Update allow-listed fields of a user.

    A plaintext password is hashed and never stored.

    Raises:
        ValidationError: Malformed id, forbidden field, or invalid value.
        NotFoundError: No user with this id.
        ConflictError: Another user already holds the new email.
    """
    uid = parse_object_id(user_id, "invalid user id")
    updates = _prepare_updates(payload)

    repo = UserRepository(db)
    try:
        if repo.get_by_id(uid) is None:
            raise NotFoundError("user not found")

        if "email" in updates and repo.email_taken_by_other(updates["email"], uid):
            raise ConflictError("email already in use")

        if "password" in updates:
            updates["password_hash"] = hash_password(updates.pop("password"))

        user = repo.update(uid, **updates)
    except IntegrityError:
        db.rollback()
        logger.warning("user_update_conflict", user_id=str(uid))
        raise ConflictError("email already in use") from None
    except SQLAlchemyError:
        logger.exception("user_update_failed", user_id=str(uid))
        raise InternalError() from None

    logger.info("user_updated", user_id=str(uid), fields=sorted(updates))
    return user


def list_users(
    db: Session,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    search: str | None = None,
    role: str | None = None,
) -> UserPage:
    """
    List users newest first.

    ``page`` is floored at 1 and ``limit`` clamped to [1, MAX_PAGE_SIZE].
    A ``role`` outside {admin, user} is ignored.
    """
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    search = (search or "").strip() or None
    role = (role or "").strip() or None

    try:
        return UserRepository(db).search(page=page, limit=limit, search=search, role=role)
    except SQLAlchemyError:
        logger.exception("user_list_failed")
        raise InternalError() from None


def delete_user(db: Session, user_id: str) -> User:
    """
    Delete a user and, with it, every domain they own.

    Raises:
        ValidationError: Malformed id.
        NotFoundError: No user with this id.
    """
    uid: uuid.UUID = parse_object_id(user_id, "invalid user id")

    try:
        user = UserRepository(db).delete(uid)
    except SQLAlchemyError:
        logger.exception("user_delete_failed", user_id=str(uid))
        raise InternalError() from None

    if user is None:
        raise NotFoundError("user not found")

    logger.info("user_deleted", user_id=str(uid))
    return user
