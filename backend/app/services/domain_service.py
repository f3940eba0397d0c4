"""
Self-service domain functions.

Every operation is scoped to the authenticated caller: a user only ever
sees or changes their own domains.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.constants import DOMAIN_STATUSES, STATUS_ACTIVE
from core.exceptions import AuthError, ConflictError, InternalError, NotFoundError, ValidationError
from core.logging import get_logger
from core.normalization import is_valid_domain, normalize_domain, parse_object_id
from core.repositories import DomainRepository, UserRepository

from ..auth.dependencies import AuthContext
from ..models import Domain

logger = get_logger("domains")


def get_my_domains(db: Session, identity: AuthContext) -> list[Domain]:
    """Return the caller's domains, newest first."""
    try:
        return DomainRepository(db).list_for_owner(identity.id)
    except SQLAlchemyError:
        logger.exception("domain_list_failed", user_id=str(identity.id))
        raise InternalError() from None


def add_my_domain(db: Session, identity: AuthContext, domain_name: Any) -> Domain:
    """
    Register a domain for the caller.

    Raises:
        ValidationError: Missing or malformed domain name.
        ConflictError: The caller already owns this normalized name.
    """
    if not isinstance(domain_name, str) or not domain_name.strip():
        raise ValidationError("domainName is required")

    normalized = normalize_domain(domain_name)
    if not is_valid_domain(normalized):
        raise ValidationError("invalid domain format (example: example.com)")

    repo = DomainRepository(db)
    try:
        if repo.owner_has_domain(identity.id, normalized):
            raise ConflictError("domain already exists for this user")

        domain = repo.create(domain_name=normalized, user_id=identity.id, status=STATUS_ACTIVE)
    except IntegrityError:
        db.rollback()
        # The token outlived its user: the owner foreign key failed, not uniqueness
        if UserRepository(db).get_by_id(identity.id) is None:
            raise AuthError("user not found") from None
        logger.warning("domain_add_conflict", user_id=str(identity.id), domain=normalized)
        raise ConflictError("domain already exists for this user") from None
    except SQLAlchemyError:
        logger.exception("domain_add_failed", user_id=str(identity.id))
        raise InternalError() from None

    logger.info("domain_added", user_id=str(identity.id), domain=normalized)
    return domain


def update_my_domain_status(
    db: Session,
    identity: AuthContext,
    domain_id: str,
    status: Any,
) -> Domain:
    """
    Flip a domain between active and inactive.

    The lookup matches on both id and owner, so another user's id is
    reported as not found.

    Raises:
        ValidationError: Malformed id or unknown status.
        NotFoundError: No such domain for this caller.
    """
    did = parse_object_id(domain_id, "invalid id")

    if status not in DOMAIN_STATUSES:
        raise ValidationError("status must be active/inactive")

    repo = DomainRepository(db)
    try:
        domain = repo.get_for_owner(did, identity.id)
        if domain is None:
            raise NotFoundError("domain not found")

        domain.status = status
        db.flush()
    except SQLAlchemyError:
        logger.exception("domain_update_failed", domain_id=str(did))
        raise InternalError() from None

    logger.info("domain_status_updated", domain_id=str(did), status=status)
    return domain
