"""Domain repository: per-user domain records."""

import uuid

from core.models import Domain

from .base import BaseRepository


class DomainRepository(BaseRepository[Domain]):
    """
    Repository for Domain operations.

    Every read or write that comes from an end user is scoped by owner.
    """

    model = Domain

    def list_for_owner(self, user_id: uuid.UUID) -> list[Domain]:
        """All domains owned by a user, newest first."""
        return (
            self.session.query(Domain)
            .filter(Domain.user_id == user_id)
            .order_by(Domain.created_at.desc())
            .all()
        )

    def get_for_owner(self, domain_id: uuid.UUID, user_id: uuid.UUID) -> Domain | None:
        """Get a domain only if it belongs to the given user."""
        return (
            self.session.query(Domain)
            .filter(Domain.id == domain_id, Domain.user_id == user_id)
            .first()
        )

    def owner_has_domain(self, user_id: uuid.UUID, domain_name: str) -> bool:
        """Check whether a user already registered this normalized name."""
        return self.exists_where(user_id=user_id, domain_name=domain_name)
