"""User repository for authentication and the admin directory."""

import math
import uuid
from dataclasses import dataclass

from sqlalchemy import or_

from core.constants import ROLES
from core.models import User

from .base import BaseRepository


@dataclass
class UserPage:
    """One page of users plus the numbers needed for pagination metadata."""

    items: list[User]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return max(math.ceil(self.total / self.limit), 1)


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so search terms match literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_email(self, email: str) -> User | None:
        """Get user by (already normalized) email."""
        return self.session.query(User).filter(User.email == email).first()

    def email_taken_by_other(self, email: str, user_id: uuid.UUID) -> bool:
        """Check whether another user already holds this email."""
        query = self.session.query(User).filter(User.email == email, User.id != user_id)
        return bool(self.session.query(query.exists()).scalar())

    def search(
        self,
        page: int,
        limit: int,
        search: str | None = None,
        role: str | None = None,
    ) -> UserPage:
        """
        Page through users, newest first.

        Args:
            page: 1-based page number
            limit: Page size
            search: Case-insensitive substring matched against name or email
            role: Only applied when it is a known role
        """
        query = self.session.query(User)

        if search:
            pattern = f"%{_escape_like(search)}%"
            query = query.filter(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                )
            )

        if role in ROLES:
            query = query.filter(User.role == role)

        total = query.count()
        items = (
            query.order_by(User.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return UserPage(items=items, page=page, limit=limit, total=total)
