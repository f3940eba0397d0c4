"""
User-related SQLAlchemy models.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import ROLE_USER, STATUS_ACTIVE

from .base import Base

if TYPE_CHECKING:
    from .domain import Domain


class User(Base):
    """
    User model for the credential store.

    Attributes:
        name: Display name (trimmed)
        email: Login email, stored trimmed and lowercased; unique
        password_hash: bcrypt hash, never serialized in API responses
        role: "admin" or "user"
        status: "active" or "inactive"; inactive users cannot log in
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(16), default=ROLE_USER)
    status: Mapped[str] = mapped_column(String(16), default=STATUS_ACTIVE)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Deleting a user removes the domains they own
    domains: Mapped[list["Domain"]] = relationship(
        "Domain",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
