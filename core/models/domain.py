"""
Domain SQLAlchemy model: internet domains registered by a user.
"""

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.constants import STATUS_ACTIVE

from .base import Base

if TYPE_CHECKING:
    from .user import User


class Domain(Base):
    """
    A domain name owned by exactly one user.

    The same normalized name may be registered by different users, but only
    once per user (``uq_domains_user_domain``).
    """

    __tablename__ = "domains"
    __table_args__ = (
        UniqueConstraint("user_id", "domain_name", name="uq_domains_user_domain"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    domain_name: Mapped[str] = mapped_column(String(253))
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[str] = mapped_column(String(16), default=STATUS_ACTIVE)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    owner: Mapped["User"] = relationship("User", back_populates="domains")

    def __repr__(self) -> str:
        return f"<Domain {self.domain_name} ({self.status})>"
