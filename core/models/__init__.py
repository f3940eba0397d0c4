"""
SQLAlchemy models for the Domain Registry API.

Single source of truth for all database models. Used by both CLI and backend.

Usage:
    from core.models import User, Domain
"""

from .base import Base
from .domain import Domain
from .user import User

__all__ = [
    "Base",
    "User",
    "Domain",
]
