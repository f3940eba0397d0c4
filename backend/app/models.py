"""
SQLAlchemy ORM models for the backend.

Re-exports all models from the unified core.models package.
"""

from core.models import Base, Domain, User

__all__ = ["Base", "User", "Domain"]
