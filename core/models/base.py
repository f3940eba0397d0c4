"""
Base model class for SQLAlchemy ORM.

Re-exports the declarative Base from core.db so models and the database
manager share one metadata object.
"""

from core.db import Base

__all__ = ["Base"]
