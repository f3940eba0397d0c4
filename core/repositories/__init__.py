"""
Repository pattern implementations for data access.

Repositories provide a clean abstraction over database operations.

Usage:
    from core.repositories import UserRepository
    from core.db import db

    with db.session() as session:
        repo = UserRepository(session)
        page = repo.search(page=1, limit=10, search="alice")
"""

from .base import BaseRepository
from .domain_repository import DomainRepository
from .user_repository import UserPage, UserRepository

__all__ = [
    "BaseRepository",
    "DomainRepository",
    "UserPage",
    "UserRepository",
]
