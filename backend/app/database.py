"""
Database session and base configuration for the backend.

Re-exports from core.db. Initialization happens explicitly in the
application startup hook, NOT at import time.
"""

from core.db import Base, db, get_db

__all__ = ["Base", "db", "get_db"]
