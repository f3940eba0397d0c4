"""
Application configuration for the backend.

Re-exports the unified core.config module so routers and services can use
relative imports:
    from ..config import get_settings
"""

from core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
