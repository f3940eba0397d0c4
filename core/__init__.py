"""
Domain Registry Core Library.

Shared building blocks for the API and the operator CLI: configuration,
database management, models, repositories, normalization and security helpers.

Usage:
    # Database
    from core.db import db, get_db
    from core.models import User, Domain
    from core.repositories import UserRepository, DomainRepository

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Lazy imports to avoid circular dependencies
# Users should import directly from submodules:
#   from core.db import db
#   from core.config import get_settings
#   from core.logging import get_logger
