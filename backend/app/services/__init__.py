"""
Backend services for the Domain Registry API.
"""

from . import admin_service, auth_service, domain_service

__all__ = [
    "admin_service",
    "auth_service",
    "domain_service",
]
