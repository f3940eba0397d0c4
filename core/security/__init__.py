"""
Security module for the Domain Registry API.

Provides:
- Password hashing (bcrypt)
- Configuration validation
"""

from .passwords import hash_password, verify_password
from .validation import SecurityConfigError, ValidationResult, validate_security_config

__all__ = [
    "hash_password",
    "verify_password",
    "validate_security_config",
    "SecurityConfigError",
    "ValidationResult",
]
