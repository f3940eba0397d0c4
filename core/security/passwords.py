"""
Password hashing with bcrypt.

Hashing is deliberately slow; the cost factor comes from BCRYPT_ROUNDS.
"""

import bcrypt

from core.config import get_settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a plaintext password.

    Args:
        password: Plaintext, already length-checked by validate_password
        rounds: Optional cost override; defaults to settings.bcrypt_rounds

    Returns:
        The bcrypt hash as text
    """
    cost = rounds or get_settings().bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash. Never raises on bad input."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash, or input past bcrypt's 72 byte limit
        return False
