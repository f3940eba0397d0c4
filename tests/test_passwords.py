"""Tests for bcrypt password hashing."""

from core.security import hash_password, verify_password


def test_hash_is_not_plaintext():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert hashed.startswith("$2b$")


def test_hash_uses_configured_cost():
    # BCRYPT_ROUNDS=4 in the test environment
    assert hash_password("secret123").startswith("$2b$04$")


def test_explicit_rounds_override():
    assert hash_password("secret123", rounds=5).startswith("$2b$05$")


def test_salted_hashes_differ():
    assert hash_password("secret123") != hash_password("secret123")


def test_verify_matches():
    hashed = hash_password("secret123")
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_verify_malformed_hash_returns_false():
    assert not verify_password("secret123", "not-a-bcrypt-hash")
