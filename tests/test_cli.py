"""Tests for the operator CLI."""

import uuid

from core.cli.manage import main
from core.db import db
from core.models import User
from core.security import verify_password


def _email() -> str:
    return f"Root-{uuid.uuid4().hex[:8]}@Example.com"


def test_init_db_creates_tables():
    assert main(["init-db"]) == 0
    assert db.is_initialized


def test_create_admin_normalizes_and_hashes():
    email = _email()
    assert main(["create-admin", "--name", "  Root  ", "--email", f"  {email} ", "--password", "secret123"]) == 0

    with db.session() as session:
        user = session.query(User).filter(User.email == email.lower()).one()
        assert user.name == "Root"
        assert user.role == "admin"
        assert user.status == "active"
        assert verify_password("secret123", user.password_hash)


def test_create_admin_rejects_duplicate_email(capsys):
    email = _email()
    args = ["create-admin", "--name", "Root", "--email", email, "--password", "secret123"]
    assert main(args) == 0
    assert main(["create-admin", "--name", "Root", "--email", email.upper(), "--password", "secret123"]) == 1
    assert "email already registered" in capsys.readouterr().err


def test_create_admin_rejects_short_password(capsys):
    assert main(["create-admin", "--name", "Root", "--email", _email(), "--password", "abc"]) == 1
    assert "password must be at least 6 characters" in capsys.readouterr().err


def test_no_command_prints_help():
    assert main([]) == 1
