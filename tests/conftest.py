"""
Pytest fixtures for Domain Registry tests.

Settings are read once and cached, so the environment is pinned here
before any application module is imported.
"""

import os

os.environ["ENV"] = "test"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_ACCESS_SECRET"] = "test-access-secret-0123456789abcdefghijklmnop"
os.environ["JWT_REFRESH_SECRET"] = "test-refresh-secret-0123456789abcdefghijklmnop"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from core.db import Base, build_engine  # noqa: E402
from core import models  # noqa: F401,E402


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    db_url = "sqlite://"
    # StaticPool keeps a single in-memory database across sessions
    engine = build_engine(db_url)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
