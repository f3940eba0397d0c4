import uuid
from collections.abc import Callable, Iterator
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.auth.jwt import create_access_token, create_refresh_token
from backend.app.database import get_db
from backend.app.main import create_app
from backend.app.models import User
from core.security import hash_password

DEFAULT_PASSWORD = "secret123"


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    db_url, TestingSessionLocal, engine = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, TestingSessionLocal


@pytest.fixture
def client(test_app_client) -> TestClient:
    return test_app_client[0]


@pytest.fixture
def session_factory(test_app_client) -> sessionmaker:
    return test_app_client[1]


@pytest.fixture
def make_user(session_factory) -> Callable[..., User]:
    """Insert a user straight into the store and return it detached."""

    def _make_user(
        email: str | None = None,
        name: str = "Test User",
        password: str = DEFAULT_PASSWORD,
        role: str = "user",
        status: str = "active",
        created_at: datetime | None = None,
    ) -> User:
        session = session_factory()
        try:
            user = User(
                name=name,
                email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
                password_hash=hash_password(password),
                role=role,
                status=status,
            )
            if created_at is not None:
                user.created_at = created_at
            session.add(user)
            session.commit()
            session.refresh(user)
            return user
        finally:
            session.close()

    return _make_user


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user(email="admin@example.com", name="Admin", role="admin")


@pytest.fixture
def regular_user(make_user) -> User:
    return make_user(email="user@example.com", name="Regular User")


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture
def user_headers(regular_user) -> dict[str, str]:
    return bearer(regular_user)


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    return bearer


@pytest.fixture
def refresh_token_for() -> Callable[[User], str]:
    return create_refresh_token
