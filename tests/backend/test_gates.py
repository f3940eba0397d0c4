import uuid

import pytest
from fastapi import Request

from backend.app.auth.dependencies import AuthContext, require_admin, require_auth
from backend.app.auth.jwt import create_access_token, create_refresh_token
from backend.app.models import User
from core.exceptions import AuthError, ForbiddenError

DOMAINS_URL = "/api/v1/user/domains"
ADMIN_URL = "/api/v1/admin"


def test_missing_header(client):
    resp = client.get(DOMAINS_URL)
    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "missing access token"}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_non_bearer_scheme_counts_as_missing(client, regular_user):
    token = create_access_token(regular_user)
    resp = client.get(DOMAINS_URL, headers={"Authorization": f"Token {token}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "missing access token"


def test_scheme_is_case_sensitive(client, regular_user):
    token = create_access_token(regular_user)
    for scheme in ("bearer", "BEARER"):
        resp = client.get(DOMAINS_URL, headers={"Authorization": f"{scheme} {token}"})
        assert resp.status_code == 401
        assert resp.json()["message"] == "missing access token"


def test_garbage_token(client):
    resp = client.get(DOMAINS_URL, headers={"Authorization": "Bearer garbage"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "invalid or expired access token"


def test_expired_token(client, regular_user):
    token = create_access_token(regular_user, expires_minutes=-1)
    resp = client.get(DOMAINS_URL, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "invalid or expired access token"


def test_refresh_token_is_not_an_access_token(client, regular_user):
    token = create_refresh_token(regular_user)
    resp = client.get(DOMAINS_URL, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_user_role_forbidden_on_admin_routes(client, user_headers):
    resp = client.get(ADMIN_URL, headers=user_headers)
    assert resp.status_code == 403
    assert resp.json() == {"success": False, "message": "admin access required"}


@pytest.mark.parametrize(
    "method,path",
    [
        ("post", "/api/v1/admin/create"),
        ("put", f"/api/v1/admin/{uuid.uuid4()}"),
        ("delete", f"/api/v1/admin/{uuid.uuid4()}"),
    ],
)
def test_every_admin_route_is_gated(client, user_headers, method, path):
    kwargs = {"json": {}} if method in ("post", "put") else {}
    assert getattr(client, method)(path, **kwargs).status_code == 401
    assert getattr(client, method)(path, headers=user_headers, **kwargs).status_code == 403


def test_admin_passes_gate(client, admin_headers):
    assert client.get(ADMIN_URL, headers=admin_headers).status_code == 200


def test_admin_can_use_self_service_routes(client, admin_headers):
    assert client.get(DOMAINS_URL, headers=admin_headers).status_code == 200


def test_identity_comes_from_token_alone(client, make_user, auth_headers, session_factory):
    ghost = make_user(email="ghost@example.com")
    headers = auth_headers(ghost)
    with session_factory() as session:
        session.delete(session.get(User, ghost.id))
        session.commit()

    resp = client.get(DOMAINS_URL, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["data"] == []


def test_require_auth_attaches_identity(regular_user):
    from fastapi.security import HTTPAuthorizationCredentials

    request = Request({"type": "http", "headers": [], "state": {}})
    credentials = HTTPAuthorizationCredentials(
        scheme="Bearer", credentials=create_access_token(regular_user)
    )

    identity = require_auth(request, credentials)

    assert identity == AuthContext(id=regular_user.id, role="user")
    assert request.state.user is identity


def test_require_admin_without_identity():
    with pytest.raises(AuthError):
        require_admin(None)


def test_require_admin_rejects_user():
    with pytest.raises(ForbiddenError):
        require_admin(AuthContext(id=uuid.uuid4(), role="user"))


def test_require_admin_accepts_admin():
    identity = AuthContext(id=uuid.uuid4(), role="admin")
    assert require_admin(identity) is identity
