# tests/test_auth.py
import uuid

from sqlmodel import Session

from app.core.security import hash_code
from app.database import utcnow
from app.models.user import User
from conftest import PASSWORD, auth_headers, login, register


def test_register_login_and_type_gated_route(client):
    homeowner = register(client, "home@example.com", "homeowner")
    assert uuid.UUID(homeowner["user"]["id"])
    assert homeowner["user"]["email_verified"] is False
    assert homeowner["user"]["profile_created"] is False

    session = login(client, "home@example.com")
    assert session["tokens"]["access_token"]
    assert session["tokens"]["refresh_token"]
    assert session["tokens"]["token_type"] == "Bearer"

    resp = client.get("/api/v1/homeowners/me", headers=session["headers"])
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["error"] is None
    assert body["data"]["email"] == "home@example.com"

    designer = register(client, "designer@example.com", "designer")
    resp = client.get("/api/v1/homeowners/me", headers=designer["headers"])
    assert resp.status_code == 403
    body = resp.json()
    assert body["success"] is False
    assert body["data"] is None
    assert "homeowner" in body["error"]


def test_protected_route_without_token(client):
    resp = client.get("/api/v1/users/me")
    assert resp.status_code == 401
    assert resp.json()["success"] is False


def test_protected_route_with_garbage_token(client):
    resp = client.get("/api/v1/users/me", headers=auth_headers("not-a-jwt"))
    assert resp.status_code == 401


def test_user_without_type_is_sent_to_onboarding(client):
    user = register(client, "notype@example.com", user_type=None)
    resp = client.get("/api/v1/homeowners/me", headers=user["headers"])
    assert resp.status_code == 403
    assert "onboarding" in resp.json()["error"]


def test_duplicate_email_conflicts(client):
    register(client, "dup@example.com")
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": "DUP@example.com", "password": PASSWORD, "name": "Again"},
    )
    assert resp.status_code == 409


def test_weak_password_rejected(client):
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": "weak@example.com", "password": "short", "name": "Weak"},
    )
    assert resp.status_code == 400


def test_login_wrong_password(client):
    register(client, "wrong@example.com")
    resp = client.post("/api/v1/auth/login", json={"email": "wrong@example.com", "password": "Nope12345"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid email or password"


def test_logout_revokes_only_current_session(client):
    first = register(client, "logout@example.com")
    second = login(client, "logout@example.com")

    resp = client.post("/api/v1/auth/logout", headers=first["headers"])
    assert resp.status_code == 200

    assert client.get("/api/v1/users/me", headers=first["headers"]).status_code == 401
    assert client.get("/api/v1/users/me", headers=second["headers"]).status_code == 200


def test_logout_all(client):
    first = register(client, "all@example.com")
    second = login(client, "all@example.com")

    resp = client.post("/api/v1/auth/logout-all", headers=second["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["revoked_sessions"] == 2

    assert client.get("/api/v1/users/me", headers=first["headers"]).status_code == 401
    assert client.get("/api/v1/users/me", headers=second["headers"]).status_code == 401


def test_refresh_rotates_tokens(client):
    user = register(client, "refresh@example.com")
    old_refresh = user["tokens"]["refresh_token"]

    resp = client.post("/api/v1/auth/refresh-token", json={"refresh_token": old_refresh})
    assert resp.status_code == 200
    tokens = resp.json()["data"]
    assert tokens["refresh_token"] != old_refresh

    # the old pair is gone
    assert client.get("/api/v1/users/me", headers=user["headers"]).status_code == 401
    resp = client.post("/api/v1/auth/refresh-token", json={"refresh_token": old_refresh})
    assert resp.status_code == 401

    resp = client.get("/api/v1/users/me", headers=auth_headers(tokens["access_token"]))
    assert resp.status_code == 200


def test_access_token_is_not_a_refresh_token(client):
    user = register(client, "kinds@example.com")
    resp = client.post(
        "/api/v1/auth/refresh-token",
        json={"refresh_token": user["tokens"]["access_token"]},
    )
    assert resp.status_code == 401


def _set_code(app, user_id: str, code: str) -> None:
    with Session(app.state.engine) as session:
        user = session.get(User, uuid.UUID(user_id))
        user.email_verification_code = hash_code(code)
        user.email_verification_code_expires_at = utcnow().replace(year=utcnow().year + 1)
        session.add(user)
        session.commit()


def test_verify_email(app, client):
    user = register(client, "verify@example.com")
    _set_code(app, user["user"]["id"], "246810")

    resp = client.post("/api/v1/auth/verify-email", json={"code": "000000"}, headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid verification code"

    resp = client.post("/api/v1/auth/verify-email", json={"code": "246810"}, headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["email_verified"] is True

    resp = client.post("/api/v1/auth/verify-email", json={"code": "246810"}, headers=user["headers"])
    assert resp.status_code == 409


def test_verify_email_rejects_malformed_code(client):
    user = register(client, "badcode@example.com")
    resp = client.post("/api/v1/auth/verify-email", json={"code": "12ab"}, headers=user["headers"])
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation error"
    assert "body.code" in resp.json()["error"]

    resp = client.post("/api/v1/auth/verify-email", json={"code": "1234567"}, headers=user["headers"])
    assert resp.status_code == 400


def test_resend_verification(client):
    register(client, "resend@example.com")
    resp = client.post("/api/v1/auth/resend-verification", json={"email": "resend@example.com"})
    assert resp.status_code == 200

    resp = client.post("/api/v1/auth/resend-verification", json={"email": "ghost@example.com"})
    assert resp.status_code == 404


def test_register_password_at_byte_limit(client):
    password = "Abcdefgh1" * 8
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": "long@example.com", "password": password, "name": "Long"},
    )
    assert resp.status_code == 201
    assert login(client, "long@example.com", password)["tokens"]["access_token"]


def test_register_password_over_byte_limit_rejected(client):
    resp = client.post(
        "/api/v1/auth/register",
        json={"email": "toolong@example.com", "password": "Abcdefgh1" * 10, "name": "Long"},
    )
    assert resp.status_code == 400
    assert "72 bytes" in resp.json()["error"]


def test_login_password_over_byte_limit(client):
    register(client, "limit@example.com")
    resp = client.post(
        "/api/v1/auth/login",
        json={"email": "limit@example.com", "password": "Abcdefgh1" * 10},
    )
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid email or password"
