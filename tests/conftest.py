# tests/conftest.py
import os

# app.main builds a module-level app from the environment on import
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("TYPESENSE_ENABLED", "false")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.core.config import Settings
from app.database import utcnow
from app.main import create_app
from app.models.user import Role, User

PASSWORD = "Sup3rSecret!"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        ENVIRONMENT="test",
        DB_AUTO_CREATE=True,
        TYPESENSE_ENABLED=False,
        JWT_ACCESS_SECRET="test-access-secret",
        JWT_REFRESH_SECRET="test-refresh-secret",
        SUPABASE_URL="https://proj.supabase.co",
        SUPABASE_SERVICE_ROLE_KEY="service-role-key",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def verify_provider(app, model, user_id: str) -> str:
    """
    Mark the provider profile of `user_id` as verified straight in the
    database, skipping the admin queue. Returns the profile id.
    """
    with Session(app.state.engine) as session:
        profile = session.exec(select(model).where(model.user_id == uuid.UUID(user_id))).one()
        profile.is_verified = True
        profile.verified_at = utcnow()
        session.add(profile)
        session.commit()
        return str(profile.id)


def make_admin(app, user_id: str) -> None:
    """Give `user_id` the seeded admin role."""
    with Session(app.state.engine) as session:
        role = session.exec(select(Role).where(Role.name == "admin")).one()
        user = session.get(User, uuid.UUID(user_id))
        user.role_id = role.id
        session.add(user)
        session.commit()


def register(client: TestClient, email: str, user_type: str | None = "homeowner", name: str = "Test User") -> dict:
    """Register an account and return {user, tokens, headers}."""
    body = {"email": email, "password": PASSWORD, "name": name, "city": "Bengaluru"}
    if user_type:
        body["user_type"] = user_type
    resp = client.post("/api/v1/auth/register", json=body)
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    data["headers"] = auth_headers(data["tokens"]["access_token"])
    return data


def login(client: TestClient, email: str, password: str = PASSWORD) -> dict:
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    data["headers"] = auth_headers(data["tokens"]["access_token"])
    return data


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
