# tests/test_models.py
from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, create_engine, select
from sqlalchemy.pool import StaticPool

from app.database import DEFAULT_ROLES, as_aware, create_db_and_tables, utcnow
from app.models.project import can_transition
from app.models.user import Role, User, UserDevice, UserPermission


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    with Session(engine) as s:
        yield s
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def user(session) -> User:
    role = session.exec(select(Role).where(Role.name == "user")).one()
    user = User(role_id=role.id, email="model@example.com", password_hash="x")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def test_roles_are_seeded_once(session):
    create_db_and_tables(session.get_bind())
    names = sorted(r.name for r in session.exec(select(Role)).all())
    assert names == sorted(name for name, _ in DEFAULT_ROLES)


def test_user_device_round_trip(session, user):
    expires = utcnow() + timedelta(minutes=15)
    refresh_expires = utcnow() + timedelta(days=7)
    device = UserDevice(
        user_id=user.id,
        token="access-token",
        refresh_token="refresh-token",
        token_expires_at=expires,
        refresh_token_expires_at=refresh_expires,
        device_type="mobile",
        device_name="Safari on iOS",
        user_agent="Mozilla/5.0 (iPhone)",
        ip_address="2001:db8::1",
    )
    session.add(device)
    session.commit()
    device_id = device.id
    session.expunge_all()

    loaded = session.get(UserDevice, device_id)
    assert loaded.token == "access-token"
    assert loaded.refresh_token == "refresh-token"
    assert loaded.device_type == "mobile"
    assert loaded.device_name == "Safari on iOS"
    assert loaded.ip_address == "2001:db8::1"
    assert as_aware(loaded.token_expires_at) == expires
    assert as_aware(loaded.refresh_token_expires_at) == refresh_expires


def test_user_device_defaults(session, user):
    before = utcnow()
    device = UserDevice(
        user_id=user.id,
        token="t",
        refresh_token="r",
        token_expires_at=utcnow(),
        refresh_token_expires_at=utcnow(),
    )
    session.add(device)
    session.commit()
    session.refresh(device)

    assert device.is_active is True
    assert device.device_name is None
    for ts in (device.last_used_at, device.created_at, device.updated_at):
        assert as_aware(ts) >= before - timedelta(seconds=1)
        assert as_aware(ts) <= utcnow()


def test_user_defaults(user):
    assert user.email_verified is False
    assert user.profile_created is False
    assert user.status == "active"
    assert user.user_type is None


def test_permissions_unique_per_user(session, user):
    session.add(UserPermission(user_id=user.id))
    session.commit()
    session.add(UserPermission(user_id=user.id))
    with pytest.raises(IntegrityError):
        session.commit()


@pytest.mark.parametrize(
    "current, new, allowed",
    [
        ("draft", "seeking_designer", True),
        ("draft", "in_progress", False),
        ("seeking_designer", "in_progress", True),
        ("in_progress", "completed", True),
        ("in_progress", "cancelled", True),
        ("completed", "cancelled", False),
        ("cancelled", "draft", False),
    ],
)
def test_project_transitions(current, new, allowed):
    assert can_transition(current, new) is allowed
