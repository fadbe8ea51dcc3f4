# app/models/user.py
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Text, func
from sqlmodel import SQLModel, Field

from app.database import utcnow


def created_at_field() -> datetime:
    return Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now()},
        description="Creation timestamp (UTC)",
    )


def updated_at_field() -> datetime:
    return Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now(), "onupdate": utcnow},
        description="Last update timestamp (UTC)",
    )


def optional_ts_field() -> datetime | None:
    return Field(default=None, sa_type=DateTime(timezone=True))


class Role(SQLModel, table=True):
    """
    Authorization tier lookup.

    Seeded once with:
      - admin: Administrative access
      - user:  Standard user access
    """

    __tablename__ = "roles"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=50, unique=True, index=True)
    description: str | None = Field(default=None, max_length=255)

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class User(SQLModel, table=True):
    """
    Account record for Finishd.

    Identity:
      - email is unique and stored lower-cased
      - password_hash is a bcrypt hash, never returned to clients

    Marketplace:
      - user_type: homeowner | designer | contractor
        (None until the user picks one during onboarding)
      - profile_created flips to True once a type-specific profile exists

    Users are never hard-deleted through the API; deactivation sets
    status = "inactive" and revokes every device session.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    role_id: uuid.UUID = Field(foreign_key="roles.id", ondelete="RESTRICT", index=True)

    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)

    name: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    phone_number: str | None = Field(default=None, max_length=20, unique=True)
    timezone: str | None = Field(default=None, max_length=50)

    user_type: str | None = Field(
        default=None,
        max_length=20,
        index=True,
        description="homeowner | designer | contractor",
    )

    email_verified: bool = Field(default=False)
    email_verified_at: datetime | None = optional_ts_field()
    email_verification_code: str | None = Field(
        default=None,
        max_length=255,
        description="bcrypt hash of the pending 6-digit code",
    )
    email_verification_code_expires_at: datetime | None = optional_ts_field()

    profile_created: bool = Field(default=False)

    status: str = Field(default="active", max_length=20, description="active | inactive")
    last_login_at: datetime | None = optional_ts_field()

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class UserPermission(SQLModel, table=True):
    """
    One row per user (unique user_id).

    Device permissions default to off; communication opt-ins default to on.
    """

    __tablename__ = "user_permissions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", unique=True)

    calendar_enabled: bool = Field(default=False)
    notifications_enabled: bool = Field(default=False)
    contacts_enabled: bool = Field(default=False)
    location_enabled: bool = Field(default=False)

    marketing_emails_enabled: bool = Field(default=True)
    ritual_reminders_enabled: bool = Field(default=True)
    community_updates_enabled: bool = Field(default=True)

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class UserDevice(SQLModel, table=True):
    """
    One authenticated session on one device.

    Holds the current access/refresh token pair and their expiries.
    A user may have many active devices at once. Rows are not reaped;
    auth checks `is_active` and `token_expires_at` on every request.
    """

    __tablename__ = "user_devices"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)

    token: str = Field(sa_type=Text)
    refresh_token: str = Field(sa_type=Text)
    token_expires_at: datetime = Field(sa_type=DateTime(timezone=True))
    refresh_token_expires_at: datetime = Field(sa_type=DateTime(timezone=True))

    device_type: str | None = Field(default=None, max_length=50)
    device_name: str | None = Field(default=None, max_length=255)
    user_agent: str | None = Field(default=None, sa_type=Text)
    ip_address: str | None = Field(default=None, max_length=45)

    is_active: bool = Field(default=True)
    last_used_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now()},
    )

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()
