# app/schemas/user.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

UserType = Literal["homeowner", "designer", "contractor"]


def reject_null(v, field: str = "value"):
    """Explicit null on a partial update of a column that cannot be cleared."""
    if v is None:
        raise ValueError(f"{field} cannot be null")
    return v


def strip_required(v: str | None, field: str = "value") -> str | None:
    """Trim whitespace; an explicit empty string is rejected."""
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError(f"{field} cannot be empty")
    return v


class UserRead(SQLModel):
    """Response schema returned to clients (never includes secrets)."""

    id: uuid.UUID
    email: str
    name: str | None = None
    city: str | None = None
    timezone: str | None = None
    user_type: UserType | None = None
    email_verified: bool
    profile_created: bool
    status: str
    last_login_at: datetime | None = None
    created_at: datetime


class UserUpdate(SQLModel):
    """
    Partial profile update for authenticated users.

    `user_type` can be set once (onboarding); changing it afterwards is
    rejected by the service.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    timezone: str | None = Field(default=None, max_length=50)
    user_type: UserType | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return strip_required(v, "name")


class PermissionsRead(SQLModel):
    calendar_enabled: bool
    notifications_enabled: bool
    contacts_enabled: bool
    location_enabled: bool
    marketing_emails_enabled: bool
    ritual_reminders_enabled: bool
    community_updates_enabled: bool
    updated_at: datetime


class PermissionsUpdate(SQLModel):
    """Toggle any subset of permission flags."""

    model_config = ConfigDict(extra="forbid")

    calendar_enabled: bool | None = None
    notifications_enabled: bool | None = None
    contacts_enabled: bool | None = None
    location_enabled: bool | None = None
    marketing_emails_enabled: bool | None = None
    ritual_reminders_enabled: bool | None = None
    community_updates_enabled: bool | None = None


class MeRead(SQLModel):
    user: UserRead
    permissions: PermissionsRead | None = None


class DeviceRead(SQLModel):
    id: uuid.UUID
    device_type: str | None = None
    device_name: str | None = None
    ip_address: str | None = None
    is_active: bool
    is_current: bool = False
    last_used_at: datetime
    created_at: datetime
