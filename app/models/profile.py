# app/models/profile.py
import uuid
from datetime import datetime

from sqlalchemy import JSON
from sqlmodel import SQLModel, Field

from app.models.user import created_at_field, optional_ts_field, updated_at_field


class HomeownerProfile(SQLModel, table=True):
    """Homeowner-specific profile, one per user."""

    __tablename__ = "homeowner_profiles"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", unique=True)

    name: str = Field(max_length=255)
    email: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    locality: str | None = Field(default=None, max_length=255)
    profile_picture_url: str | None = Field(default=None)

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class DesignerProfile(SQLModel, table=True):
    """
    Designer profile, one per user.

    Only verified designers are visible in public browse/search and can
    receive project requests. Verification is set by an operator.
    """

    __tablename__ = "designer_profiles"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", unique=True)

    name: str = Field(max_length=255)
    firm_name: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None)
    profile_picture_url: str | None = Field(default=None)

    portfolio_images: list[str] = Field(default_factory=list, sa_type=JSON)
    services: list[str] = Field(default_factory=list, sa_type=JSON)
    service_cities: list[str] = Field(default_factory=list, sa_type=JSON)
    styles: list[str] = Field(default_factory=list, sa_type=JSON)

    price_range_min: int | None = Field(default=None)
    price_range_max: int | None = Field(default=None)
    experience_years: int | None = Field(default=None)
    projects_completed: int = Field(default=0)

    is_verified: bool = Field(default=False, index=True)
    verified_at: datetime | None = optional_ts_field()

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class ContractorProfile(SQLModel, table=True):
    """Contractor profile, one per user."""

    __tablename__ = "contractor_profiles"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", unique=True)

    name: str = Field(max_length=255)
    profile_picture_url: str | None = Field(default=None)

    trades: list[str] = Field(default_factory=list, sa_type=JSON)
    service_areas: list[str] = Field(default_factory=list, sa_type=JSON)
    work_photos: list[str] = Field(default_factory=list, sa_type=JSON)

    experience_years: int | None = Field(default=None)
    bio: str | None = Field(default=None)

    is_verified: bool = Field(default=False, index=True)
    verified_at: datetime | None = optional_ts_field()

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()
