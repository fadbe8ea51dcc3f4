# app/schemas/profile.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, ValidationInfo, field_validator, model_validator
from sqlmodel import SQLModel, Field

from app.schemas.user import reject_null, strip_required

PropertyType = Literal["apartment", "house", "villa"]


def _clean_list(values: list[str] | None) -> list[str] | None:
    """Strip items, drop blanks and duplicates, keep order."""
    if values is None:
        return values
    seen: list[str] = []
    for v in values:
        v = v.strip()
        if v and v not in seen:
            seen.append(v)
    return seen


# -------- Homeowner --------


class HomeownerProfileCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    city: str | None = Field(default=None, max_length=100)
    locality: str | None = Field(default=None, max_length=255)
    profile_picture_url: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return strip_required(v, "name")


class HomeownerProfileUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    locality: str | None = Field(default=None, max_length=255)
    profile_picture_url: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str:
        return strip_required(reject_null(v, "name"), "name")


class HomeownerProfileRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    email: str | None = None
    city: str | None = None
    locality: str | None = None
    profile_picture_url: str | None = None
    created_at: datetime
    updated_at: datetime


# -------- Properties --------


class PropertyCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    type: PropertyType
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    locality: str | None = Field(default=None, max_length=255)
    size_sqft: int | None = Field(default=None, gt=0)
    rooms: list[str] = Field(default_factory=list)

    @field_validator("rooms")
    @classmethod
    def clean_rooms(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class PropertyUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    type: PropertyType | None = None
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    locality: str | None = Field(default=None, max_length=255)
    size_sqft: int | None = Field(default=None, gt=0)
    rooms: list[str] | None = None

    @field_validator("type", "rooms")
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)

    @field_validator("rooms")
    @classmethod
    def clean_rooms(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class PropertyRead(SQLModel):
    id: uuid.UUID
    homeowner_id: uuid.UUID
    type: str
    address: str | None = None
    city: str | None = None
    locality: str | None = None
    size_sqft: int | None = None
    rooms: list[str] = []
    created_at: datetime
    updated_at: datetime


# -------- Designer --------


class _PriceRangeCheck(SQLModel):
    price_range_min: int | None = Field(default=None, ge=0)
    price_range_max: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_price_range(self):
        lo, hi = self.price_range_min, self.price_range_max
        if lo is not None and hi is not None and lo > hi:
            raise ValueError("price_range_min cannot exceed price_range_max")
        return self


class DesignerProfileCreate(_PriceRangeCheck):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    firm_name: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=2000)
    profile_picture_url: str | None = None
    portfolio_images: list[str] = Field(default_factory=list, max_length=50)
    services: list[str] = Field(default_factory=list)
    service_cities: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)
    experience_years: int | None = Field(default=None, ge=0, le=80)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return strip_required(v, "name")

    @field_validator("services", "service_cities", "styles")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class DesignerProfileUpdate(_PriceRangeCheck):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    firm_name: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=2000)
    profile_picture_url: str | None = None
    portfolio_images: list[str] | None = Field(default=None, max_length=50)
    services: list[str] | None = None
    service_cities: list[str] | None = None
    styles: list[str] | None = None
    experience_years: int | None = Field(default=None, ge=0, le=80)

    @field_validator("name", "portfolio_images", "services", "service_cities", "styles")
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return strip_required(v, "name")

    @field_validator("services", "service_cities", "styles")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class DesignerProfileRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    firm_name: str | None = None
    bio: str | None = None
    profile_picture_url: str | None = None
    portfolio_images: list[str] = []
    services: list[str] = []
    service_cities: list[str] = []
    styles: list[str] = []
    price_range_min: int | None = None
    price_range_max: int | None = None
    experience_years: int | None = None
    projects_completed: int = 0
    is_verified: bool
    verified_at: datetime | None = None
    created_at: datetime


# -------- Contractor --------


class ContractorProfileCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=255)
    profile_picture_url: str | None = None
    trades: list[str] = Field(default_factory=list)
    service_areas: list[str] = Field(default_factory=list)
    work_photos: list[str] = Field(default_factory=list, max_length=50)
    experience_years: int | None = Field(default=None, ge=0, le=80)
    bio: str | None = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return strip_required(v, "name")

    @field_validator("trades", "service_areas")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class ContractorProfileUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=255)
    profile_picture_url: str | None = None
    trades: list[str] | None = None
    service_areas: list[str] | None = None
    work_photos: list[str] | None = Field(default=None, max_length=50)
    experience_years: int | None = Field(default=None, ge=0, le=80)
    bio: str | None = Field(default=None, max_length=2000)

    @field_validator("name", "trades", "service_areas", "work_photos")
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return strip_required(v, "name")

    @field_validator("trades", "service_areas")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_list(v)


class ContractorProfileRead(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    profile_picture_url: str | None = None
    trades: list[str] = []
    service_areas: list[str] = []
    work_photos: list[str] = []
    experience_years: int | None = None
    bio: str | None = None
    is_verified: bool
    verified_at: datetime | None = None
    created_at: datetime
