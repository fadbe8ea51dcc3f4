# app/schemas/search.py
import uuid

from sqlmodel import SQLModel


class DesignerHit(SQLModel):
    """A designer document as returned by the search index."""

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
    projects_completed: int | None = None
    is_verified: bool = True


class ContractorHit(SQLModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    profile_picture_url: str | None = None
    trades: list[str] = []
    experience_years: int | None = None
    service_areas: list[str] = []
    work_photos: list[str] = []
    bio: str | None = None
    is_verified: bool = True
