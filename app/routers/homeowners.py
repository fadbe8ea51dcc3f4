# app/routers/homeowners.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_homeowner
from app.core.deps import get_session
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.schemas.common import ApiResponse, ok
from app.schemas.profile import (
    HomeownerProfileCreate,
    HomeownerProfileRead,
    HomeownerProfileUpdate,
    PropertyCreate,
    PropertyRead,
    PropertyUpdate,
)
from app.services.homeowner_service import HomeownerService

# All routes: authenticated + user_type == "homeowner"
router = APIRouter(prefix="/homeowners", tags=["Homeowners"])

service = HomeownerService(ProfileRepository(), ProjectRepository())


# -------- Profile --------


@router.get("/me", response_model=ApiResponse[HomeownerProfileRead])
def read_profile(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    profile = service.get_profile(session, current_user)
    return ok(HomeownerProfileRead.model_validate(profile), "Profile retrieved successfully")


@router.post(
    "/me",
    response_model=ApiResponse[HomeownerProfileRead],
    status_code=status.HTTP_201_CREATED,
)
def create_profile(
    payload: HomeownerProfileCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    """
    First-time profile completion (also fills a placeholder profile).
    """
    profile = service.create_profile(session, current_user, payload)
    return ok(HomeownerProfileRead.model_validate(profile), "Profile created successfully")


@router.patch("/me", response_model=ApiResponse[HomeownerProfileRead])
def update_profile(
    payload: HomeownerProfileUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    profile = service.update_profile(session, current_user, payload)
    return ok(HomeownerProfileRead.model_validate(profile), "Profile updated successfully")


# -------- Properties --------


@router.get("/me/properties", response_model=ApiResponse[list[PropertyRead]])
def list_properties(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    props = service.list_properties(session, current_user)
    return ok([PropertyRead.model_validate(p) for p in props], "Properties retrieved successfully")


@router.post(
    "/me/properties",
    response_model=ApiResponse[PropertyRead],
    status_code=status.HTTP_201_CREATED,
)
def create_property(
    payload: PropertyCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    prop = service.create_property(session, current_user, payload)
    return ok(PropertyRead.model_validate(prop), "Property created successfully")


@router.get("/me/properties/{property_id}", response_model=ApiResponse[PropertyRead])
def read_property(
    property_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    prop = service.get_property(session, current_user, property_id)
    return ok(PropertyRead.model_validate(prop), "Property retrieved successfully")


@router.patch("/me/properties/{property_id}", response_model=ApiResponse[PropertyRead])
def update_property(
    property_id: uuid.UUID,
    payload: PropertyUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    prop = service.update_property(session, current_user, property_id, payload)
    return ok(PropertyRead.model_validate(prop), "Property updated successfully")


@router.delete("/me/properties/{property_id}", response_model=ApiResponse[None])
def delete_property(
    property_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    service.delete_property(session, current_user, property_id)
    return ok(None, "Property deleted successfully")
