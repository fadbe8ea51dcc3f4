# app/routers/contractors.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_contractor
from app.core.deps import get_search_service, get_session
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.schemas.common import ApiResponse, Page, ok
from app.schemas.profile import (
    ContractorProfileCreate,
    ContractorProfileRead,
    ContractorProfileUpdate,
)
from app.services.contractor_service import ContractorService
from app.services.search_service import SearchService

router = APIRouter(prefix="/contractors", tags=["Contractors"])

service = ContractorService(ProfileRepository())


# -------- Public browse --------


@router.get("", response_model=ApiResponse[Page[ContractorProfileRead]])
def browse_contractors(
    session: Session = Depends(get_session),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100, alias="perPage"),
):
    result = service.browse(session, page, per_page)
    result["items"] = [ContractorProfileRead.model_validate(c) for c in result["items"]]
    return ok(result, "Contractors retrieved successfully")


# -------- Own profile (contractor only) --------


@router.get("/me", response_model=ApiResponse[ContractorProfileRead])
def read_my_profile(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_contractor),
):
    profile = service.get_me(session, current_user)
    return ok(ContractorProfileRead.model_validate(profile), "Profile retrieved successfully")


@router.post(
    "/me",
    response_model=ApiResponse[ContractorProfileRead],
    status_code=status.HTTP_201_CREATED,
)
def create_my_profile(
    payload: ContractorProfileCreate,
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    current_user: User = Depends(require_contractor),
):
    profile = service.create_me(session, search, current_user, payload)
    return ok(ContractorProfileRead.model_validate(profile), "Profile created successfully")


@router.patch("/me", response_model=ApiResponse[ContractorProfileRead])
def update_my_profile(
    payload: ContractorProfileUpdate,
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    current_user: User = Depends(require_contractor),
):
    profile = service.update_me(session, search, current_user, payload)
    return ok(ContractorProfileRead.model_validate(profile), "Profile updated successfully")


# -------- Public detail --------


@router.get("/{contractor_id}", response_model=ApiResponse[ContractorProfileRead])
def read_contractor(
    contractor_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    profile = service.get_public(session, contractor_id)
    return ok(ContractorProfileRead.model_validate(profile), "Contractor retrieved successfully")
