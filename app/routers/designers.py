# app/routers/designers.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_designer
from app.core.deps import get_search_service, get_session
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.schemas.common import ApiResponse, Page, ok
from app.schemas.profile import DesignerProfileCreate, DesignerProfileRead, DesignerProfileUpdate
from app.services.designer_service import DesignerService
from app.services.search_service import SearchService

router = APIRouter(prefix="/designers", tags=["Designers"])

service = DesignerService(ProfileRepository())


# -------- Public browse --------


@router.get("", response_model=ApiResponse[Page[DesignerProfileRead]])
def browse_designers(
    session: Session = Depends(get_session),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100, alias="perPage"),
):
    """
    Verified designers, newest first. No auth required.
    """
    result = service.browse(session, page, per_page)
    result["items"] = [DesignerProfileRead.model_validate(d) for d in result["items"]]
    return ok(result, "Designers retrieved successfully")


# -------- Own profile (designer only) --------


@router.get("/me", response_model=ApiResponse[DesignerProfileRead])
def read_my_profile(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_designer),
):
    profile = service.get_me(session, current_user)
    return ok(DesignerProfileRead.model_validate(profile), "Profile retrieved successfully")


@router.post(
    "/me",
    response_model=ApiResponse[DesignerProfileRead],
    status_code=status.HTTP_201_CREATED,
)
def create_my_profile(
    payload: DesignerProfileCreate,
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    current_user: User = Depends(require_designer),
):
    """
    Designer onboarding. The profile becomes searchable once verified.
    """
    profile = service.create_me(session, search, current_user, payload)
    return ok(DesignerProfileRead.model_validate(profile), "Profile created successfully")


@router.patch("/me", response_model=ApiResponse[DesignerProfileRead])
def update_my_profile(
    payload: DesignerProfileUpdate,
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    current_user: User = Depends(require_designer),
):
    profile = service.update_me(session, search, current_user, payload)
    return ok(DesignerProfileRead.model_validate(profile), "Profile updated successfully")


# -------- Public detail --------


@router.get("/{designer_id}", response_model=ApiResponse[DesignerProfileRead])
def read_designer(
    designer_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    profile = service.get_public(session, designer_id)
    return ok(DesignerProfileRead.model_validate(profile), "Designer retrieved successfully")
