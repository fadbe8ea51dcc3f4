# app/routers/admin.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin
from app.core.deps import get_search_service, get_session
from app.models.user import User
from app.repositories.notification_repo import NotificationRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.user_repo import UserRepository
from app.schemas.admin import ProviderRejectRequest
from app.schemas.common import ApiResponse, ok
from app.schemas.profile import ContractorProfileRead, DesignerProfileRead
from app.services.admin_service import AdminService
from app.services.notification_service import NotificationService
from app.services.search_service import SearchService

router = APIRouter(prefix="/admin", tags=["Admin"])

service = AdminService(
    ProfileRepository(),
    UserRepository(),
    NotificationService(NotificationRepository()),
)


# -------- Designer verification --------


@router.get("/designers/pending", response_model=ApiResponse[list[DesignerProfileRead]])
def list_pending_designers(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    """Designers who finished onboarding and wait for verification."""
    designers = service.list_pending(session, "designer")
    return ok(
        [DesignerProfileRead.model_validate(d) for d in designers],
        "Unverified designers retrieved successfully",
    )


@router.post("/designers/{designer_id}/verify", response_model=ApiResponse[DesignerProfileRead])
def verify_designer(
    designer_id: uuid.UUID,
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    admin: User = Depends(require_admin),
):
    profile = service.verify(session, search, admin, "designer", designer_id)
    return ok(DesignerProfileRead.model_validate(profile), "Designer verified successfully")


@router.post("/designers/{designer_id}/reject", response_model=ApiResponse[None])
def reject_designer(
    designer_id: uuid.UUID,
    payload: ProviderRejectRequest | None = None,
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    admin: User = Depends(require_admin),
):
    reason = payload.reason if payload else None
    service.reject(session, search, admin, "designer", designer_id, reason)
    return ok(None, "Designer rejected successfully")


# -------- Contractor verification --------


@router.get("/contractors/pending", response_model=ApiResponse[list[ContractorProfileRead]])
def list_pending_contractors(
    session: Session = Depends(get_session),
    admin: User = Depends(require_admin),
):
    contractors = service.list_pending(session, "contractor")
    return ok(
        [ContractorProfileRead.model_validate(c) for c in contractors],
        "Unverified contractors retrieved successfully",
    )


@router.post("/contractors/{contractor_id}/verify", response_model=ApiResponse[ContractorProfileRead])
def verify_contractor(
    contractor_id: uuid.UUID,
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    admin: User = Depends(require_admin),
):
    profile = service.verify(session, search, admin, "contractor", contractor_id)
    return ok(ContractorProfileRead.model_validate(profile), "Contractor verified successfully")


@router.post("/contractors/{contractor_id}/reject", response_model=ApiResponse[None])
def reject_contractor(
    contractor_id: uuid.UUID,
    payload: ProviderRejectRequest | None = None,
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    admin: User = Depends(require_admin),
):
    reason = payload.reason if payload else None
    service.reject(session, search, admin, "contractor", contractor_id, reason)
    return ok(None, "Contractor rejected successfully")
