# app/routers/users.py
import uuid

from fastapi import APIRouter, Depends, Request
from sqlmodel import Session

from app.core.auth import require_auth
from app.core.deps import get_search_service, get_session
from app.models.user import User
from app.repositories.device_repo import DeviceRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.user_repo import UserRepository
from app.schemas.common import ApiResponse, ok
from app.schemas.user import (
    DeviceRead,
    MeRead,
    PermissionsRead,
    PermissionsUpdate,
    UserRead,
    UserUpdate,
)
from app.services.search_service import SearchService
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

service = UserService(UserRepository(), DeviceRepository(), ProfileRepository())


# -------- Self profile --------


@router.get("/me", response_model=ApiResponse[MeRead])
def read_me(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Return the authenticated user's account and permission flags.
    """
    permissions = service.get_permissions(session, current_user)
    data = MeRead(
        user=UserRead.model_validate(current_user),
        permissions=PermissionsRead.model_validate(permissions),
    )
    return ok(data, "User retrieved successfully")


@router.patch("/me", response_model=ApiResponse[UserRead])
def update_me(
    payload: UserUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Update the authenticated user's account (partial update).

    `user_type` is accepted only while it is still unset.
    """
    user = service.update_me(session, current_user, payload)
    return ok(UserRead.model_validate(user), "User updated successfully")


@router.delete("/me", response_model=ApiResponse[None])
def deactivate_me(
    session: Session = Depends(get_session),
    search: SearchService = Depends(get_search_service),
    current_user: User = Depends(require_auth),
):
    """Deactivate the account and sign out everywhere."""
    service.deactivate(session, search, current_user)
    return ok(None, "Account deactivated")


# -------- Permissions --------


@router.get("/me/permissions", response_model=ApiResponse[PermissionsRead])
def read_permissions(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    permissions = service.get_permissions(session, current_user)
    return ok(PermissionsRead.model_validate(permissions), "Permissions retrieved successfully")


@router.put("/me/permissions", response_model=ApiResponse[PermissionsRead])
def update_permissions(
    payload: PermissionsUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    permissions = service.update_permissions(session, current_user, payload)
    return ok(PermissionsRead.model_validate(permissions), "Permissions updated successfully")


# -------- Devices --------


@router.get("/devices", response_model=ApiResponse[list[DeviceRead]])
def list_devices(
    request: Request,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """Active sessions of the current user; the calling one is flagged."""
    current_device_id = request.state.auth.device_id
    devices = [
        DeviceRead.model_validate(d).model_copy(update={"is_current": d.id == current_device_id})
        for d in service.list_devices(session, current_user)
    ]
    return ok(devices, "Devices retrieved successfully")


@router.delete("/devices/{device_id}", response_model=ApiResponse[None])
def revoke_device(
    device_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    service.revoke_device(session, current_user, device_id)
    return ok(None, "Device signed out")
