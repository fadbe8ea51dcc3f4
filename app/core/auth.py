# app/core/auth.py
import uuid
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from app.core.config import Settings
from app.core.deps import get_app_settings, get_session
from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.security import decode_token
from app.database import as_aware, utcnow
from app.models.user import User, UserDevice
from app.repositories.device_repo import DeviceRepository
from app.repositories.user_repo import UserRepository

# HTTP Bearer scheme:
# - auto_error=False => a missing Authorization header does not raise
#   FastAPI's own 403; we answer with our 401 envelope instead.
bearer_scheme = HTTPBearer(auto_error=False)

user_repo = UserRepository()
device_repo = DeviceRepository()

USER_TYPES = ("homeowner", "designer", "contractor")
ADMIN_ROLE = "admin"


@dataclass
class AuthContext:
    """Identity attached to `request.state.auth` for downstream handlers."""

    user_id: uuid.UUID
    user_type: str | None
    device_id: uuid.UUID


def get_current_device(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> UserDevice:
    """
    Resolve the device session for the bearer access token.

    Flow:
      1. No/malformed Authorization header => 401.
      2. Verify JWT signature + expiry with the access secret => 401 on failure.
      3. Load the user => 401 if missing, 403 if deactivated.
      4. Find the active device holding this token and check its expiry
         => 401 if revoked (logout) or expired.
      5. Attach AuthContext to request.state.auth.

    Returns:
        The UserDevice row for this session.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required")

    token = credentials.credentials
    payload = decode_token(settings, token, "access")

    try:
        user_id = uuid.UUID(payload["sub"])
    except ValueError:
        raise UnauthorizedError("Invalid access token")

    user = user_repo.get_by_id(session, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    if user.status != "active":
        raise ForbiddenError("Account is deactivated")

    device = device_repo.get_active_by_token(session, token)
    if device is None or device.user_id != user.id:
        raise UnauthorizedError("Session has been revoked")
    if as_aware(device.token_expires_at) <= utcnow():
        raise UnauthorizedError("Access token has expired")

    request.state.auth = AuthContext(
        user_id=user.id,
        user_type=user.user_type,
        device_id=device.id,
    )
    request.state.user = user
    return device


def require_auth(
    request: Request,
    device: UserDevice = Depends(get_current_device),
) -> User:
    """
    Enforce authentication.

    If attached to a route, requests without a valid access token are
    rejected with 401 before the handler runs.

    Returns:
        The authenticated User.
    """
    return request.state.user


def require_admin(
    user: User = Depends(require_auth),
    session: Session = Depends(get_session),
) -> User:
    """
    Enforce admin role.

    Route is accessible only if:
      - the user's role is "admin" (user type does not matter)

    Returns:
        The authenticated admin User.

    Raises:
        ForbiddenError(403): if role is not admin.
    """
    role = user_repo.get_role(session, user.role_id)
    if role is None or role.name != ADMIN_ROLE:
        raise ForbiddenError("Admin access required")
    return user


def require_user_type(*allowed: str):
    """
    Dependency factory gating a route by user type.

    Usage:

        @router.get("/me")
        def read_me(user: User = Depends(require_user_type("homeowner"))):
            ...

    Raises:
        ForbiddenError(403): user has not picked a type yet, or the type
        is not in `allowed`.
    """
    label = " or ".join(allowed)

    def dependency(user: User = Depends(require_auth)) -> User:
        if not user.user_type:
            raise ForbiddenError("Please complete onboarding to select your user type")
        if user.user_type not in allowed:
            raise ForbiddenError(f"This resource is only available for {label} users")
        return user

    return dependency


require_homeowner = require_user_type("homeowner")
require_designer = require_user_type("designer")
require_contractor = require_user_type("contractor")
