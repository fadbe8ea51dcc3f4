# app/routers/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlmodel import Session

from app.core.auth import get_current_device, require_auth
from app.core.config import Settings
from app.core.deps import get_app_settings, get_email_service, get_session
from app.core.device import extract_device_info
from app.core.security import TokenPair
from app.models.user import User, UserDevice
from app.repositories.device_repo import DeviceRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth import (
    AuthRead,
    LoginRequest,
    LogoutAllRead,
    RefreshTokenRequest,
    RegisterRequest,
    ResendVerificationRequest,
    TokenRead,
    VerifyEmailRequest,
)
from app.schemas.common import ApiResponse, ok
from app.schemas.user import UserRead
from app.services.auth_service import AuthService
from app.services.email_service import EmailService

router = APIRouter(prefix="/auth", tags=["Auth"])

service = AuthService(UserRepository(), DeviceRepository(), ProfileRepository())


def _tokens(pair: TokenPair) -> TokenRead:
    return TokenRead(
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        expires_at=pair.access_expires_at,
        refresh_expires_at=pair.refresh_expires_at,
    )


def _auth_read(user: User, pair: TokenPair) -> AuthRead:
    return AuthRead(user=UserRead.model_validate(user), tokens=_tokens(pair))


# -------- Public --------


@router.post(
    "/register",
    response_model=ApiResponse[AuthRead],
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: RegisterRequest,
    request: Request,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
    email_service: EmailService = Depends(get_email_service),
):
    """
    Create an account, email a verification code and return a token pair.
    """
    user, pair = service.register(
        session, settings, email_service, payload, extract_device_info(request)
    )
    return ok(_auth_read(user, pair), "Registration successful. Please verify your email.")


@router.post("/login", response_model=ApiResponse[AuthRead])
def login(
    payload: LoginRequest,
    request: Request,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
    email_service: EmailService = Depends(get_email_service),
):
    """Email + password login. Opens a new device session."""
    user, pair = service.login(
        session, settings, email_service, payload, extract_device_info(request)
    )
    return ok(_auth_read(user, pair), "Login successful")


@router.post("/resend-verification", response_model=ApiResponse[None])
def resend_verification(
    payload: ResendVerificationRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
    email_service: EmailService = Depends(get_email_service),
):
    service.resend_verification(session, settings, email_service, payload.email)
    return ok(None, "Verification code sent")


@router.post("/refresh-token", response_model=ApiResponse[TokenRead])
def refresh_token(
    payload: RefreshTokenRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    """Rotate the token pair of the session owning `refresh_token`."""
    pair = service.refresh(session, settings, payload.refresh_token)
    return ok(_tokens(pair), "Token refreshed")


# -------- Authenticated --------


@router.post("/verify-email", response_model=ApiResponse[UserRead])
def verify_email(
    payload: VerifyEmailRequest,
    session: Session = Depends(get_session),
    email_service: EmailService = Depends(get_email_service),
    current_user: User = Depends(require_auth),
):
    user = service.verify_email(session, email_service, current_user, payload.code)
    return ok(UserRead.model_validate(user), "Email verified successfully")


@router.post("/logout", response_model=ApiResponse[None])
def logout(
    session: Session = Depends(get_session),
    device: UserDevice = Depends(get_current_device),
):
    """Revoke the current session only."""
    service.logout(session, device)
    return ok(None, "Logged out successfully")


@router.post("/logout-all", response_model=ApiResponse[LogoutAllRead])
def logout_all(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """Revoke every session of the current user, on every device."""
    revoked = service.logout_all(session, current_user)
    return ok(LogoutAllRead(revoked_sessions=revoked), "Logged out from all devices")
