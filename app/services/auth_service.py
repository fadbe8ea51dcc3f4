# app/services/auth_service.py
import logging
from datetime import timedelta

from sqlmodel import Session

from app.core.config import Settings
from app.core.device import DeviceInfo
from app.core.errors import (
    AppError,
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from app.core.security import (
    TokenPair,
    create_token_pair,
    decode_token,
    generate_verification_code,
    hash_code,
    hash_password,
    validate_password_strength,
    verify_code,
    verify_password,
)
from app.database import as_aware, utcnow
from app.models.user import User, UserDevice, UserPermission
from app.repositories.device_repo import DeviceRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.user_repo import UserRepository
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.email_service import EmailService

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"


class AuthService:
    """
    Business logic for accounts and sessions.

    Responsibilities:
      - registration, login, email verification
      - issuing / rotating / revoking device-bound token pairs
      - sending verification + welcome emails
    """

    def __init__(
        self,
        user_repo: UserRepository,
        device_repo: DeviceRepository,
        profile_repo: ProfileRepository,
    ):
        self.user_repo = user_repo
        self.device_repo = device_repo
        self.profile_repo = profile_repo

    # ----- Helpers -----

    def _issue_code(self, settings: Settings, user: User) -> str:
        """Set a fresh hashed verification code on `user` and return the plain code."""
        code = generate_verification_code()
        user.email_verification_code = hash_code(code)
        user.email_verification_code_expires_at = utcnow() + timedelta(
            minutes=settings.VERIFICATION_CODE_EXPIRE_MINUTES
        )
        return code

    def _open_session(
        self,
        session: Session,
        settings: Settings,
        user: User,
        device: DeviceInfo,
    ) -> TokenPair:
        """Mint a token pair and store it on a new UserDevice row."""
        tokens = create_token_pair(settings, user.id, user.email, user.role_id)
        self.device_repo.save(
            session,
            UserDevice(
                user_id=user.id,
                token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                token_expires_at=tokens.access_expires_at,
                refresh_token_expires_at=tokens.refresh_expires_at,
                device_type=device.device_type,
                device_name=device.device_name,
                user_agent=device.user_agent,
                ip_address=device.ip_address,
            ),
        )
        return tokens

    # ----- Public flows -----

    def register(
        self,
        session: Session,
        settings: Settings,
        email_service: EmailService,
        payload: RegisterRequest,
        device: DeviceInfo,
    ) -> tuple[User, TokenPair]:
        """
        Create an account and sign the new user in.

        Steps:
          1. Check password strength.
          2. Reject duplicate email (409).
          3. Create user with role "user" and default permissions
             (plus a placeholder profile when user_type is given).
          4. Email a 6-digit verification code.
          5. Open a device session.

        A failed verification email fails the request; the account stays
        and the user can ask for a resend.
        """
        validate_password_strength(payload.password)

        if self.user_repo.get_by_email(session, payload.email):
            raise ConflictError("An account with this email already exists")

        role = self.user_repo.get_role_by_name(session, DEFAULT_ROLE)
        if role is None:
            raise InternalError("Default role is missing; run migrations")

        user = User(
            role_id=role.id,
            email=payload.email,
            password_hash=hash_password(payload.password),
            name=payload.name,
            city=payload.city,
            user_type=payload.user_type,
        )
        code = self._issue_code(settings, user)
        user = self.user_repo.create(session, user)
        self.user_repo.save_permissions(session, UserPermission(user_id=user.id))
        if user.user_type:
            self.profile_repo.ensure_placeholder(session, user)

        email_service.send_verification_email(
            user.email,
            code,
            settings.VERIFICATION_CODE_EXPIRE_MINUTES,
        )

        tokens = self._open_session(session, settings, user, device)
        logger.info("Registered user %s", user.id)
        return user, tokens

    def login(
        self,
        session: Session,
        settings: Settings,
        email_service: EmailService,
        payload: LoginRequest,
        device: DeviceInfo,
    ) -> tuple[User, TokenPair]:
        """
        Password login; each login opens a new device session.

        Unverified users still get tokens, plus a fresh code by email.
        """
        user = self.user_repo.get_by_email(session, payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        if user.status != "active":
            raise ForbiddenError("Account is deactivated")

        if not user.email_verified:
            code = self._issue_code(settings, user)
            try:
                email_service.send_verification_email(
                    user.email,
                    code,
                    settings.VERIFICATION_CODE_EXPIRE_MINUTES,
                )
            except AppError as e:
                logger.error("Could not send verification email to %s: %s", user.email, e.message)

        user.last_login_at = utcnow()
        user = self.user_repo.update(session, user)

        tokens = self._open_session(session, settings, user, device)
        return user, tokens

    def refresh(self, session: Session, settings: Settings, refresh_token: str) -> TokenPair:
        """
        Rotate both tokens of the device session holding `refresh_token`.

        The old refresh token stops working immediately.
        """
        payload = decode_token(settings, refresh_token, "refresh")

        device = self.device_repo.get_active_by_refresh_token(session, refresh_token)
        if device is None or str(device.user_id) != payload["sub"]:
            raise UnauthorizedError("Session has been revoked")
        if as_aware(device.refresh_token_expires_at) <= utcnow():
            raise UnauthorizedError("Refresh token has expired")

        user = self.user_repo.get_by_id(session, device.user_id)
        if user is None or user.status != "active":
            raise UnauthorizedError("User not found or inactive")

        tokens = create_token_pair(settings, user.id, user.email, user.role_id)
        device.token = tokens.access_token
        device.refresh_token = tokens.refresh_token
        device.token_expires_at = tokens.access_expires_at
        device.refresh_token_expires_at = tokens.refresh_expires_at
        device.last_used_at = utcnow()
        self.device_repo.save(session, device)
        return tokens

    def verify_email(
        self,
        session: Session,
        email_service: EmailService,
        user: User,
        code: str,
    ) -> User:
        """
        Confirm the email with the 6-digit code, then send the welcome email.

        Raises:
            ConflictError(409): already verified.
            ValidationError(400): no pending code, expired, or wrong code.
        """
        if user.email_verified:
            raise ConflictError("Email is already verified")

        if not user.email_verification_code or not user.email_verification_code_expires_at:
            raise ValidationError("No verification code pending; request a new one")
        if as_aware(user.email_verification_code_expires_at) < utcnow():
            raise ValidationError("Verification code has expired")
        if not verify_code(code, user.email_verification_code):
            raise ValidationError("Invalid verification code")

        user.email_verified = True
        user.email_verified_at = utcnow()
        user.email_verification_code = None
        user.email_verification_code_expires_at = None
        user = self.user_repo.update(session, user)

        email_service.send_welcome_email(user.email, user.name or user.email.split("@", 1)[0])
        return user

    def resend_verification(
        self,
        session: Session,
        settings: Settings,
        email_service: EmailService,
        email: str,
    ) -> None:
        user = self.user_repo.get_by_email(session, email)
        if user is None:
            raise NotFoundError("User not found")
        if user.email_verified:
            raise ConflictError("Email is already verified")

        code = self._issue_code(settings, user)
        self.user_repo.update(session, user)
        email_service.send_verification_email(
            user.email,
            code,
            settings.VERIFICATION_CODE_EXPIRE_MINUTES,
        )

    # ----- Sessions -----

    def logout(self, session: Session, device: UserDevice) -> None:
        """Revoke the current device session."""
        device.is_active = False
        self.device_repo.save(session, device)

    def logout_all(self, session: Session, user: User) -> int:
        """Revoke every session of `user`; returns how many were active."""
        return self.device_repo.deactivate_all(session, user.id)
