# app/services/user_service.py
import uuid

from sqlmodel import Session

from app.core.errors import ConflictError, NotFoundError
from app.core.typesense_client import CONTRACTORS_COLLECTION, DESIGNERS_COLLECTION
from app.models.user import User, UserDevice, UserPermission
from app.repositories.device_repo import DeviceRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.user_repo import UserRepository
from app.schemas.user import PermissionsUpdate, UserUpdate
from app.services.search_service import SearchService


class UserService:
    """
    Business logic for the signed-in user's own account.

    Responsibilities:
      - enforce app rules (user type is chosen once)
      - permissions and device session management
      - account deactivation
    """

    def __init__(
        self,
        repo: UserRepository,
        device_repo: DeviceRepository,
        profile_repo: ProfileRepository,
    ):
        self.repo = repo
        self.device_repo = device_repo
        self.profile_repo = profile_repo

    # ----- Self profile -----

    def get_permissions(self, session: Session, user: User) -> UserPermission:
        """
        Return the user's permission row, creating it with defaults if an
        older account has none.
        """
        permissions = self.repo.get_permissions(session, user.id)
        if permissions is None:
            permissions = self.repo.save_permissions(session, UserPermission(user_id=user.id))
        return permissions

    def update_me(self, session: Session, user: User, payload: UserUpdate) -> User:
        """
        Partial update for profile edits.

        Rules:
          - user_type may be set once; switching types afterwards is 409
          - choosing a type creates a placeholder profile of that type
        """
        data = payload.model_dump(exclude_unset=True)

        new_type = data.pop("user_type", None)
        if new_type is not None and new_type != user.user_type:
            if user.user_type is not None:
                raise ConflictError("User type has already been set")
            user.user_type = new_type

        for key, value in data.items():
            setattr(user, key, value)

        user = self.repo.update(session, user)
        if new_type is not None:
            self.profile_repo.ensure_placeholder(session, user)
        return user

    def update_permissions(
        self,
        session: Session,
        user: User,
        payload: PermissionsUpdate,
    ) -> UserPermission:
        permissions = self.get_permissions(session, user)
        for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(permissions, key, value)
        return self.repo.save_permissions(session, permissions)

    # ----- Devices -----

    def list_devices(self, session: Session, user: User) -> list[UserDevice]:
        return self.device_repo.list_for_user(session, user.id, active_only=True)

    def revoke_device(self, session: Session, user: User, device_id: uuid.UUID) -> None:
        """
        Sign out one of the user's own sessions.

        Raises:
            NotFoundError(404): unknown id, or a device of another user.
        """
        device = self.device_repo.get_by_id(session, device_id)
        if device is None or device.user_id != user.id or not device.is_active:
            raise NotFoundError("Device not found")
        device.is_active = False
        self.device_repo.save(session, device)

    # ----- Deactivation -----

    def deactivate(self, session: Session, search: SearchService, user: User) -> None:
        """
        Soft-delete the account.

        Sets status=inactive, revokes every session and drops the user's
        provider profile from public search.
        """
        user.status = "inactive"
        self.repo.update(session, user)
        self.device_repo.deactivate_all(session, user.id)

        designer = self.profile_repo.get_designer_by_user(session, user.id)
        if designer:
            search.remove_document(DESIGNERS_COLLECTION, str(designer.id))
        contractor = self.profile_repo.get_contractor_by_user(session, user.id)
        if contractor:
            search.remove_document(CONTRACTORS_COLLECTION, str(contractor.id))
