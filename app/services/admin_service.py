# app/services/admin_service.py
import logging
import uuid
from typing import Literal

from sqlmodel import Session, SQLModel

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.typesense_client import CONTRACTORS_COLLECTION, DESIGNERS_COLLECTION
from app.database import utcnow
from app.models.profile import ContractorProfile, DesignerProfile
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.repositories.user_repo import UserRepository
from app.services.notification_service import NotificationService
from app.services.search_service import SearchService

logger = logging.getLogger(__name__)

ProviderKind = Literal["designer", "contractor"]

PROVIDER_MODELS: dict[str, type[SQLModel]] = {
    "designer": DesignerProfile,
    "contractor": ContractorProfile,
}
PROVIDER_COLLECTIONS = {
    "designer": DESIGNERS_COLLECTION,
    "contractor": CONTRACTORS_COLLECTION,
}


class AdminService:
    """
    Provider verification queue.

    Verifying a designer or contractor:
      - sets is_verified / verified_at
      - pushes the profile to the search index (verified-only search)
      - notifies the provider

    Rejecting:
      - deletes the submitted profile and its search document
      - sends the provider back to onboarding with a fresh placeholder
      - notifies the provider, with the reason when one is given
    """

    def __init__(
        self,
        repo: ProfileRepository,
        user_repo: UserRepository,
        notifications: NotificationService,
    ):
        self.repo = repo
        self.user_repo = user_repo
        self.notifications = notifications

    def list_pending(self, session: Session, kind: ProviderKind) -> list[SQLModel]:
        return self.repo.list_unverified(session, PROVIDER_MODELS[kind])

    def _pending_profile(self, session: Session, kind: ProviderKind, profile_id: uuid.UUID):
        label = kind.capitalize()
        if kind == "designer":
            profile = self.repo.get_designer(session, profile_id)
        else:
            profile = self.repo.get_contractor(session, profile_id)
        if profile is None:
            raise NotFoundError(f"{label} not found")
        if profile.is_verified:
            raise ConflictError(f"{label} is already verified")
        return profile

    def verify(
        self,
        session: Session,
        search: SearchService,
        admin: User,
        kind: ProviderKind,
        profile_id: uuid.UUID,
    ):
        """
        Raises:
            NotFoundError(404): unknown profile.
            ConflictError(409): already verified.
            ValidationError(400): the provider has not finished onboarding.
        """
        profile = self._pending_profile(session, kind, profile_id)
        owner = self.user_repo.get_by_id(session, profile.user_id)
        if owner is None or not owner.profile_created:
            raise ValidationError(f"{kind.capitalize()} has not completed onboarding")

        profile.is_verified = True
        profile.verified_at = utcnow()
        self.notifications.notify(
            session,
            owner.id,
            "profile_verified",
            "Profile verified",
            "Your profile has been verified and is now visible to homeowners",
            {"profile_id": str(profile.id)},
        )
        profile = self.repo.save(session, profile)

        if kind == "designer":
            search.index_designer(profile)
        else:
            search.index_contractor(profile)
        logger.info("Admin %s verified %s %s", admin.id, kind, profile.id)
        return profile

    def reject(
        self,
        session: Session,
        search: SearchService,
        admin: User,
        kind: ProviderKind,
        profile_id: uuid.UUID,
        reason: str | None = None,
    ) -> None:
        profile = self._pending_profile(session, kind, profile_id)
        owner = self.user_repo.get_by_id(session, profile.user_id)

        search.remove_document(PROVIDER_COLLECTIONS[kind], str(profile.id))
        self.repo.delete(session, profile)
        logger.info("Admin %s rejected %s %s: %s", admin.id, kind, profile_id, reason or "no reason given")

        if owner is None:
            return
        message = "Your profile was not approved. Please review it and submit it again."
        if reason:
            message = f"{message} Reason: {reason}"
        self.notifications.notify(
            session,
            owner.id,
            "profile_rejected",
            "Profile not approved",
            message,
            {"reason": reason} if reason else None,
        )
        owner.profile_created = False
        self.user_repo.update(session, owner)
        self.repo.ensure_placeholder(session, owner)
