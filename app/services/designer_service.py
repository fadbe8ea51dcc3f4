# app/services/designer_service.py
import math
import uuid

from sqlmodel import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.models.profile import DesignerProfile
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.schemas.profile import DesignerProfileCreate, DesignerProfileUpdate
from app.services.search_service import SearchService


class DesignerService:
    """
    Business logic for designer profiles.

    Responsibilities:
      - designer's own profile (onboarding + edits)
      - public browse of verified designers
      - keeping the search index in sync after every write
    """

    def __init__(self, repo: ProfileRepository):
        self.repo = repo

    # ----- Own profile -----

    def get_me(self, session: Session, user: User) -> DesignerProfile:
        profile = self.repo.get_designer_by_user(session, user.id)
        if profile is None:
            raise NotFoundError("Designer profile not found")
        return profile

    def create_me(
        self,
        session: Session,
        search: SearchService,
        user: User,
        payload: DesignerProfileCreate,
    ) -> DesignerProfile:
        """
        Onboarding: create the profile, or fill the placeholder row.

        Raises:
            ConflictError(409): onboarding already completed.
        """
        if user.profile_created:
            raise ConflictError("Profile already exists")

        profile = self.repo.get_designer_by_user(session, user.id)
        if profile is None:
            profile = DesignerProfile(user_id=user.id, **payload.model_dump())
        else:
            for key, value in payload.model_dump().items():
                setattr(profile, key, value)

        profile = self.repo.save(session, profile)
        self.repo.mark_profile_created(session, user)
        search.index_designer(profile)
        return profile

    def update_me(
        self,
        session: Session,
        search: SearchService,
        user: User,
        payload: DesignerProfileUpdate,
    ) -> DesignerProfile:
        profile = self.get_me(session, user)
        data = payload.model_dump(exclude_unset=True)

        lo = data.get("price_range_min", profile.price_range_min)
        hi = data.get("price_range_max", profile.price_range_max)
        if lo is not None and hi is not None and lo > hi:
            raise ValidationError("price_range_min cannot exceed price_range_max")

        for key, value in data.items():
            setattr(profile, key, value)
        profile = self.repo.save(session, profile)
        search.index_designer(profile)
        return profile

    # ----- Public -----

    def browse(self, session: Session, page: int, per_page: int) -> dict:
        rows, total = self.repo.list_verified_designers(
            session, skip=(page - 1) * per_page, limit=per_page
        )
        return {
            "items": rows,
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / per_page),
        }

    def get_public(self, session: Session, designer_id: uuid.UUID) -> DesignerProfile:
        """
        Raises:
            NotFoundError(404): unknown id or designer not verified yet.
        """
        profile = self.repo.get_designer(session, designer_id)
        if profile is None or not profile.is_verified:
            raise NotFoundError("Designer not found")
        return profile
