# app/services/contractor_service.py
import math
import uuid

from sqlmodel import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.profile import ContractorProfile
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.schemas.profile import ContractorProfileCreate, ContractorProfileUpdate
from app.services.search_service import SearchService


class ContractorService:
    """Business logic for contractor profiles (same shape as designers)."""

    def __init__(self, repo: ProfileRepository):
        self.repo = repo

    def get_me(self, session: Session, user: User) -> ContractorProfile:
        profile = self.repo.get_contractor_by_user(session, user.id)
        if profile is None:
            raise NotFoundError("Contractor profile not found")
        return profile

    def create_me(
        self,
        session: Session,
        search: SearchService,
        user: User,
        payload: ContractorProfileCreate,
    ) -> ContractorProfile:
        if user.profile_created:
            raise ConflictError("Profile already exists")

        profile = self.repo.get_contractor_by_user(session, user.id)
        if profile is None:
            profile = ContractorProfile(user_id=user.id, **payload.model_dump())
        else:
            for key, value in payload.model_dump().items():
                setattr(profile, key, value)

        profile = self.repo.save(session, profile)
        self.repo.mark_profile_created(session, user)
        search.index_contractor(profile)
        return profile

    def update_me(
        self,
        session: Session,
        search: SearchService,
        user: User,
        payload: ContractorProfileUpdate,
    ) -> ContractorProfile:
        profile = self.get_me(session, user)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(profile, key, value)
        profile = self.repo.save(session, profile)
        search.index_contractor(profile)
        return profile

    def browse(self, session: Session, page: int, per_page: int) -> dict:
        rows, total = self.repo.list_verified_contractors(
            session, skip=(page - 1) * per_page, limit=per_page
        )
        return {
            "items": rows,
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / per_page),
        }

    def get_public(self, session: Session, contractor_id: uuid.UUID) -> ContractorProfile:
        profile = self.repo.get_contractor(session, contractor_id)
        if profile is None or not profile.is_verified:
            raise NotFoundError("Contractor not found")
        return profile
