# app/services/homeowner_service.py
import uuid

from sqlmodel import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.profile import HomeownerProfile
from app.models.project import Property
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.schemas.profile import (
    HomeownerProfileCreate,
    HomeownerProfileUpdate,
    PropertyCreate,
    PropertyUpdate,
)


class HomeownerService:
    """
    Business logic for homeowner profiles and their properties.

    Every property operation is scoped to the caller's own profile;
    someone else's property id behaves as "not found".
    """

    def __init__(self, profile_repo: ProfileRepository, project_repo: ProjectRepository):
        self.profile_repo = profile_repo
        self.project_repo = project_repo

    # ----- Profile -----

    def get_profile(self, session: Session, user: User) -> HomeownerProfile:
        """
        Raises:
            NotFoundError(404): profile not created yet.
        """
        profile = self.profile_repo.get_homeowner_by_user(session, user.id)
        if profile is None:
            raise NotFoundError("Homeowner profile not found")
        return profile

    def create_profile(
        self,
        session: Session,
        user: User,
        payload: HomeownerProfileCreate,
    ) -> HomeownerProfile:
        """
        Onboarding: create the profile, or fill the placeholder row.

        The contact email is copied from the account.

        Raises:
            ConflictError(409): onboarding already completed.
        """
        if user.profile_created:
            raise ConflictError("Profile already exists")

        profile = self.profile_repo.get_homeowner_by_user(session, user.id)
        if profile is None:
            profile = HomeownerProfile(user_id=user.id, email=user.email, **payload.model_dump())
        else:
            for key, value in payload.model_dump().items():
                setattr(profile, key, value)

        profile = self.profile_repo.save(session, profile)
        self.profile_repo.mark_profile_created(session, user)
        return profile

    def update_profile(
        self,
        session: Session,
        user: User,
        payload: HomeownerProfileUpdate,
    ) -> HomeownerProfile:
        profile = self.get_profile(session, user)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(profile, key, value)
        return self.profile_repo.save(session, profile)

    # ----- Properties -----

    def list_properties(self, session: Session, user: User) -> list[Property]:
        profile = self.get_profile(session, user)
        return self.project_repo.list_properties(session, profile.id)

    def get_property(self, session: Session, user: User, property_id: uuid.UUID) -> Property:
        profile = self.get_profile(session, user)
        prop = self.project_repo.get_property(session, property_id, profile.id)
        if prop is None:
            raise NotFoundError("Property not found")
        return prop

    def create_property(self, session: Session, user: User, payload: PropertyCreate) -> Property:
        profile = self.get_profile(session, user)
        prop = Property(homeowner_id=profile.id, **payload.model_dump())
        return self.project_repo.save(session, prop)

    def update_property(
        self,
        session: Session,
        user: User,
        property_id: uuid.UUID,
        payload: PropertyUpdate,
    ) -> Property:
        prop = self.get_property(session, user, property_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            setattr(prop, key, value)
        return self.project_repo.save(session, prop)

    def delete_property(self, session: Session, user: User, property_id: uuid.UUID) -> None:
        prop = self.get_property(session, user, property_id)
        self.project_repo.delete_property(session, prop)
