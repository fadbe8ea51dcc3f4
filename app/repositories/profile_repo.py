# app/repositories/profile_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, SQLModel, select

from app.models.profile import ContractorProfile, DesignerProfile, HomeownerProfile
from app.models.user import User


class ProfileRepository:
    """
    Data access layer for homeowner / designer / contractor profiles.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Generic -----

    def save(self, session: Session, profile: SQLModel) -> SQLModel:
        """Insert or update a profile row and return it refreshed."""
        session.add(profile)
        session.commit()
        session.refresh(profile)
        return profile

    def mark_profile_created(self, session: Session, user: User) -> None:
        if not user.profile_created:
            user.profile_created = True
            session.add(user)
            session.commit()
            session.refresh(user)

    # ----- Homeowners -----

    def get_homeowner_by_user(self, session: Session, user_id: uuid.UUID) -> HomeownerProfile | None:
        stmt = select(HomeownerProfile).where(HomeownerProfile.user_id == user_id)
        return session.exec(stmt).first()

    def get_homeowner(self, session: Session, homeowner_id: uuid.UUID) -> HomeownerProfile | None:
        return session.get(HomeownerProfile, homeowner_id)

    # ----- Designers -----

    def get_designer(self, session: Session, designer_id: uuid.UUID) -> DesignerProfile | None:
        return session.get(DesignerProfile, designer_id)

    def get_designer_by_user(self, session: Session, user_id: uuid.UUID) -> DesignerProfile | None:
        stmt = select(DesignerProfile).where(DesignerProfile.user_id == user_id)
        return session.exec(stmt).first()

    def list_verified_designers(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[DesignerProfile], int]:
        """
        Verified designers, newest first.

        Returns:
            (page of rows, total count)
        """
        base = select(DesignerProfile).where(DesignerProfile.is_verified == True)  # noqa: E712
        total = session.exec(
            select(func.count()).select_from(DesignerProfile).where(DesignerProfile.is_verified == True)  # noqa: E712
        ).one()
        rows = session.exec(
            base.order_by(DesignerProfile.created_at.desc()).offset(skip).limit(limit)
        ).all()
        return list(rows), total

    # ----- Contractors -----

    def get_contractor(self, session: Session, contractor_id: uuid.UUID) -> ContractorProfile | None:
        return session.get(ContractorProfile, contractor_id)

    def get_contractor_by_user(self, session: Session, user_id: uuid.UUID) -> ContractorProfile | None:
        stmt = select(ContractorProfile).where(ContractorProfile.user_id == user_id)
        return session.exec(stmt).first()

    def list_verified_contractors(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[ContractorProfile], int]:
        base = select(ContractorProfile).where(ContractorProfile.is_verified == True)  # noqa: E712
        total = session.exec(
            select(func.count()).select_from(ContractorProfile).where(ContractorProfile.is_verified == True)  # noqa: E712
        ).one()
        rows = session.exec(
            base.order_by(ContractorProfile.created_at.desc()).offset(skip).limit(limit)
        ).all()
        return list(rows), total

    # ----- Verification queue -----

    def list_unverified(self, session: Session, model: type[SQLModel]) -> list[SQLModel]:
        """
        Unverified designer or contractor profiles of active users who
        finished onboarding, oldest first. Placeholders are skipped.
        """
        stmt = (
            select(model)
            .join(User, User.id == model.user_id)
            .where(
                model.is_verified == False,  # noqa: E712
                User.profile_created == True,  # noqa: E712
                User.status == "active",
            )
            .order_by(model.created_at)
        )
        return list(session.exec(stmt).all())

    def delete(self, session: Session, profile: SQLModel) -> None:
        session.delete(profile)
        session.commit()

    # ----- Placeholders -----

    def ensure_placeholder(self, session: Session, user: User) -> SQLModel | None:
        """
        Make sure a profile row of the user's type exists.

        Called when the user type is chosen, so type-gated `/me` routes
        answer with data right away. The placeholder only carries the
        account name; `profile_created` stays False until onboarding.
        """
        name = user.name or user.email.split("@", 1)[0]
        if user.user_type == "homeowner":
            existing = self.get_homeowner_by_user(session, user.id)
            profile = existing or HomeownerProfile(user_id=user.id, name=name, email=user.email, city=user.city)
        elif user.user_type == "designer":
            existing = self.get_designer_by_user(session, user.id)
            profile = existing or DesignerProfile(user_id=user.id, name=name)
        elif user.user_type == "contractor":
            existing = self.get_contractor_by_user(session, user.id)
            profile = existing or ContractorProfile(user_id=user.id, name=name)
        else:
            return None

        if existing:
            return existing
        return self.save(session, profile)
