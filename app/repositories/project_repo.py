# app/repositories/project_repo.py
import uuid
from typing import Any

from sqlmodel import Session, select

from app.models.project import ActivityLog, Project, Property


class ProjectRepository:
    """
    Data access layer for properties, projects and their activity log.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Properties -----

    def list_properties(self, session: Session, homeowner_id: uuid.UUID) -> list[Property]:
        stmt = (
            select(Property)
            .where(Property.homeowner_id == homeowner_id)
            .order_by(Property.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def get_property(
        self,
        session: Session,
        property_id: uuid.UUID,
        homeowner_id: uuid.UUID,
    ) -> Property | None:
        """Property by id, only if it belongs to `homeowner_id`."""
        stmt = select(Property).where(
            Property.id == property_id,
            Property.homeowner_id == homeowner_id,
        )
        return session.exec(stmt).first()

    def delete_property(self, session: Session, prop: Property) -> None:
        session.delete(prop)
        session.commit()

    # ----- Projects -----

    def get(self, session: Session, project_id: uuid.UUID) -> Project | None:
        return session.get(Project, project_id)

    def list_for_homeowner(
        self,
        session: Session,
        homeowner_id: uuid.UUID,
        status: str | None = None,
    ) -> list[Project]:
        stmt = select(Project).where(Project.homeowner_id == homeowner_id)
        if status:
            stmt = stmt.where(Project.status == status)
        return list(session.exec(stmt.order_by(Project.updated_at.desc())).all())

    def list_for_designer(
        self,
        session: Session,
        designer_id: uuid.UUID,
        status: str | None = None,
    ) -> list[Project]:
        stmt = select(Project).where(Project.designer_id == designer_id)
        if status:
            stmt = stmt.where(Project.status == status)
        return list(session.exec(stmt.order_by(Project.updated_at.desc())).all())

    # ----- Shared -----

    def save(self, session: Session, obj):
        """Insert or update a Property / Project row and return it refreshed."""
        session.add(obj)
        session.commit()
        session.refresh(obj)
        return obj

    # ----- Activity -----

    def add_activity(
        self,
        session: Session,
        project_id: uuid.UUID,
        user_id: uuid.UUID | None,
        action: str,
        details: dict[str, Any] | None = None,
    ) -> ActivityLog:
        """Stage an activity entry; committed with the caller's transaction."""
        entry = ActivityLog(project_id=project_id, user_id=user_id, action=action, details=details)
        session.add(entry)
        return entry

    def list_activity(self, session: Session, project_id: uuid.UUID, limit: int = 50) -> list[ActivityLog]:
        stmt = (
            select(ActivityLog)
            .where(ActivityLog.project_id == project_id)
            .order_by(ActivityLog.created_at.desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())
