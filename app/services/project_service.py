# app/services/project_service.py
import uuid

from sqlmodel import Session

from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.database import utcnow
from app.models.profile import DesignerProfile, HomeownerProfile
from app.models.project import ActivityLog, Project, can_transition
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.schemas.project import ProjectCreate, ProjectUpdate


class ProjectService:
    """
    Business logic for projects.

    Responsibilities:
      - homeowner project CRUD (edits allowed in draft only)
      - the project status machine (see app/models/project.py)
      - access control: owner homeowner or assigned designer
      - activity log entries for every state change
    """

    def __init__(self, repo: ProjectRepository, profile_repo: ProfileRepository):
        self.repo = repo
        self.profile_repo = profile_repo

    # ----- Lookups shared with RequestService -----

    def homeowner_profile(self, session: Session, user: User) -> HomeownerProfile:
        profile = self.profile_repo.get_homeowner_by_user(session, user.id)
        if profile is None:
            raise NotFoundError("Homeowner profile not found. Please complete onboarding.")
        return profile

    def designer_profile(self, session: Session, user: User) -> DesignerProfile:
        profile = self.profile_repo.get_designer_by_user(session, user.id)
        if profile is None:
            raise NotFoundError("Designer profile not found. Please complete onboarding.")
        return profile

    def owned_project(self, session: Session, user: User, project_id: uuid.UUID) -> Project:
        """
        Project owned by the calling homeowner.

        Raises:
            NotFoundError(404): unknown project.
            ForbiddenError(403): project of another homeowner.
        """
        homeowner = self.homeowner_profile(session, user)
        project = self.repo.get(session, project_id)
        if project is None:
            raise NotFoundError("Project not found")
        if project.homeowner_id != homeowner.id:
            raise ForbiddenError("You do not have access to this project")
        return project

    def transition(
        self,
        session: Session,
        project: Project,
        new_status: str,
        user_id: uuid.UUID | None,
    ) -> None:
        """
        Move `project` to `new_status` and stage an activity entry.
        The caller commits.

        Raises:
            ValidationError(400): transition not allowed from current status.
        """
        if not can_transition(project.status, new_status):
            raise ValidationError(f"Cannot change project status from {project.status} to {new_status}")
        old = project.status
        project.status = new_status
        project.updated_at = utcnow()
        session.add(project)
        self.repo.add_activity(
            session,
            project.id,
            user_id,
            "status_changed",
            {"from": old, "to": new_status},
        )

    # ----- Homeowner -----

    def list_for_homeowner(self, session: Session, user: User, status: str | None) -> list[Project]:
        homeowner = self.homeowner_profile(session, user)
        return self.repo.list_for_homeowner(session, homeowner.id, status)

    def create(self, session: Session, user: User, payload: ProjectCreate) -> Project:
        """
        Create a draft project.

        Raises:
            NotFoundError(404): property_id given but not one of the caller's properties.
        """
        homeowner = self.homeowner_profile(session, user)
        if payload.property_id and not self.repo.get_property(session, payload.property_id, homeowner.id):
            raise NotFoundError("Property not found")

        data = payload.model_dump()
        project = Project(homeowner_id=homeowner.id, **data)
        session.add(project)
        session.flush()
        self.repo.add_activity(session, project.id, user.id, "project_created", {"title": project.title})
        return self.repo.save(session, project)

    def update(
        self,
        session: Session,
        user: User,
        project_id: uuid.UUID,
        payload: ProjectUpdate,
    ) -> Project:
        project = self.owned_project(session, user, project_id)
        if project.status != "draft":
            raise ValidationError("Only draft projects can be edited")

        data = payload.model_dump(exclude_unset=True)
        if data.get("property_id"):
            homeowner = self.homeowner_profile(session, user)
            if not self.repo.get_property(session, data["property_id"], homeowner.id):
                raise NotFoundError("Property not found")

        lo = data.get("budget_min", project.budget_min)
        hi = data.get("budget_max", project.budget_max)
        if lo is not None and hi is not None and lo > hi:
            raise ValidationError("budget_min cannot exceed budget_max")

        for key, value in data.items():
            setattr(project, key, value)
        self.repo.add_activity(session, project.id, user.id, "project_updated", {"fields": sorted(data)})
        return self.repo.save(session, project)

    def complete(self, session: Session, user: User, project_id: uuid.UUID) -> Project:
        """
        Mark an in-progress project completed and credit the designer.
        """
        project = self.owned_project(session, user, project_id)
        self.transition(session, project, "completed", user.id)

        if project.designer_id:
            designer = self.profile_repo.get_designer(session, project.designer_id)
            if designer:
                designer.projects_completed += 1
                session.add(designer)

        return self.repo.save(session, project)

    def cancel(self, session: Session, user: User, project_id: uuid.UUID) -> Project:
        project = self.owned_project(session, user, project_id)
        self.transition(session, project, "cancelled", user.id)
        return self.repo.save(session, project)

    # ----- Designer -----

    def list_for_designer(self, session: Session, user: User, status: str | None) -> list[Project]:
        designer = self.designer_profile(session, user)
        return self.repo.list_for_designer(session, designer.id, status)

    # ----- Shared -----

    def get_for_user(self, session: Session, user: User, project_id: uuid.UUID) -> Project:
        """
        Project visible to its homeowner or to its assigned designer.
        """
        project = self.repo.get(session, project_id)
        if project is None:
            raise NotFoundError("Project not found")

        if user.user_type == "homeowner":
            homeowner = self.profile_repo.get_homeowner_by_user(session, user.id)
            if homeowner and homeowner.id == project.homeowner_id:
                return project
        elif user.user_type == "designer":
            designer = self.profile_repo.get_designer_by_user(session, user.id)
            if designer and project.designer_id == designer.id:
                return project

        raise ForbiddenError("You do not have access to this project")

    def activity(self, session: Session, user: User, project_id: uuid.UUID) -> list[ActivityLog]:
        project = self.get_for_user(session, user, project_id)
        return self.repo.list_activity(session, project.id)
