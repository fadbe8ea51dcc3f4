# app/routers/projects.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_designer, require_homeowner, require_user_type
from app.core.deps import get_session
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.schemas.common import ApiResponse, ok
from app.schemas.project import (
    ActivityRead,
    ProjectCreate,
    ProjectRead,
    ProjectStatus,
    ProjectUpdate,
)
from app.services.project_service import ProjectService

router = APIRouter(prefix="/projects", tags=["Projects"])

service = ProjectService(ProjectRepository(), ProfileRepository())

require_participant = require_user_type("homeowner", "designer")


# -------- Homeowner --------


@router.get("", response_model=ApiResponse[list[ProjectRead]])
def list_my_projects(
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    projects = service.list_for_homeowner(session, current_user, status_filter)
    return ok([ProjectRead.model_validate(p) for p in projects], "Projects retrieved successfully")


@router.post(
    "",
    response_model=ApiResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
)
def create_project(
    payload: ProjectCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    """Create a project in `draft` status."""
    project = service.create(session, current_user, payload)
    return ok(ProjectRead.model_validate(project), "Project created successfully")


# -------- Designer --------


@router.get("/designer", response_model=ApiResponse[list[ProjectRead]])
def list_assigned_projects(
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    session: Session = Depends(get_session),
    current_user: User = Depends(require_designer),
):
    """Projects where the caller is the assigned designer."""
    projects = service.list_for_designer(session, current_user, status_filter)
    return ok([ProjectRead.model_validate(p) for p in projects], "Projects retrieved successfully")


# -------- Single project --------


@router.get("/{project_id}", response_model=ApiResponse[ProjectRead])
def read_project(
    project_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_participant),
):
    project = service.get_for_user(session, current_user, project_id)
    return ok(ProjectRead.model_validate(project), "Project retrieved successfully")


@router.patch("/{project_id}", response_model=ApiResponse[ProjectRead])
def update_project(
    project_id: uuid.UUID,
    payload: ProjectUpdate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    project = service.update(session, current_user, project_id, payload)
    return ok(ProjectRead.model_validate(project), "Project updated successfully")


@router.post("/{project_id}/complete", response_model=ApiResponse[ProjectRead])
def complete_project(
    project_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    project = service.complete(session, current_user, project_id)
    return ok(ProjectRead.model_validate(project), "Project marked as completed")


@router.post("/{project_id}/cancel", response_model=ApiResponse[ProjectRead])
def cancel_project(
    project_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    project = service.cancel(session, current_user, project_id)
    return ok(ProjectRead.model_validate(project), "Project cancelled")


@router.get("/{project_id}/activity", response_model=ApiResponse[list[ActivityRead]])
def project_activity(
    project_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_participant),
):
    entries = service.activity(session, current_user, project_id)
    return ok([ActivityRead.model_validate(a) for a in entries], "Activity retrieved successfully")
