# app/routers/requests.py
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.core.auth import require_designer, require_homeowner
from app.core.deps import get_session
from app.models.user import User
from app.repositories.notification_repo import NotificationRepository
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.repositories.request_repo import RequestRepository
from app.schemas.common import ApiResponse, ok
from app.schemas.profile import DesignerProfileRead, HomeownerProfileRead
from app.schemas.project import (
    AcceptProposalRead,
    ProjectProposalRead,
    ProjectRead,
    ProjectRequestCreate,
    ProjectRequestRead,
    ProposalCreate,
    ProposalRead,
    RequestDetailRead,
    RequestStatus,
)
from app.services.notification_service import NotificationService
from app.services.project_service import ProjectService
from app.services.request_service import RequestService

router = APIRouter(prefix="/requests", tags=["Requests"])

project_repo = ProjectRepository()
profile_repo = ProfileRepository()
service = RequestService(
    RequestRepository(),
    project_repo,
    profile_repo,
    ProjectService(project_repo, profile_repo),
    NotificationService(NotificationRepository()),
)


def _maybe(schema, obj):
    return schema.model_validate(obj) if obj is not None else None


# -------- Homeowner --------


@router.post(
    "",
    response_model=ApiResponse[ProjectRequestRead],
    status_code=status.HTTP_201_CREATED,
)
def send_request(
    payload: ProjectRequestCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    """
    Invite a verified designer to send a proposal for one of the
    caller's projects.
    """
    request = service.send_request(session, current_user, payload)
    return ok(ProjectRequestRead.model_validate(request), "Request sent successfully")


@router.get("/project/{project_id}", response_model=ApiResponse[list[ProjectRequestRead]])
def list_project_requests(
    project_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    requests = service.list_project_requests(session, current_user, project_id)
    return ok([ProjectRequestRead.model_validate(r) for r in requests], "Requests retrieved successfully")


@router.get(
    "/project/{project_id}/proposals",
    response_model=ApiResponse[list[ProjectProposalRead]],
)
def list_project_proposals(
    project_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    rows = service.list_project_proposals(session, current_user, project_id)
    data = [
        ProjectProposalRead(
            request=ProjectRequestRead.model_validate(row["request"]),
            proposal=_maybe(ProposalRead, row["proposal"]),
            designer=_maybe(DesignerProfileRead, row["designer"]),
        )
        for row in rows
    ]
    return ok(data, "Proposals retrieved successfully")


@router.post(
    "/proposals/{proposal_id}/accept",
    response_model=ApiResponse[AcceptProposalRead],
)
def accept_proposal(
    proposal_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    """
    Accept a proposal: assigns the designer and starts the project.
    Competing proposals are rejected.
    """
    proposal, project = service.accept_proposal(session, current_user, proposal_id)
    data = AcceptProposalRead(
        proposal=ProposalRead.model_validate(proposal),
        project=ProjectRead.model_validate(project),
    )
    return ok(data, "Proposal accepted")


@router.post(
    "/proposals/{proposal_id}/reject",
    response_model=ApiResponse[ProposalRead],
)
def reject_proposal(
    proposal_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_homeowner),
):
    proposal = service.reject_proposal(session, current_user, proposal_id)
    return ok(ProposalRead.model_validate(proposal), "Proposal rejected")


# -------- Designer --------


@router.get("/designer", response_model=ApiResponse[list[ProjectRequestRead]])
def list_designer_requests(
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    session: Session = Depends(get_session),
    current_user: User = Depends(require_designer),
):
    """Requests received by the caller, optionally filtered by status."""
    requests = service.list_designer_requests(session, current_user, status_filter)
    return ok([ProjectRequestRead.model_validate(r) for r in requests], "Requests retrieved successfully")


@router.get("/{request_id}", response_model=ApiResponse[RequestDetailRead])
def read_request(
    request_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_designer),
):
    details = service.get_request_details(session, current_user, request_id)
    data = RequestDetailRead(
        request=ProjectRequestRead.model_validate(details["request"]),
        project=ProjectRead.model_validate(details["project"]),
        homeowner=_maybe(HomeownerProfileRead, details["homeowner"]),
        proposal=_maybe(ProposalRead, details["proposal"]),
    )
    return ok(data, "Request retrieved successfully")


@router.post("/{request_id}/decline", response_model=ApiResponse[ProjectRequestRead])
def decline_request(
    request_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_designer),
):
    request = service.decline_request(session, current_user, request_id)
    return ok(ProjectRequestRead.model_validate(request), "Request declined")


@router.post(
    "/{request_id}/proposal",
    response_model=ApiResponse[ProposalRead],
    status_code=status.HTTP_201_CREATED,
)
def submit_proposal(
    request_id: uuid.UUID,
    payload: ProposalCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_designer),
):
    proposal = service.submit_proposal(session, current_user, request_id, payload)
    return ok(ProposalRead.model_validate(proposal), "Proposal submitted successfully")
