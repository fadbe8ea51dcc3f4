# app/services/request_service.py
import logging
import uuid

from sqlmodel import Session

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.database import utcnow
from app.models.project import Project, ProjectRequest, Proposal
from app.models.user import User
from app.repositories.profile_repo import ProfileRepository
from app.repositories.project_repo import ProjectRepository
from app.repositories.request_repo import RequestRepository
from app.schemas.project import ProjectRequestCreate, ProposalCreate
from app.services.notification_service import NotificationService
from app.services.project_service import ProjectService

logger = logging.getLogger(__name__)

# Project statuses in which a homeowner may still invite designers
OPEN_PROJECT_STATUSES = {"draft", "seeking_designer"}


class RequestService:
    """
    Business logic for project requests and proposals.

    Flow:
      1. Homeowner sends a request to a verified designer (pending).
         A draft project moves to seeking_designer.
      2. Designer declines (rejected) or submits one proposal
         (request -> proposal_submitted, proposal -> submitted).
      3. Homeowner accepts a proposal: it and its request become accepted,
         every other submitted proposal of the project is rejected, the
         designer is assigned and the project moves to in_progress.
         Or the homeowner rejects it.

    Each step writes an activity log entry and notifies the other party.
    """

    def __init__(
        self,
        repo: RequestRepository,
        project_repo: ProjectRepository,
        profile_repo: ProfileRepository,
        projects: ProjectService,
        notifications: NotificationService,
    ):
        self.repo = repo
        self.project_repo = project_repo
        self.profile_repo = profile_repo
        self.projects = projects
        self.notifications = notifications

    # -------- Notifications --------

    def _notify_designer(
        self,
        session: Session,
        designer_id: uuid.UUID,
        type: str,
        title: str,
        message: str,
        data: dict,
    ) -> None:
        designer = self.profile_repo.get_designer(session, designer_id)
        if designer:
            self.notifications.notify(session, designer.user_id, type, title, message, data)

    def _notify_homeowner(
        self,
        session: Session,
        project: Project,
        type: str,
        title: str,
        message: str,
        data: dict,
    ) -> None:
        homeowner = self.profile_repo.get_homeowner(session, project.homeowner_id)
        if homeowner:
            self.notifications.notify(session, homeowner.user_id, type, title, message, data)

    # -------- Homeowner --------

    def send_request(
        self,
        session: Session,
        user: User,
        payload: ProjectRequestCreate,
    ) -> ProjectRequest:
        """
        Raises:
            NotFoundError(404): project / designer not found, or designer unverified.
            ForbiddenError(403): project belongs to another homeowner.
            ValidationError(400): project no longer accepts requests.
            ConflictError(409): this designer was already invited.
        """
        project = self.projects.owned_project(session, user, payload.project_id)
        if project.status not in OPEN_PROJECT_STATUSES:
            raise ValidationError("Requests can only be sent for draft or open projects")

        designer = self.profile_repo.get_designer(session, payload.designer_id)
        if designer is None or not designer.is_verified:
            raise NotFoundError("Designer not found or not verified")

        if self.repo.find(session, project.id, designer.id):
            raise ConflictError("A request has already been sent to this designer")

        request = ProjectRequest(
            project_id=project.id,
            designer_id=designer.id,
            message=payload.message,
        )
        self.repo.add(session, request)

        if project.status == "draft":
            self.projects.transition(session, project, "seeking_designer", user.id)

        self.project_repo.add_activity(
            session,
            project.id,
            user.id,
            "request_sent",
            {"designer_id": str(designer.id), "request_id": str(request.id)},
        )
        self.notifications.notify(
            session,
            designer.user_id,
            "request_received",
            "New project request",
            f'You have a new request for "{project.title}"',
            {"project_id": str(project.id), "request_id": str(request.id)},
        )
        self.repo.commit(session, request)
        logger.info("Project %s: request sent to designer %s", project.id, designer.id)
        return request

    def list_project_requests(
        self,
        session: Session,
        user: User,
        project_id: uuid.UUID,
    ) -> list[ProjectRequest]:
        project = self.projects.owned_project(session, user, project_id)
        return self.repo.list_for_project(session, project.id)

    def list_project_proposals(self, session: Session, user: User, project_id: uuid.UUID) -> list[dict]:
        """
        One entry per request of the project: {request, proposal, designer}.
        `proposal` is None until the designer answers.
        """
        project = self.projects.owned_project(session, user, project_id)
        rows = []
        for request in self.repo.list_for_project(session, project.id):
            rows.append(
                {
                    "request": request,
                    "proposal": self.repo.get_proposal_for_request(session, request.id),
                    "designer": self.profile_repo.get_designer(session, request.designer_id),
                }
            )
        return rows

    def _owned_proposal(
        self,
        session: Session,
        user: User,
        proposal_id: uuid.UUID,
    ) -> tuple[Proposal, ProjectRequest, Project]:
        proposal = self.repo.get_proposal(session, proposal_id)
        if proposal is None:
            raise NotFoundError("Proposal not found")
        request = self.repo.get(session, proposal.project_request_id)
        if request is None:
            raise NotFoundError("Request not found")
        project = self.projects.owned_project(session, user, request.project_id)
        if proposal.status != "submitted":
            raise ValidationError(f"Proposal has already been {proposal.status}")
        return proposal, request, project

    def accept_proposal(
        self,
        session: Session,
        user: User,
        proposal_id: uuid.UUID,
    ) -> tuple[Proposal, Project]:
        proposal, request, project = self._owned_proposal(session, user, proposal_id)
        now = utcnow()

        proposal.status = "accepted"
        proposal.updated_at = now
        request.status = "accepted"
        request.updated_at = now
        self.repo.add(session, proposal)
        self.repo.add(session, request)

        # Close every competing proposal on this project
        for other in self.repo.list_for_project(session, project.id):
            if other.id == request.id or other.status != "proposal_submitted":
                continue
            other.status = "rejected"
            other.updated_at = now
            self.repo.add(session, other)
            other_proposal = self.repo.get_proposal_for_request(session, other.id)
            if other_proposal and other_proposal.status == "submitted":
                other_proposal.status = "rejected"
                other_proposal.updated_at = now
                self.repo.add(session, other_proposal)
                self._notify_designer(
                    session,
                    other_proposal.designer_id,
                    "proposal_rejected",
                    "Proposal not selected",
                    f'The homeowner chose another designer for "{project.title}"',
                    {"project_id": str(project.id), "proposal_id": str(other_proposal.id)},
                )

        project.designer_id = proposal.designer_id
        self.projects.transition(session, project, "in_progress", user.id)
        self.project_repo.add_activity(
            session,
            project.id,
            user.id,
            "proposal_accepted",
            {"proposal_id": str(proposal.id), "designer_id": str(proposal.designer_id)},
        )
        self._notify_designer(
            session,
            proposal.designer_id,
            "proposal_accepted",
            "Proposal accepted",
            f'Your proposal for "{project.title}" was accepted',
            {"project_id": str(project.id), "proposal_id": str(proposal.id)},
        )
        self.repo.commit(session, proposal, project)
        return proposal, project

    def reject_proposal(self, session: Session, user: User, proposal_id: uuid.UUID) -> Proposal:
        proposal, request, project = self._owned_proposal(session, user, proposal_id)
        now = utcnow()

        proposal.status = "rejected"
        proposal.updated_at = now
        request.status = "rejected"
        request.updated_at = now
        self.repo.add(session, proposal)
        self.repo.add(session, request)
        self.project_repo.add_activity(
            session,
            project.id,
            user.id,
            "proposal_rejected",
            {"proposal_id": str(proposal.id)},
        )
        self._notify_designer(
            session,
            proposal.designer_id,
            "proposal_rejected",
            "Proposal rejected",
            f'Your proposal for "{project.title}" was rejected',
            {"project_id": str(project.id), "proposal_id": str(proposal.id)},
        )
        self.repo.commit(session, proposal)
        return proposal

    # -------- Designer --------

    def _received_request(self, session: Session, user: User, request_id: uuid.UUID) -> ProjectRequest:
        designer = self.projects.designer_profile(session, user)
        request = self.repo.get(session, request_id)
        if request is None or request.designer_id != designer.id:
            raise NotFoundError("Request not found")
        return request

    def list_designer_requests(self, session: Session, user: User, status: str | None) -> list[ProjectRequest]:
        designer = self.projects.designer_profile(session, user)
        return self.repo.list_for_designer(session, designer.id, status)

    def get_request_details(self, session: Session, user: User, request_id: uuid.UUID) -> dict:
        """{request, project, homeowner, proposal} for a request sent to the caller."""
        request = self._received_request(session, user, request_id)
        project = self.project_repo.get(session, request.project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return {
            "request": request,
            "project": project,
            "homeowner": self.profile_repo.get_homeowner(session, project.homeowner_id),
            "proposal": self.repo.get_proposal_for_request(session, request.id),
        }

    def decline_request(self, session: Session, user: User, request_id: uuid.UUID) -> ProjectRequest:
        request = self._received_request(session, user, request_id)
        if request.status != "pending":
            raise ValidationError("Only pending requests can be declined")

        request.status = "rejected"
        request.updated_at = utcnow()
        self.repo.add(session, request)
        self.project_repo.add_activity(
            session,
            request.project_id,
            user.id,
            "request_declined",
            {"request_id": str(request.id)},
        )
        project = self.project_repo.get(session, request.project_id)
        if project:
            self._notify_homeowner(
                session,
                project,
                "request_declined",
                "Request declined",
                f'A designer declined your request for "{project.title}"',
                {"project_id": str(project.id), "request_id": str(request.id)},
            )
        self.repo.commit(session, request)
        return request

    def submit_proposal(
        self,
        session: Session,
        user: User,
        request_id: uuid.UUID,
        payload: ProposalCreate,
    ) -> Proposal:
        """
        Raises:
            ValidationError(400): request is not pending.
            ConflictError(409): a proposal already exists for this request.
        """
        request = self._received_request(session, user, request_id)
        if request.status != "pending":
            raise ValidationError("Proposals can only be submitted for pending requests")
        if self.repo.get_proposal_for_request(session, request.id):
            raise ConflictError("A proposal has already been submitted for this request")

        proposal = Proposal(
            project_request_id=request.id,
            designer_id=request.designer_id,
            **payload.model_dump(),
        )
        request.status = "proposal_submitted"
        request.updated_at = utcnow()
        self.repo.add(session, proposal)
        self.repo.add(session, request)
        self.project_repo.add_activity(
            session,
            request.project_id,
            user.id,
            "proposal_submitted",
            {"request_id": str(request.id), "proposal_id": str(proposal.id)},
        )
        project = self.project_repo.get(session, request.project_id)
        if project:
            self._notify_homeowner(
                session,
                project,
                "proposal_received",
                "New proposal",
                f'A designer sent a proposal for "{project.title}"',
                {
                    "project_id": str(project.id),
                    "request_id": str(request.id),
                    "proposal_id": str(proposal.id),
                },
            )
        self.repo.commit(session, proposal)
        return proposal
