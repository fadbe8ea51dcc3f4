# app/repositories/request_repo.py
import uuid

from sqlmodel import Session, select

from app.models.project import ProjectRequest, Proposal


class RequestRepository:
    """
    Data access layer for ProjectRequest and Proposal.

    Writes are staged with `session.add`; the service commits once per
    operation so multi-row state changes land together.
    """

    # ----- Requests -----

    def get(self, session: Session, request_id: uuid.UUID) -> ProjectRequest | None:
        return session.get(ProjectRequest, request_id)

    def find(
        self,
        session: Session,
        project_id: uuid.UUID,
        designer_id: uuid.UUID,
    ) -> ProjectRequest | None:
        stmt = select(ProjectRequest).where(
            ProjectRequest.project_id == project_id,
            ProjectRequest.designer_id == designer_id,
        )
        return session.exec(stmt).first()

    def list_for_project(self, session: Session, project_id: uuid.UUID) -> list[ProjectRequest]:
        stmt = (
            select(ProjectRequest)
            .where(ProjectRequest.project_id == project_id)
            .order_by(ProjectRequest.created_at.desc())
        )
        return list(session.exec(stmt).all())

    def list_for_designer(
        self,
        session: Session,
        designer_id: uuid.UUID,
        status: str | None = None,
    ) -> list[ProjectRequest]:
        stmt = select(ProjectRequest).where(ProjectRequest.designer_id == designer_id)
        if status:
            stmt = stmt.where(ProjectRequest.status == status)
        return list(session.exec(stmt.order_by(ProjectRequest.created_at.desc())).all())

    # ----- Proposals -----

    def get_proposal(self, session: Session, proposal_id: uuid.UUID) -> Proposal | None:
        return session.get(Proposal, proposal_id)

    def get_proposal_for_request(self, session: Session, request_id: uuid.UUID) -> Proposal | None:
        stmt = select(Proposal).where(Proposal.project_request_id == request_id)
        return session.exec(stmt).first()

    # ----- Shared -----

    def add(self, session: Session, obj) -> None:
        session.add(obj)

    def commit(self, session: Session, *objs) -> None:
        """Commit the unit of work and refresh the given rows."""
        session.commit()
        for obj in objs:
            session.refresh(obj)
