# app/models/project.py
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, func
from sqlmodel import SQLModel, Field

from app.database import utcnow
from app.models.user import created_at_field, updated_at_field

# Allowed project status transitions.
# completed / cancelled are terminal.
PROJECT_TRANSITIONS: dict[str, set[str]] = {
    "draft": {"seeking_designer", "cancelled"},
    "seeking_designer": {"in_progress", "cancelled"},
    "in_progress": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


def can_transition(current: str, new: str) -> bool:
    return new in PROJECT_TRANSITIONS.get(current, set())


class Property(SQLModel, table=True):
    """A home owned by a homeowner; projects may reference one."""

    __tablename__ = "properties"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    homeowner_id: uuid.UUID = Field(
        foreign_key="homeowner_profiles.id", ondelete="CASCADE", index=True
    )

    type: str = Field(max_length=20, description="apartment | house | villa")
    address: str | None = Field(default=None)
    city: str | None = Field(default=None, max_length=100)
    locality: str | None = Field(default=None, max_length=255)
    size_sqft: int | None = Field(default=None)
    rooms: list[str] = Field(default_factory=list, sa_type=JSON)

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class Project(SQLModel, table=True):
    """
    Renovation/design project created by a homeowner.

    Status machine:
      draft -> seeking_designer (first request sent)
      seeking_designer -> in_progress (proposal accepted)
      in_progress -> completed
      any non-terminal -> cancelled
    """

    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    homeowner_id: uuid.UUID = Field(
        foreign_key="homeowner_profiles.id", ondelete="CASCADE", index=True
    )
    property_id: uuid.UUID | None = Field(
        default=None, foreign_key="properties.id", ondelete="SET NULL"
    )
    designer_id: uuid.UUID | None = Field(
        default=None, foreign_key="designer_profiles.id", ondelete="SET NULL", index=True
    )

    title: str = Field(max_length=255)
    scope: str = Field(max_length=20, description="full_home | partial")
    scope_details: dict[str, Any] | None = Field(default=None, sa_type=JSON)

    status: str = Field(default="draft", max_length=30, index=True)

    budget_min: int | None = Field(default=None)
    budget_max: int | None = Field(default=None)
    timeline_weeks: int | None = Field(default=None)
    start_timeline: str | None = Field(default=None, max_length=50)

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class ProjectRequest(SQLModel, table=True):
    """
    Homeowner -> designer request for a proposal on a project.

    status: pending | proposal_submitted | accepted | rejected
    """

    __tablename__ = "project_requests"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    designer_id: uuid.UUID = Field(
        foreign_key="designer_profiles.id", ondelete="CASCADE", index=True
    )

    status: str = Field(default="pending", max_length=30, index=True)
    message: str | None = Field(default=None)

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class Proposal(SQLModel, table=True):
    """
    Designer's answer to a ProjectRequest (at most one per request).

    status: submitted | accepted | rejected
    """

    __tablename__ = "proposals"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_request_id: uuid.UUID = Field(
        foreign_key="project_requests.id", ondelete="CASCADE", unique=True
    )
    designer_id: uuid.UUID = Field(
        foreign_key="designer_profiles.id", ondelete="CASCADE", index=True
    )

    scope_description: str
    approach: str | None = Field(default=None)
    timeline_weeks: int
    cost_estimate: int
    cost_breakdown: list[dict[str, Any]] | None = Field(default=None, sa_type=JSON)
    notes: str | None = Field(default=None)

    status: str = Field(default="submitted", max_length=20, index=True)

    created_at: datetime = created_at_field()
    updated_at: datetime = updated_at_field()


class ActivityLog(SQLModel, table=True):
    """Append-only audit trail of project events."""

    __tablename__ = "activity_logs"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    project_id: uuid.UUID = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    user_id: uuid.UUID | None = Field(default=None, foreign_key="users.id", ondelete="SET NULL")

    action: str = Field(max_length=100)
    details: dict[str, Any] | None = Field(default=None, sa_type=JSON)

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"server_default": func.now()},
    )
