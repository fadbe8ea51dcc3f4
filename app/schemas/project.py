# app/schemas/project.py
import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import ConfigDict, ValidationInfo, field_validator, model_validator
from sqlmodel import SQLModel, Field

from app.schemas.profile import DesignerProfileRead, HomeownerProfileRead
from app.schemas.user import reject_null, strip_required

ProjectScope = Literal["full_home", "partial"]
ProjectStatus = Literal["draft", "seeking_designer", "in_progress", "completed", "cancelled"]
RequestStatus = Literal["pending", "proposal_submitted", "accepted", "rejected"]


class ScopeDetails(SQLModel):
    rooms: list[str] | None = None
    areas: list[str] | None = None
    notes: str | None = Field(default=None, max_length=2000)


class _BudgetCheck(SQLModel):
    budget_min: int | None = Field(default=None, ge=0)
    budget_max: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_budget(self):
        if (
            self.budget_min is not None
            and self.budget_max is not None
            and self.budget_min > self.budget_max
        ):
            raise ValueError("budget_min cannot exceed budget_max")
        return self


# -------- Projects --------


class ProjectCreate(_BudgetCheck):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=255)
    scope: ProjectScope
    property_id: uuid.UUID | None = None
    scope_details: ScopeDetails | None = None
    timeline_weeks: int | None = Field(default=None, gt=0, le=520)
    start_timeline: str | None = Field(default=None, max_length=50)

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: str) -> str:
        return strip_required(v, "title")


class ProjectUpdate(_BudgetCheck):
    """Only draft projects can be edited."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=255)
    scope: ProjectScope | None = None
    property_id: uuid.UUID | None = None
    scope_details: ScopeDetails | None = None
    timeline_weeks: int | None = Field(default=None, gt=0, le=520)
    start_timeline: str | None = Field(default=None, max_length=50)

    @field_validator("title", "scope")
    @classmethod
    def not_null(cls, v, info: ValidationInfo):
        return reject_null(v, info.field_name)

    @field_validator("title")
    @classmethod
    def normalize_title(cls, v: str) -> str:
        return strip_required(v, "title")


class ProjectRead(SQLModel):
    id: uuid.UUID
    homeowner_id: uuid.UUID
    property_id: uuid.UUID | None = None
    designer_id: uuid.UUID | None = None
    title: str
    scope: str
    scope_details: dict[str, Any] | None = None
    status: str
    budget_min: int | None = None
    budget_max: int | None = None
    timeline_weeks: int | None = None
    start_timeline: str | None = None
    created_at: datetime
    updated_at: datetime


class ActivityRead(SQLModel):
    id: uuid.UUID
    project_id: uuid.UUID
    user_id: uuid.UUID | None = None
    action: str
    details: dict[str, Any] | None = None
    created_at: datetime


# -------- Requests & proposals --------


class ProjectRequestCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    project_id: uuid.UUID
    designer_id: uuid.UUID
    message: str | None = Field(default=None, max_length=2000)


class ProjectRequestRead(SQLModel):
    id: uuid.UUID
    project_id: uuid.UUID
    designer_id: uuid.UUID
    status: str
    message: str | None = None
    created_at: datetime
    updated_at: datetime


class CostItem(SQLModel):
    item: str = Field(max_length=255)
    amount: int = Field(ge=0)


class ProposalCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    scope_description: str = Field(max_length=5000)
    approach: str | None = Field(default=None, max_length=5000)
    timeline_weeks: int = Field(gt=0, le=520)
    cost_estimate: int = Field(ge=0)
    cost_breakdown: list[CostItem] | None = None
    notes: str | None = Field(default=None, max_length=2000)

    @field_validator("scope_description")
    @classmethod
    def normalize_scope(cls, v: str) -> str:
        return strip_required(v, "scope_description")


class ProposalRead(SQLModel):
    id: uuid.UUID
    project_request_id: uuid.UUID
    designer_id: uuid.UUID
    scope_description: str
    approach: str | None = None
    timeline_weeks: int
    cost_estimate: int
    cost_breakdown: list[dict[str, Any]] | None = None
    notes: str | None = None
    status: str
    created_at: datetime


class ProjectProposalRead(SQLModel):
    """One row of GET /requests/project/{id}/proposals."""

    request: ProjectRequestRead
    proposal: ProposalRead | None = None
    designer: DesignerProfileRead | None = None


class RequestDetailRead(SQLModel):
    """Designer view of a received request."""

    request: ProjectRequestRead
    project: ProjectRead
    homeowner: HomeownerProfileRead | None = None
    proposal: ProposalRead | None = None


class AcceptProposalRead(SQLModel):
    proposal: ProposalRead
    project: ProjectRead
