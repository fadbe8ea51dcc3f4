# app/schemas/admin.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class ProviderRejectRequest(SQLModel):
    """Optional body of POST /admin/{designers|contractors}/{id}/reject."""

    model_config = ConfigDict(extra="forbid")

    reason: str | None = Field(default=None, max_length=1000)
