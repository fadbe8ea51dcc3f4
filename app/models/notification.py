# app/models/notification.py
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Index
from sqlmodel import SQLModel, Field

from app.models.user import created_at_field


class Notification(SQLModel, table=True):
    """
    In-app notification for one user.

    Written by the request / proposal flow and by provider verification,
    read through GET /notifications. `data` carries the ids a client needs
    to link to the related project, request or proposal.
    """

    __tablename__ = "notifications"
    __table_args__ = (Index("ix_notifications_user_id_is_read", "user_id", "is_read"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)

    type: str = Field(max_length=50)
    title: str = Field(max_length=255)
    message: str
    is_read: bool = Field(default=False)
    data: dict[str, Any] | None = Field(default=None, sa_type=JSON)

    created_at: datetime = created_at_field()
