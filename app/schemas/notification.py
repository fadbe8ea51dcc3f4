# app/schemas/notification.py
import uuid
from datetime import datetime
from typing import Any

from sqlmodel import SQLModel


class NotificationRead(SQLModel):
    id: uuid.UUID
    type: str
    title: str
    message: str
    is_read: bool
    data: dict[str, Any] | None = None
    created_at: datetime


class NotificationFeedRead(SQLModel):
    """GET /notifications: newest first, at most 50 entries."""

    notifications: list[NotificationRead]
    unread_count: int


class MarkAllReadRead(SQLModel):
    updated: int
