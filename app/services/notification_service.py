# app/services/notification_service.py
import uuid
from typing import Any

from sqlmodel import Session

from app.core.errors import NotFoundError
from app.models.notification import Notification
from app.models.user import User
from app.repositories.notification_repo import NotificationRepository


class NotificationService:
    """
    In-app notifications.

    Other services call `notify` inside their own transaction; the row is
    committed together with the state change it describes. Users read
    their feed and mark entries read through the /notifications router.
    """

    def __init__(self, repo: NotificationRepository):
        self.repo = repo

    def notify(
        self,
        session: Session,
        user_id: uuid.UUID,
        type: str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> Notification:
        """Stage a notification; the caller commits."""
        return self.repo.add(session, user_id, type, title, message, data)

    # ----- Feed -----

    def list_for_user(self, session: Session, user: User) -> dict:
        """{notifications: newest 50, unread_count}"""
        return {
            "notifications": self.repo.list_for_user(session, user.id),
            "unread_count": self.repo.count_unread(session, user.id),
        }

    def mark_read(self, session: Session, user: User, notification_id: uuid.UUID) -> Notification:
        """
        Raises:
            NotFoundError(404): unknown id, or a notification of another user.
        """
        notification = self.repo.get_for_user(session, notification_id, user.id)
        if notification is None:
            raise NotFoundError("Notification not found")
        if not notification.is_read:
            notification.is_read = True
            notification = self.repo.save(session, notification)
        return notification

    def mark_all_read(self, session: Session, user: User) -> int:
        return self.repo.mark_all_read(session, user.id)
