# app/repositories/notification_repo.py
import uuid
from typing import Any

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.notification import Notification


class NotificationRepository:
    """
    Data access layer for Notification.

    `add` only stages the row so a notification lands in the same
    transaction as the state change that produced it.
    """

    # ----- Writes -----

    def add(
        self,
        session: Session,
        user_id: uuid.UUID,
        type: str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> Notification:
        notification = Notification(user_id=user_id, type=type, title=title, message=message, data=data)
        session.add(notification)
        return notification

    def save(self, session: Session, notification: Notification) -> Notification:
        session.add(notification)
        session.commit()
        session.refresh(notification)
        return notification

    def mark_all_read(self, session: Session, user_id: uuid.UUID) -> int:
        """Flip every unread row of the user; returns the number updated."""
        stmt = select(Notification).where(
            Notification.user_id == user_id,
            Notification.is_read == False,  # noqa: E712
        )
        rows = session.exec(stmt).all()
        for notification in rows:
            notification.is_read = True
            session.add(notification)
        session.commit()
        return len(rows)

    # ----- Reads -----

    def get_for_user(
        self,
        session: Session,
        notification_id: uuid.UUID,
        user_id: uuid.UUID,
    ) -> Notification | None:
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )
        return session.exec(stmt).first()

    def list_for_user(self, session: Session, user_id: uuid.UUID, limit: int = 50) -> list[Notification]:
        """Newest first, capped at `limit` rows."""
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def count_unread(self, session: Session, user_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.is_read == False)  # noqa: E712
        )
        return session.exec(stmt).one()
