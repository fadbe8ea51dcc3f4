# app/routers/notifications.py
import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_auth
from app.core.deps import get_session
from app.models.user import User
from app.repositories.notification_repo import NotificationRepository
from app.schemas.common import ApiResponse, ok
from app.schemas.notification import MarkAllReadRead, NotificationFeedRead, NotificationRead
from app.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])

service = NotificationService(NotificationRepository())


@router.get("", response_model=ApiResponse[NotificationFeedRead])
def list_notifications(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """The caller's newest notifications plus their unread count."""
    feed = service.list_for_user(session, current_user)
    data = NotificationFeedRead(
        notifications=[NotificationRead.model_validate(n) for n in feed["notifications"]],
        unread_count=feed["unread_count"],
    )
    return ok(data, "Notifications retrieved successfully")


@router.patch("/{notification_id}/read", response_model=ApiResponse[NotificationRead])
def mark_notification_read(
    notification_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    notification = service.mark_read(session, current_user, notification_id)
    return ok(NotificationRead.model_validate(notification), "Notification marked as read")


@router.post("/read-all", response_model=ApiResponse[MarkAllReadRead])
def mark_all_read(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    updated = service.mark_all_read(session, current_user)
    return ok(MarkAllReadRead(updated=updated), "All notifications marked as read")
