# app/repositories/device_repo.py
import uuid

from sqlmodel import Session, select

from app.models.user import UserDevice


class DeviceRepository:
    """
    Data access layer for UserDevice (one row per authenticated session).
    """

    def get_by_id(self, session: Session, device_id: uuid.UUID) -> UserDevice | None:
        return session.get(UserDevice, device_id)

    def get_active_by_token(self, session: Session, token: str) -> UserDevice | None:
        """Return the active session holding this access token."""
        stmt = select(UserDevice).where(
            UserDevice.token == token,
            UserDevice.is_active == True,  # noqa: E712
        )
        return session.exec(stmt).first()

    def get_active_by_refresh_token(self, session: Session, refresh_token: str) -> UserDevice | None:
        stmt = select(UserDevice).where(
            UserDevice.refresh_token == refresh_token,
            UserDevice.is_active == True,  # noqa: E712
        )
        return session.exec(stmt).first()

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        active_only: bool = True,
    ) -> list[UserDevice]:
        """Sessions of a user, most recently used first."""
        stmt = select(UserDevice).where(UserDevice.user_id == user_id)
        if active_only:
            stmt = stmt.where(UserDevice.is_active == True)  # noqa: E712
        stmt = stmt.order_by(UserDevice.last_used_at.desc())
        return list(session.exec(stmt).all())

    def save(self, session: Session, device: UserDevice) -> UserDevice:
        session.add(device)
        session.commit()
        session.refresh(device)
        return device

    def deactivate_all(self, session: Session, user_id: uuid.UUID) -> int:
        """
        Mark every active session of a user inactive.

        Returns:
            Number of sessions revoked.
        """
        devices = self.list_for_user(session, user_id, active_only=True)
        for device in devices:
            device.is_active = False
            session.add(device)
        session.commit()
        return len(devices)
