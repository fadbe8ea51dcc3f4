# app/repositories/user_repo.py
import uuid

from sqlmodel import Session, select

from app.models.user import Role, User, UserPermission


class UserRepository:
    """
    Data access layer for User, its Role lookup and its UserPermission row.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Users -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email (case-insensitive), or None."""
        stmt = select(User).where(User.email == email.strip().lower())
        return session.exec(stmt).first()

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    # ----- Roles -----

    def get_role(self, session: Session, role_id: uuid.UUID) -> Role | None:
        return session.get(Role, role_id)

    def get_role_by_name(self, session: Session, name: str) -> Role | None:
        stmt = select(Role).where(Role.name == name)
        return session.exec(stmt).first()

    # ----- Permissions -----

    def get_permissions(self, session: Session, user_id: uuid.UUID) -> UserPermission | None:
        stmt = select(UserPermission).where(UserPermission.user_id == user_id)
        return session.exec(stmt).first()

    def save_permissions(self, session: Session, permissions: UserPermission) -> UserPermission:
        session.add(permissions)
        session.commit()
        session.refresh(permissions)
        return permissions
