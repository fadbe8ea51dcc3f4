# app/database.py
from datetime import datetime, timezone

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select

from app.core.config import Settings

# ---------------------------------------------------------
# Postgres connection
#
# - pool_pre_ping=True: validate connections before using them
# - sqlite (tests / local scratch) needs check_same_thread=False because
#   FastAPI runs sync endpoints on a threadpool; in-memory sqlite also
#   needs a StaticPool so every session sees the same database.
# ---------------------------------------------------------


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(value: datetime | None) -> datetime | None:
    """
    Attach UTC to naive datetimes.

    Postgres returns timezone-aware values for timestamptz columns,
    sqlite returns naive ones. Compare only after normalizing.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def build_engine(settings: Settings) -> Engine:
    db_url = settings.DATABASE_URL

    if db_url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, echo=False, **kwargs)

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
    )


def create_db_and_tables(engine: Engine) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist,
    then seed the default roles.

    Only used when DB_AUTO_CREATE is on; deployed databases are migrated
    with alembic (see migrate.py).
    """
    # Import models so SQLModel metadata is populated before create_all()
    from app.models import profile as _profile_models  # noqa: F401
    from app.models import project as _project_models  # noqa: F401
    from app.models import notification as _notification_models  # noqa: F401
    from app.models.user import Role

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        existing = {r.name for r in session.exec(select(Role)).all()}
        for name, description in DEFAULT_ROLES:
            if name not in existing:
                session.add(Role(name=name, description=description))
        session.commit()


DEFAULT_ROLES: list[tuple[str, str]] = [
    ("admin", "Administrative access"),
    ("user", "Standard user access"),
]
