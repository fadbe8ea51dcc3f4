# app/core/deps.py
from collections.abc import Iterator

from fastapi import Request
from sqlmodel import Session

from app.core.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings instance the running app was built with."""
    return request.app.state.settings


def get_session(request: Request) -> Iterator[Session]:
    """
    FastAPI dependency that yields a SQLModel Session bound to the app engine.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session


def get_email_service(request: Request):
    return request.app.state.email_service


def get_search_service(request: Request):
    return request.app.state.search_service


def get_storage(request: Request):
    return request.app.state.storage
