# app/schemas/common.py
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform response envelope used by every endpoint.

    Success:  {success: true,  data: <T>,  message: "...", error: null}
    Failure:  {success: false, data: null, message: "...", error: "..."}
    (failures are produced by the handlers in app/core/errors.py)
    """

    success: bool = True
    data: T | None = None
    message: str = ""
    error: str | None = None


def ok(data=None, message: str = "") -> dict:
    """Shorthand used by routers to build a success envelope."""
    return {"success": True, "data": data, "message": message, "error": None}


class Page(BaseModel, Generic[T]):
    """Paginated list payload."""

    items: list[T]
    total: int
    page: int
    total_pages: int
