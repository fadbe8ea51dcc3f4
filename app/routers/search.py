# app/routers/search.py
from fastapi import APIRouter, Depends, Query

from app.core.deps import get_search_service
from app.schemas.common import ApiResponse, Page, ok
from app.schemas.search import ContractorHit, DesignerHit
from app.services.search_service import SearchService

router = APIRouter(prefix="/search", tags=["Search"])


def _split(value: str | None) -> list[str] | None:
    """Comma separated query value -> list (None when empty)."""
    if not value:
        return None
    items = [v.strip() for v in value.split(",") if v.strip()]
    return items or None


@router.get("/designers", response_model=ApiResponse[Page[DesignerHit]])
def search_designers(
    q: str | None = Query(default=None, max_length=200),
    city: str | None = Query(default=None, max_length=100),
    styles: str | None = Query(default=None, description="Comma separated styles"),
    budget_min: int | None = Query(default=None, ge=0, alias="budgetMin"),
    budget_max: int | None = Query(default=None, ge=0, alias="budgetMax"),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100, alias="perPage"),
    search: SearchService = Depends(get_search_service),
):
    """
    Full-text search over verified designers.

    A designer matches a budget when its price range overlaps it.
    """
    result = search.search_designers(
        query=q,
        city=city,
        styles=_split(styles),
        budget_min=budget_min,
        budget_max=budget_max,
        page=page,
        per_page=per_page,
    )
    return ok(result, "Search completed successfully")


@router.get("/contractors", response_model=ApiResponse[Page[ContractorHit]])
def search_contractors(
    q: str | None = Query(default=None, max_length=200),
    trades: str | None = Query(default=None, description="Comma separated trades"),
    city: str | None = Query(default=None, max_length=100),
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100, alias="perPage"),
    search: SearchService = Depends(get_search_service),
):
    result = search.search_contractors(
        query=q,
        trades=_split(trades),
        city=city,
        page=page,
        per_page=per_page,
    )
    return ok(result, "Search completed successfully")
