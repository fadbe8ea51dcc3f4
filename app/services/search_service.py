# app/services/search_service.py
import logging
import math
from typing import Any

from typesense.exceptions import ObjectNotFound, TypesenseClientError

from app.core.errors import ExternalServiceError
from app.core.typesense_client import CONTRACTORS_COLLECTION, DESIGNERS_COLLECTION
from app.database import as_aware
from app.models.profile import ContractorProfile, DesignerProfile

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20

DESIGNER_QUERY_BY = "name,firmName,bio,services,styles"
CONTRACTOR_QUERY_BY = "name,bio,trades"

# Typesense document key -> API field name
DESIGNER_FIELDS = {
    "id": "id",
    "userId": "user_id",
    "name": "name",
    "firmName": "firm_name",
    "bio": "bio",
    "profilePictureUrl": "profile_picture_url",
    "portfolioImages": "portfolio_images",
    "services": "services",
    "serviceCities": "service_cities",
    "styles": "styles",
    "priceRangeMin": "price_range_min",
    "priceRangeMax": "price_range_max",
    "experienceYears": "experience_years",
    "projectsCompleted": "projects_completed",
    "isVerified": "is_verified",
}

CONTRACTOR_FIELDS = {
    "id": "id",
    "userId": "user_id",
    "name": "name",
    "profilePictureUrl": "profile_picture_url",
    "trades": "trades",
    "experienceYears": "experience_years",
    "serviceAreas": "service_areas",
    "workPhotos": "work_photos",
    "bio": "bio",
    "isVerified": "is_verified",
}


def _quote(value: str) -> str:
    """Backtick-quote a filter value so commas/spaces survive."""
    return "`" + value.replace("`", "") + "`"


def _in_list(field: str, values: list[str]) -> str:
    return f"{field}:=[{','.join(_quote(v) for v in values)}]"


def build_designer_filter(
    city: str | None = None,
    styles: list[str] | None = None,
    budget_min: int | None = None,
    budget_max: int | None = None,
    verified_only: bool = True,
) -> str:
    """
    Typesense filter_by for designers.

    A designer matches a budget if its price range overlaps it.
    """
    conditions: list[str] = []
    if verified_only:
        conditions.append("isVerified:=true")
    if city:
        conditions.append(_in_list("serviceCities", [city]))
    if styles:
        conditions.append(_in_list("styles", styles))
    if budget_min is not None:
        conditions.append(f"priceRangeMax:>={budget_min}")
    if budget_max is not None:
        conditions.append(f"priceRangeMin:<={budget_max}")
    return " && ".join(conditions)


def build_contractor_filter(
    trades: list[str] | None = None,
    city: str | None = None,
    verified_only: bool = True,
) -> str:
    conditions: list[str] = []
    if verified_only:
        conditions.append("isVerified:=true")
    if trades:
        conditions.append(_in_list("trades", trades))
    if city:
        conditions.append(_in_list("serviceAreas", [city]))
    return " && ".join(conditions)


def _map_hit(document: dict[str, Any], fields: dict[str, str]) -> dict[str, Any]:
    return {api: document[doc] for doc, api in fields.items() if document.get(doc) is not None}


class SearchService:
    """
    Search facade over Typesense.

    Responsibilities:
      - public designer / contractor search (verified providers only)
      - keeping the index in sync with profile writes

    `client` is None when search is disabled (TYPESENSE_ENABLED=false):
    searches then fail with 502 and indexing is a no-op.
    """

    def __init__(self, client):
        self.client = client

    # ----- Queries -----

    def _search(self, collection: str, params: dict[str, Any]) -> dict[str, Any]:
        if self.client is None:
            raise ExternalServiceError("Search service is not available")
        try:
            return self.client.collections[collection].documents.search(params)
        except (TypesenseClientError, OSError) as e:
            logger.error("Typesense search on %s failed: %s", collection, e)
            raise ExternalServiceError("Search service is not available") from e

    def _page(self, result: dict[str, Any], fields: dict[str, str], page: int, per_page: int) -> dict:
        items = [_map_hit(hit["document"], fields) for hit in result.get("hits", [])]
        total = result.get("found", 0)
        return {
            "items": items,
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / per_page) if per_page else 0,
        }

    def search_designers(
        self,
        query: str | None = None,
        city: str | None = None,
        styles: list[str] | None = None,
        budget_min: int | None = None,
        budget_max: int | None = None,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> dict:
        """
        Full-text designer search.

        Public endpoint: verified designers only, always.
        """
        params: dict[str, Any] = {
            "q": query or "*",
            "query_by": DESIGNER_QUERY_BY,
            "page": page,
            "per_page": per_page,
            "sort_by": "createdAt:desc",
        }
        filter_by = build_designer_filter(city, styles, budget_min, budget_max, verified_only=True)
        if filter_by:
            params["filter_by"] = filter_by

        result = self._search(DESIGNERS_COLLECTION, params)
        return self._page(result, DESIGNER_FIELDS, page, per_page)

    def search_contractors(
        self,
        query: str | None = None,
        trades: list[str] | None = None,
        city: str | None = None,
        page: int = DEFAULT_PAGE,
        per_page: int = DEFAULT_PER_PAGE,
    ) -> dict:
        params: dict[str, Any] = {
            "q": query or "*",
            "query_by": CONTRACTOR_QUERY_BY,
            "page": page,
            "per_page": per_page,
            "sort_by": "createdAt:desc",
        }
        filter_by = build_contractor_filter(trades, city, verified_only=True)
        if filter_by:
            params["filter_by"] = filter_by

        result = self._search(CONTRACTORS_COLLECTION, params)
        return self._page(result, CONTRACTOR_FIELDS, page, per_page)

    # ----- Indexing -----

    def _upsert(self, collection: str, document: dict[str, Any]) -> None:
        if self.client is None:
            return
        try:
            self.client.collections[collection].documents.upsert(document)
            logger.info("Indexed %s document %s", collection, document["id"])
        except (TypesenseClientError, OSError) as e:
            logger.error("Failed to index %s document %s: %s", collection, document["id"], e)

    def index_designer(self, designer: DesignerProfile) -> None:
        """Upsert a designer document. Failures are logged, never raised."""
        self._upsert(
            DESIGNERS_COLLECTION,
            {
                "id": str(designer.id),
                "userId": str(designer.user_id),
                "name": designer.name,
                "firmName": designer.firm_name or "",
                "bio": designer.bio or "",
                "profilePictureUrl": designer.profile_picture_url or "",
                "portfolioImages": designer.portfolio_images or [],
                "services": designer.services or [],
                "serviceCities": designer.service_cities or [],
                "styles": designer.styles or [],
                "priceRangeMin": designer.price_range_min or 0,
                "priceRangeMax": designer.price_range_max or 0,
                "experienceYears": designer.experience_years or 0,
                "projectsCompleted": designer.projects_completed or 0,
                "isVerified": designer.is_verified,
                "createdAt": int(as_aware(designer.created_at).timestamp() * 1000),
            },
        )

    def index_contractor(self, contractor: ContractorProfile) -> None:
        """Upsert a contractor document. Failures are logged, never raised."""
        self._upsert(
            CONTRACTORS_COLLECTION,
            {
                "id": str(contractor.id),
                "userId": str(contractor.user_id),
                "name": contractor.name,
                "profilePictureUrl": contractor.profile_picture_url or "",
                "trades": contractor.trades or [],
                "experienceYears": contractor.experience_years or 0,
                "serviceAreas": contractor.service_areas or [],
                "workPhotos": contractor.work_photos or [],
                "bio": contractor.bio or "",
                "isVerified": contractor.is_verified,
                "createdAt": int(as_aware(contractor.created_at).timestamp() * 1000),
            },
        )

    def remove_document(self, collection: str, document_id: str) -> None:
        if self.client is None:
            return
        try:
            self.client.collections[collection].documents[document_id].delete()
        except ObjectNotFound:
            pass
        except (TypesenseClientError, OSError) as e:
            logger.error("Failed to remove %s document %s: %s", collection, document_id, e)
