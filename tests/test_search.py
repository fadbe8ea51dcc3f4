# tests/test_search.py
import uuid
from unittest.mock import MagicMock

import pytest
from typesense.exceptions import ServiceUnavailable

from app.core.errors import ExternalServiceError
from app.models.profile import ContractorProfile
from app.services.search_service import (
    SearchService,
    build_contractor_filter,
    build_designer_filter,
)

DESIGNER_DOC = {
    "id": "8a7c3c9e-4f0e-4d8e-9a53-1f4a2d1a9e01",
    "userId": "0b2f6f5e-2b1d-4c55-8d2e-7a0d4e3c2b10",
    "name": "Studio Nine",
    "styles": ["modern"],
    "serviceCities": ["Pune"],
    "priceRangeMin": 500000,
    "priceRangeMax": 1500000,
    "isVerified": True,
    "createdAt": 1736500000000,
}


def _client_returning(result: dict) -> MagicMock:
    client = MagicMock()
    client.collections.__getitem__.return_value.documents.search.return_value = result
    return client


def test_designer_filter_always_verified():
    assert build_designer_filter() == "isVerified:=true"
    f = build_designer_filter(city="Pune", styles=["modern", "boho"], budget_min=100, budget_max=900)
    assert f.startswith("isVerified:=true && ")
    assert "serviceCities:=[`Pune`]" in f
    assert "styles:=[`modern`,`boho`]" in f
    assert "priceRangeMax:>=100" in f
    assert "priceRangeMin:<=900" in f


def test_contractor_filter():
    f = build_contractor_filter(trades=["plumbing"], city="New Delhi")
    assert f == "isVerified:=true && trades:=[`plumbing`] && serviceAreas:=[`New Delhi`]"


def test_search_designers_maps_hits():
    client = _client_returning({"found": 21, "hits": [{"document": DESIGNER_DOC}]})
    result = SearchService(client).search_designers(query="kitchen", city="Pune", page=2, per_page=10)

    params = client.collections.__getitem__.return_value.documents.search.call_args.args[0]
    assert params["q"] == "kitchen"
    assert params["page"] == 2
    assert params["per_page"] == 10
    assert "isVerified:=true" in params["filter_by"]

    assert result["total"] == 21
    assert result["total_pages"] == 3
    assert result["items"][0]["service_cities"] == ["Pune"]
    assert "firm_name" not in result["items"][0]


def test_search_defaults_to_match_all():
    client = _client_returning({"found": 0, "hits": []})
    SearchService(client).search_contractors()
    params = client.collections.__getitem__.return_value.documents.search.call_args.args[0]
    assert params["q"] == "*"
    assert params["page"] == 1
    assert params["per_page"] == 20
    assert params["filter_by"] == "isVerified:=true"


def test_search_provider_failure():
    client = MagicMock()
    client.collections.__getitem__.return_value.documents.search.side_effect = ServiceUnavailable("down")
    with pytest.raises(ExternalServiceError):
        SearchService(client).search_designers()


def test_search_disabled():
    with pytest.raises(ExternalServiceError):
        SearchService(None).search_contractors()


def test_indexing_failure_is_swallowed():
    client = MagicMock()
    client.collections.__getitem__.return_value.documents.upsert.side_effect = ServiceUnavailable("down")
    profile = ContractorProfile(user_id=uuid.uuid4(), name="Builder Co", trades=["plumbing"])
    SearchService(client).index_contractor(profile)
    client.collections.__getitem__.return_value.documents.upsert.assert_called_once()


def test_search_endpoint(app, client):
    search_client = _client_returning({"found": 1, "hits": [{"document": DESIGNER_DOC}]})
    app.state.search_service = SearchService(search_client)

    resp = client.get(
        "/api/v1/search/designers",
        params={"q": "modern", "styles": "modern, boho", "budgetMin": 100000, "perPage": 5},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["items"][0]["name"] == "Studio Nine"
    assert body["data"]["items"][0]["is_verified"] is True

    params = search_client.collections.__getitem__.return_value.documents.search.call_args.args[0]
    assert "styles:=[`modern`,`boho`]" in params["filter_by"]
    assert params["per_page"] == 5


def test_search_endpoint_when_disabled(client):
    resp = client.get("/api/v1/search/contractors", params={"trades": "plumbing"})
    assert resp.status_code == 502
    assert resp.json()["error"] == "Search service is not available"
