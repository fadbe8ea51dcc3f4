# tests/test_admin.py
import uuid
from unittest.mock import MagicMock

from app.core.typesense_client import CONTRACTORS_COLLECTION
from conftest import make_admin, register

DESIGNER = {
    "name": "Studio Nine",
    "styles": ["modern"],
    "service_cities": ["Pune"],
    "price_range_min": 500000,
    "price_range_max": 1500000,
}


def _admin(app, client) -> dict:
    admin = register(client, "admin@example.com", None, name="Ops")
    make_admin(app, admin["user"]["id"])
    return admin


def _onboarded(client, email: str, user_type: str = "designer") -> tuple[dict, str]:
    provider = register(client, email, user_type)
    if user_type == "designer":
        body = DESIGNER
    else:
        body = {"name": "Builder Co", "trades": ["plumbing"], "service_areas": ["Pune"]}
    resp = client.post(f"/api/v1/{user_type}s/me", json=body, headers=provider["headers"])
    assert resp.status_code == 201, resp.text
    return provider, resp.json()["data"]["id"]


def _notification_types(client, headers) -> list[str]:
    resp = client.get("/api/v1/notifications", headers=headers)
    return [n["type"] for n in resp.json()["data"]["notifications"]]


def test_admin_routes_require_admin_role(client):
    user = register(client, "plain@example.com")

    assert client.get("/api/v1/admin/designers/pending").status_code == 401
    resp = client.get("/api/v1/admin/designers/pending", headers=user["headers"])
    assert resp.status_code == 403
    assert resp.json()["message"] == "Admin access required"


def test_pending_queue_skips_placeholders(app, client):
    admin = _admin(app, client)
    register(client, "halfway@example.com", "designer")
    _, profile_id = _onboarded(client, "ready@example.com")

    resp = client.get("/api/v1/admin/designers/pending", headers=admin["headers"])
    assert resp.status_code == 200
    assert [d["id"] for d in resp.json()["data"]] == [profile_id]

    resp = client.get("/api/v1/admin/contractors/pending", headers=admin["headers"])
    assert resp.json()["data"] == []


def test_verify_designer(app, client):
    admin = _admin(app, client)
    designer, profile_id = _onboarded(client, "verifyme@example.com")
    assert client.get(f"/api/v1/designers/{profile_id}").status_code == 404

    resp = client.post(f"/api/v1/admin/designers/{profile_id}/verify", headers=admin["headers"])
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["is_verified"] is True
    assert data["verified_at"] is not None

    assert client.get(f"/api/v1/designers/{profile_id}").status_code == 200
    assert client.get("/api/v1/designers").json()["data"]["total"] == 1
    assert client.get("/api/v1/admin/designers/pending", headers=admin["headers"]).json()["data"] == []
    assert _notification_types(client, designer["headers"]) == ["profile_verified"]

    resp = client.post(f"/api/v1/admin/designers/{profile_id}/verify", headers=admin["headers"])
    assert resp.status_code == 409
    resp = client.post(f"/api/v1/admin/designers/{profile_id}/reject", headers=admin["headers"])
    assert resp.status_code == 409


def test_verify_requires_finished_onboarding(app, client):
    admin = _admin(app, client)
    designer = register(client, "placeholder@example.com", "designer")
    profile_id = client.get("/api/v1/designers/me", headers=designer["headers"]).json()["data"]["id"]

    resp = client.post(f"/api/v1/admin/designers/{profile_id}/verify", headers=admin["headers"])
    assert resp.status_code == 400

    resp = client.post(f"/api/v1/admin/designers/{uuid.uuid4()}/verify", headers=admin["headers"])
    assert resp.status_code == 404


def test_reject_designer_sends_back_to_onboarding(app, client):
    admin = _admin(app, client)
    designer, profile_id = _onboarded(client, "rejectme@example.com")

    resp = client.post(
        f"/api/v1/admin/designers/{profile_id}/reject",
        json={"reason": "Portfolio images are missing"},
        headers=admin["headers"],
    )
    assert resp.status_code == 200, resp.text

    me = client.get("/api/v1/users/me", headers=designer["headers"]).json()["data"]
    assert me["user"]["profile_created"] is False

    resp = client.get("/api/v1/designers/me", headers=designer["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] != profile_id
    assert client.get("/api/v1/admin/designers/pending", headers=admin["headers"]).json()["data"] == []

    feed = client.get("/api/v1/notifications", headers=designer["headers"]).json()["data"]
    assert feed["notifications"][0]["type"] == "profile_rejected"
    assert "Portfolio images are missing" in feed["notifications"][0]["message"]

    # onboarding can be submitted again
    resp = client.post("/api/v1/designers/me", json=DESIGNER, headers=designer["headers"])
    assert resp.status_code == 201


def test_reject_rejects_unknown_fields(app, client):
    admin = _admin(app, client)
    _, profile_id = _onboarded(client, "strict@example.com")

    resp = client.post(
        f"/api/v1/admin/designers/{profile_id}/reject",
        json={"reason": "x", "ban": True},
        headers=admin["headers"],
    )
    assert resp.status_code == 400


def test_contractor_verification_updates_search_index(app, client):
    admin = _admin(app, client)
    contractor, profile_id = _onboarded(client, "builder@example.com", "contractor")
    _, rejected_id = _onboarded(client, "sloppy@example.com", "contractor")

    search = MagicMock()
    app.state.search_service = search

    resp = client.post(f"/api/v1/admin/contractors/{profile_id}/verify", headers=admin["headers"])
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["is_verified"] is True
    search.index_contractor.assert_called_once()
    assert str(search.index_contractor.call_args.args[0].id) == profile_id

    resp = client.post(f"/api/v1/admin/contractors/{rejected_id}/reject", headers=admin["headers"])
    assert resp.status_code == 200
    search.remove_document.assert_called_once_with(CONTRACTORS_COLLECTION, rejected_id)

    assert client.get(f"/api/v1/contractors/{profile_id}").status_code == 200
    assert _notification_types(client, contractor["headers"]) == ["profile_verified"]
