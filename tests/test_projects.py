# tests/test_projects.py
import pytest

from app.models.profile import DesignerProfile
from conftest import register, verify_provider

PROJECT = {
    "title": "Kitchen makeover",
    "scope": "partial",
    "scope_details": {"rooms": ["kitchen"]},
    "budget_min": 300000,
    "budget_max": 600000,
    "timeline_weeks": 8,
}

PROPOSAL = {
    "scope_description": "Modular kitchen with new flooring",
    "approach": "Two site visits, then 3D renders",
    "timeline_weeks": 6,
    "cost_estimate": 450000,
    "cost_breakdown": [{"item": "Cabinets", "amount": 250000}, {"item": "Flooring", "amount": 200000}],
}


def _designer(app, client, email: str) -> tuple[dict, str]:
    designer = register(client, email, "designer", name=email.split("@")[0])
    profile_id = verify_provider(app, DesignerProfile, designer["user"]["id"])
    return designer, profile_id


def _project(client, headers) -> dict:
    resp = client.post("/api/v1/projects", json=PROJECT, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_project_crud(client):
    owner = register(client, "proj@example.com")
    project = _project(client, owner["headers"])
    assert project["status"] == "draft"

    resp = client.patch(f"/api/v1/projects/{project['id']}", json={"title": "Kitchen v2"}, headers=owner["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["title"] == "Kitchen v2"

    resp = client.patch(
        f"/api/v1/projects/{project['id']}",
        json={"budget_min": 900000},
        headers=owner["headers"],
    )
    assert resp.status_code == 400

    resp = client.get("/api/v1/projects", params={"status": "draft"}, headers=owner["headers"])
    assert [p["id"] for p in resp.json()["data"]] == [project["id"]]
    resp = client.get("/api/v1/projects", params={"status": "completed"}, headers=owner["headers"])
    assert resp.json()["data"] == []

    other = register(client, "nosy@example.com")
    assert client.get(f"/api/v1/projects/{project['id']}", headers=other["headers"]).status_code == 403


def test_invalid_budget_rejected(client):
    owner = register(client, "budget@example.com")
    resp = client.post(
        "/api/v1/projects",
        json={**PROJECT, "budget_min": 10, "budget_max": 5},
        headers=owner["headers"],
    )
    assert resp.status_code == 400


def test_completing_a_draft_is_not_allowed(client):
    owner = register(client, "early@example.com")
    project = _project(client, owner["headers"])

    resp = client.post(f"/api/v1/projects/{project['id']}/complete", headers=owner["headers"])
    assert resp.status_code == 400

    resp = client.post(f"/api/v1/projects/{project['id']}/cancel", headers=owner["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "cancelled"

    resp = client.post(f"/api/v1/projects/{project['id']}/cancel", headers=owner["headers"])
    assert resp.status_code == 400


def test_request_proposal_accept_flow(app, client):
    owner = register(client, "flow@example.com")
    first, first_id = _designer(app, client, "first@example.com")
    second, second_id = _designer(app, client, "second@example.com")
    project = _project(client, owner["headers"])

    # invite both designers
    requests = {}
    for designer_id in (first_id, second_id):
        resp = client.post(
            "/api/v1/requests",
            json={"project_id": project["id"], "designer_id": designer_id, "message": "Interested?"},
            headers=owner["headers"],
        )
        assert resp.status_code == 201, resp.text
        requests[designer_id] = resp.json()["data"]

    resp = client.post(
        "/api/v1/requests",
        json={"project_id": project["id"], "designer_id": first_id},
        headers=owner["headers"],
    )
    assert resp.status_code == 409

    resp = client.get(f"/api/v1/projects/{project['id']}", headers=owner["headers"])
    assert resp.json()["data"]["status"] == "seeking_designer"

    # designers see their inbox
    resp = client.get("/api/v1/requests/designer", params={"status": "pending"}, headers=first["headers"])
    assert [r["id"] for r in resp.json()["data"]] == [requests[first_id]["id"]]

    resp = client.get(f"/api/v1/requests/{requests[first_id]['id']}", headers=first["headers"])
    assert resp.status_code == 200
    details = resp.json()["data"]
    assert details["project"]["title"] == PROJECT["title"]
    assert details["proposal"] is None

    # a designer cannot read someone else's request
    resp = client.get(f"/api/v1/requests/{requests[first_id]['id']}", headers=second["headers"])
    assert resp.status_code == 404

    # both answer
    proposals = {}
    for designer, designer_id in ((first, first_id), (second, second_id)):
        resp = client.post(
            f"/api/v1/requests/{requests[designer_id]['id']}/proposal",
            json=PROPOSAL,
            headers=designer["headers"],
        )
        assert resp.status_code == 201, resp.text
        proposals[designer_id] = resp.json()["data"]

    resp = client.post(
        f"/api/v1/requests/{requests[first_id]['id']}/proposal",
        json=PROPOSAL,
        headers=first["headers"],
    )
    assert resp.status_code == 400

    resp = client.get(f"/api/v1/requests/project/{project['id']}/proposals", headers=owner["headers"])
    rows = resp.json()["data"]
    assert len(rows) == 2
    assert all(row["proposal"]["status"] == "submitted" for row in rows)
    assert {row["designer"]["id"] for row in rows} == {first_id, second_id}

    # accept the first one
    resp = client.post(
        f"/api/v1/requests/proposals/{proposals[first_id]['id']}/accept",
        headers=owner["headers"],
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["proposal"]["status"] == "accepted"
    assert data["project"]["status"] == "in_progress"
    assert data["project"]["designer_id"] == first_id

    resp = client.get(f"/api/v1/requests/project/{project['id']}", headers=owner["headers"])
    statuses = {r["designer_id"]: r["status"] for r in resp.json()["data"]}
    assert statuses == {first_id: "accepted", second_id: "rejected"}

    resp = client.post(
        f"/api/v1/requests/proposals/{proposals[second_id]['id']}/accept",
        headers=owner["headers"],
    )
    assert resp.status_code == 400

    # the assigned designer can now see the project
    resp = client.get("/api/v1/projects/designer", headers=first["headers"])
    assert [p["id"] for p in resp.json()["data"]] == [project["id"]]
    assert client.get(f"/api/v1/projects/{project['id']}", headers=first["headers"]).status_code == 200
    assert client.get(f"/api/v1/projects/{project['id']}", headers=second["headers"]).status_code == 403

    # finish
    resp = client.post(f"/api/v1/projects/{project['id']}/complete", headers=owner["headers"])
    assert resp.json()["data"]["status"] == "completed"
    resp = client.get(f"/api/v1/designers/{first_id}")
    assert resp.json()["data"]["projects_completed"] == 1

    resp = client.get(f"/api/v1/projects/{project['id']}/activity", headers=first["headers"])
    actions = [a["action"] for a in resp.json()["data"]]
    assert "request_sent" in actions
    assert "proposal_accepted" in actions
    assert actions.count("status_changed") == 3


def test_request_to_unverified_designer(client):
    owner = register(client, "unver@example.com")
    designer = register(client, "newbie@example.com", "designer")
    project = _project(client, owner["headers"])

    profile_id = client.get("/api/v1/designers/me", headers=designer["headers"]).json()["data"]["id"]
    resp = client.post(
        "/api/v1/requests",
        json={"project_id": project["id"], "designer_id": profile_id},
        headers=owner["headers"],
    )
    assert resp.status_code == 404


def test_decline_and_reject(app, client):
    owner = register(client, "decline@example.com")
    designer, designer_id = _designer(app, client, "picky@example.com")
    project = _project(client, owner["headers"])

    request = client.post(
        "/api/v1/requests",
        json={"project_id": project["id"], "designer_id": designer_id},
        headers=owner["headers"],
    ).json()["data"]

    resp = client.post(f"/api/v1/requests/{request['id']}/decline", headers=designer["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "rejected"

    resp = client.post(f"/api/v1/requests/{request['id']}/decline", headers=designer["headers"])
    assert resp.status_code == 400

    # homeowners cannot use designer routes
    resp = client.get("/api/v1/requests/designer", headers=owner["headers"])
    assert resp.status_code == 403


@pytest.mark.parametrize("field", ["title", "scope"])
def test_project_update_rejects_null(client, field):
    owner = register(client, f"nullproj-{field}@example.com")
    project = _project(client, owner["headers"])

    resp = client.patch(f"/api/v1/projects/{project['id']}", json={field: None}, headers=owner["headers"])
    assert resp.status_code == 400
    assert f"body.{field}" in resp.json()["error"]

    # nullable columns can still be cleared
    resp = client.patch(f"/api/v1/projects/{project['id']}", json={"timeline_weeks": None}, headers=owner["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["timeline_weeks"] is None
