# tests/test_app.py
from fastapi.routing import APIRoute


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["error"] is None
    assert body["data"]["status"] == "healthy"
    assert body["data"]["version"] == "1.0.0"
    assert body["data"]["timestamp"]


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/v1/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {
        "success": False,
        "data": None,
        "message": "Route not found",
        "error": "Route not found",
    }


def test_validation_error_is_400(client):
    resp = client.post("/api/v1/auth/login", json={"email": "not-an-email"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert "body.email" in body["error"]
    assert "body.password" in body["error"]


def test_method_not_allowed(client):
    resp = client.put("/health")
    assert resp.status_code == 405
    assert resp.json()["success"] is False


def test_routes_are_versioned(app):
    paths = {route.path for route in app.routes if isinstance(route, APIRoute)}
    for path in (
        "/api/v1/auth/register",
        "/api/v1/users/me",
        "/api/v1/homeowners/me",
        "/api/v1/designers/me",
        "/api/v1/contractors/me",
        "/api/v1/upload",
        "/api/v1/search/designers",
        "/api/v1/projects",
        "/api/v1/requests",
        "/api/v1/admin/designers/pending",
        "/api/v1/notifications",
        "/health",
    ):
        assert path in paths
