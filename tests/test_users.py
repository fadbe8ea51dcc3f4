# tests/test_users.py
from conftest import login, register


def test_me_includes_default_permissions(client):
    user = register(client, "me@example.com")
    resp = client.get("/api/v1/users/me", headers=user["headers"])
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["user"]["email"] == "me@example.com"
    assert data["permissions"]["calendar_enabled"] is False
    assert data["permissions"]["marketing_emails_enabled"] is True
    assert "password_hash" not in data["user"]


def test_update_me_and_pick_type_once(client):
    user = register(client, "pick@example.com", user_type=None)

    resp = client.patch(
        "/api/v1/users/me",
        json={"name": "  Priya  ", "timezone": "Asia/Kolkata", "user_type": "designer"},
        headers=user["headers"],
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["name"] == "Priya"
    assert data["user_type"] == "designer"

    # choosing a type creates a placeholder profile right away
    resp = client.get("/api/v1/designers/me", headers=user["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Priya"

    resp = client.patch("/api/v1/users/me", json={"user_type": "homeowner"}, headers=user["headers"])
    assert resp.status_code == 409


def test_update_me_rejects_unknown_fields(client):
    user = register(client, "extra@example.com")
    resp = client.patch("/api/v1/users/me", json={"email": "x@example.com"}, headers=user["headers"])
    assert resp.status_code == 400


def test_update_permissions(client):
    user = register(client, "perm@example.com")
    resp = client.put(
        "/api/v1/users/me/permissions",
        json={"location_enabled": True, "marketing_emails_enabled": False},
        headers=user["headers"],
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["location_enabled"] is True
    assert data["marketing_emails_enabled"] is False
    assert data["community_updates_enabled"] is True


def test_devices_list_and_revoke(client):
    first = register(client, "dev@example.com")
    second = login(client, "dev@example.com")

    resp = client.get("/api/v1/users/devices", headers=second["headers"])
    assert resp.status_code == 200
    devices = resp.json()["data"]
    assert len(devices) == 2
    assert sum(d["is_current"] for d in devices) == 1

    other = next(d for d in devices if not d["is_current"])
    resp = client.delete(f"/api/v1/users/devices/{other['id']}", headers=second["headers"])
    assert resp.status_code == 200

    assert client.get("/api/v1/users/me", headers=first["headers"]).status_code == 401
    resp = client.delete(f"/api/v1/users/devices/{other['id']}", headers=second["headers"])
    assert resp.status_code == 404


def test_deactivate_account(client):
    user = register(client, "bye@example.com")
    resp = client.delete("/api/v1/users/me", headers=user["headers"])
    assert resp.status_code == 200

    assert client.get("/api/v1/users/me", headers=user["headers"]).status_code == 403
    resp = client.post("/api/v1/auth/login", json={"email": "bye@example.com", "password": "Sup3rSecret!"})
    assert resp.status_code == 403
