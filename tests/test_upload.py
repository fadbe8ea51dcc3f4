# tests/test_upload.py
from unittest.mock import MagicMock

import pytest

from app.core.errors import ExternalServiceError
from app.core.storage_utils import SupabaseStorage
from conftest import register

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
PUBLIC = "https://proj.supabase.co/storage/v1/object/public/assets/"


@pytest.fixture
def bucket(app):
    """Fake Supabase bucket behind the app's storage."""
    bucket = MagicMock()
    bucket.get_public_url.side_effect = lambda path: PUBLIC + path
    supabase = MagicMock()
    supabase.storage.from_.return_value = bucket
    app.state.storage = SupabaseStorage(lambda: supabase, "assets")
    return bucket


def test_upload_requires_auth(client, bucket):
    resp = client.post("/api/v1/upload", files={"file": ("a.png", PNG, "image/png")})
    assert resp.status_code == 401
    bucket.upload.assert_not_called()


def test_upload_single(client, bucket):
    user = register(client, "up@example.com")
    resp = client.post(
        "/api/v1/upload",
        params={"folder": "portfolio"},
        files={"file": ("a.png", PNG, "image/png")},
        headers=user["headers"],
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    assert data["filename"].endswith(".png")
    assert data["url"] == f"{PUBLIC}portfolio/{user['user']['id']}/{data['filename']}"

    path, body, options = bucket.upload.call_args.args
    assert path == f"portfolio/{user['user']['id']}/{data['filename']}"
    assert body == PNG
    assert options["content-type"] == "image/png"


def test_upload_rejects_wrong_type(client, bucket):
    user = register(client, "gif@example.com")
    resp = client.post(
        "/api/v1/upload",
        files={"file": ("a.gif", b"GIF89a", "image/gif")},
        headers=user["headers"],
    )
    assert resp.status_code == 400
    bucket.upload.assert_not_called()


def test_upload_rejects_large_file(app, client, bucket):
    app.state.settings.MAX_UPLOAD_BYTES = 16
    user = register(client, "big@example.com")
    resp = client.post(
        "/api/v1/upload",
        files={"file": ("a.png", PNG, "image/png")},
        headers=user["headers"],
    )
    assert resp.status_code == 400
    assert "exceeds" in resp.json()["error"]


def test_upload_rejects_bad_folder(client, bucket):
    user = register(client, "folder@example.com")
    resp = client.post(
        "/api/v1/upload",
        params={"folder": "../secrets"},
        files={"file": ("a.png", PNG, "image/png")},
        headers=user["headers"],
    )
    assert resp.status_code == 400


def test_upload_multiple_partial(client, bucket):
    user = register(client, "multi@example.com")
    resp = client.post(
        "/api/v1/upload/multiple",
        files=[
            ("files", ("a.png", PNG, "image/png")),
            ("files", ("b.webp", b"RIFF0000WEBP", "image/webp")),
            ("files", ("c.txt", b"hello", "text/plain")),
        ],
        headers=user["headers"],
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    assert len(data["urls"]) == 2
    assert len(data["errors"]) == 1
    assert data["errors"][0].startswith("c.txt")


def test_upload_multiple_all_invalid(client, bucket):
    user = register(client, "allbad@example.com")
    resp = client.post(
        "/api/v1/upload/multiple",
        files=[("files", ("c.txt", b"hello", "text/plain"))],
        headers=user["headers"],
    )
    assert resp.status_code == 400


def test_delete_own_file_only(client, bucket):
    owner = register(client, "del@example.com")
    other = register(client, "thief@example.com")
    url = f"{PUBLIC}images/{owner['user']['id']}/x.png"

    resp = client.delete("/api/v1/upload", params={"url": url}, headers=other["headers"])
    assert resp.status_code == 403

    resp = client.delete("/api/v1/upload", params={"url": url}, headers=owner["headers"])
    assert resp.status_code == 200
    bucket.remove.assert_called_once_with([f"images/{owner['user']['id']}/x.png"])

    resp = client.delete("/api/v1/upload", params={"url": "https://elsewhere.com/x.png"}, headers=owner["headers"])
    assert resp.status_code == 400


def test_storage_failure_is_502(client, bucket):
    bucket.upload.side_effect = RuntimeError("bucket down")
    user = register(client, "down@example.com")
    resp = client.post(
        "/api/v1/upload",
        files={"file": ("a.png", PNG, "image/png")},
        headers=user["headers"],
    )
    assert resp.status_code == 502


def test_storage_without_credentials():
    def missing():
        raise RuntimeError("Missing SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY in .env")

    with pytest.raises(ExternalServiceError):
        SupabaseStorage(missing, "assets").upload("images/a.png", PNG, "image/png")
