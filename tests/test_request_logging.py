# tests/test_request_logging.py
import logging


def _request_records(caplog):
    return [r for r in caplog.records if r.name == "app.request"]


def test_one_record_per_request(client, caplog):
    caplog.set_level(logging.INFO, logger="app.request")

    resp = client.get("/health")
    assert resp.status_code == 200

    records = _request_records(caplog)
    assert len(records) == 1
    record = records[0]
    assert record.levelno == logging.INFO
    assert record.method == "GET"
    assert record.path == "/health"
    assert record.status_code == 200
    assert isinstance(record.status_code, int)
    assert record.duration.endswith("ms")
    assert record.ip


def test_error_responses_are_logged_with_their_status(client, caplog):
    caplog.set_level(logging.INFO, logger="app.request")

    client.get("/api/v1/users/me")
    client.get("/api/v1/nowhere")

    records = _request_records(caplog)
    assert [(r.path, r.status_code) for r in records] == [
        ("/api/v1/users/me", 401),
        ("/api/v1/nowhere", 404),
    ]


def test_forwarded_ip_is_used(client, caplog):
    caplog.set_level(logging.INFO, logger="app.request")
    client.get("/health", headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"})
    assert _request_records(caplog)[0].ip == "203.0.113.7"
