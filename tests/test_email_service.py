# tests/test_email_service.py
from unittest.mock import MagicMock

import pytest
import requests

from app.core.config import Settings
from app.core.email_client import BrevoClient
from app.core.errors import ExternalServiceError
from app.services.email_service import WELCOME_SUBJECT, EmailService


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "JWT_ACCESS_SECRET": "a",
        "JWT_REFRESH_SECRET": "r",
        "ENVIRONMENT": "development",
        "BREVO_API_KEY": "xkeysib-test",
        "_env_file": None,
    }
    values.update(overrides)
    return Settings(**values)


def test_test_mode_never_calls_provider():
    client = MagicMock()
    service = EmailService(make_settings(ENVIRONMENT="test"), client)

    service.send_email("a@example.com", "Subject", "<p>hi</p>")
    service.send_verification_email("a@example.com", "123456", 60)

    client.send.assert_not_called()


def test_verification_defaults_to_email_template():
    client = MagicMock()
    EmailService(make_settings(), client).send_verification_email("a@example.com", "654321", 60)

    to, subject, html, text = client.send.call_args.args
    assert to == "a@example.com"
    assert subject == "Verify Your Email Address"
    assert "654321" in html
    assert text is None


@pytest.mark.parametrize(
    "kind, subject",
    [
        ("phone", "Verify Your Phone Number"),
        ("password_reset", "Reset Your Password"),
    ],
)
def test_verification_type_selects_subject(kind, subject):
    client = MagicMock()
    EmailService(make_settings(), client).send_verification_email("a@example.com", "111111", 15, type=kind)
    assert client.send.call_args.args[1] == subject


def test_welcome_email():
    client = MagicMock()
    EmailService(make_settings(), client).send_welcome_email("a@example.com", "Asha")
    _, subject, html, _ = client.send.call_args.args
    assert subject == WELCOME_SUBJECT
    assert "Asha" in html


def test_provider_errors_propagate():
    client = MagicMock()
    client.send.side_effect = ExternalServiceError("Failed to send email via Brevo")
    with pytest.raises(ExternalServiceError):
        EmailService(make_settings(), client).send_email("a@example.com", "S", "<p>x</p>")


def test_brevo_client_payload():
    http = MagicMock()
    http.post.return_value.json.return_value = {"messageId": "<m1@brevo>"}
    client = BrevoClient(make_settings(), http=http)

    assert client.send("a@example.com", "Hello", "<p>x</p>") == "<m1@brevo>"

    kwargs = http.post.call_args.kwargs
    assert http.post.call_args.args[0] == "https://api.brevo.com/v3/smtp/email"
    assert kwargs["headers"]["api-key"] == "xkeysib-test"
    assert kwargs["json"]["to"] == [{"email": "a@example.com"}]
    assert "textContent" not in kwargs["json"]


def test_brevo_client_without_key():
    client = BrevoClient(make_settings(BREVO_API_KEY=None), http=MagicMock())
    with pytest.raises(ExternalServiceError):
        client.send("a@example.com", "Hello", "<p>x</p>")


def test_brevo_client_transport_error():
    http = MagicMock()
    http.post.side_effect = requests.ConnectionError("boom")
    with pytest.raises(ExternalServiceError):
        BrevoClient(make_settings(), http=http).send("a@example.com", "Hello", "<p>x</p>")
