# app/core/email_client.py
"""
Email client for the Finishd backend.

Responsibilities:
  - Talk to the Brevo transactional email REST API.
  - Provide a single send(...) method for the email service to use.

Typical .env configuration:

    BREVO_API_KEY=xkeysib-...
    BREVO_SENDER_EMAIL=noreply@finishd.app
    BREVO_SENDER_NAME=Finishd
"""

import logging

import requests

from app.core.config import Settings
from app.core.errors import ExternalServiceError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30


class BrevoClient:
    """Thin wrapper over POST {BREVO_API_URL}/smtp/email."""

    def __init__(self, settings: Settings, http: requests.Session | None = None):
        self.api_key = settings.BREVO_API_KEY
        self.url = settings.BREVO_API_URL.rstrip("/") + "/smtp/email"
        self.sender = {"email": settings.BREVO_SENDER_EMAIL, "name": settings.BREVO_SENDER_NAME}
        self.http = http or requests.Session()

    def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> str | None:
        """
        Send an email to a single recipient.

        Parameters
        ----------
        to_email:
            Recipient email address.
        subject:
            Email subject line.
        html_body:
            HTML content.
        text_body:
            Optional plain-text alternative; omitted from the payload if None.

        Returns
        -------
        Brevo message id, if the API returned one.

        Raises
        ------
        ExternalServiceError:
            API key missing, transport failure, or non-2xx answer.
        """
        if not self.api_key:
            raise ExternalServiceError("Email service is not configured (BREVO_API_KEY missing)")

        payload: dict = {
            "sender": self.sender,
            "to": [{"email": to_email}],
            "subject": subject,
            "htmlContent": html_body,
        }
        if text_body:
            payload["textContent"] = text_body

        headers = {
            "api-key": self.api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }

        try:
            resp = self.http.post(self.url, json=payload, headers=headers, timeout=REQUEST_TIMEOUT_SECONDS)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Brevo send to %s failed: %s", to_email, e)
            raise ExternalServiceError("Failed to send email via Brevo") from e

        try:
            return resp.json().get("messageId")
        except ValueError:
            return None
