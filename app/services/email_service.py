# app/services/email_service.py
import logging
from typing import Literal

from app.core.config import Settings
from app.core.email_client import BrevoClient
from app.core.email_templates import (
    EMAIL_VERIFICATION_TEMPLATE,
    PASSWORD_RESET_TEMPLATE,
    PHONE_VERIFICATION_TEMPLATE,
    WELCOME_TEMPLATE,
    email_template,
)
from app.database import utcnow

logger = logging.getLogger(__name__)

VerificationType = Literal["email", "phone", "password_reset"]

# type -> (template file, subject)
VERIFICATION_EMAILS: dict[str, tuple[str, str]] = {
    "email": (EMAIL_VERIFICATION_TEMPLATE, "Verify Your Email Address"),
    "phone": (PHONE_VERIFICATION_TEMPLATE, "Verify Your Phone Number"),
    "password_reset": (PASSWORD_RESET_TEMPLATE, "Reset Your Password"),
}

WELCOME_SUBJECT = "Welcome to Rituality!"


class EmailService:
    """
    Templated transactional email.

    Responsibilities:
      - pick template + subject
      - render with Jinja2 (app/core/email_templates.py)
      - hand off to the Brevo client, except in test mode
    """

    def __init__(self, settings: Settings, client: BrevoClient):
        self.settings = settings
        self.client = client

    def send_email(
        self,
        to: str,
        subject: str,
        html: str,
        text: str | None = None,
    ) -> None:
        """
        Send one email.

        In test mode this only logs the intent and returns.

        Raises:
            ExternalServiceError: provider failure (propagated to the caller).
        """
        if self.settings.is_test:
            logger.info("[TEST MODE] Would send email to %s: %s", to, subject)
            return

        self.client.send(to, subject, html, text)
        logger.info("Email sent to %s: %s", to, subject)

    def send_verification_email(
        self,
        to: str,
        code: str,
        expiry_minutes: int,
        type: VerificationType = "email",
    ) -> None:
        """
        Send a one-time code.

        `type` selects template and subject:
          - email          -> email verification
          - phone          -> phone verification
          - password_reset -> password reset

        HTML only, no plain-text part.
        """
        template, subject = VERIFICATION_EMAILS[type]
        html = email_template(
            template,
            {
                "code": code,
                "expiryMinutes": expiry_minutes,
                "email": to,
                "year": utcnow().year,
            },
        )
        self.send_email(to, subject, html)

    def send_welcome_email(self, to: str, name: str) -> None:
        html = email_template(
            WELCOME_TEMPLATE,
            {
                "name": name,
                "email": to,
                "frontendUrl": self.settings.APP_BASE_URL,
                "year": utcnow().year,
            },
        )
        self.send_email(to, WELCOME_SUBJECT, html)
