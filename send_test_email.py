# send_test_email.py
import sys

from app.core.config import get_settings
from app.core.email_client import BrevoClient
from app.services.email_service import EmailService


def main():
    if len(sys.argv) < 2:
        print("Usage: python send_test_email.py <recipient@example.com>")
        sys.exit(2)

    settings = get_settings()
    email_service = EmailService(settings, BrevoClient(settings))

    print("Sending test email...")

    email_service.send_verification_email(sys.argv[1], "123456", settings.VERIFICATION_CODE_EXPIRE_MINUTES)

    print("If no errors: email sent! Check your inbox.")


if __name__ == "__main__":
    main()
