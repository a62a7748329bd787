"""Email service using SendGrid."""

import logging
from dataclasses import dataclass

from python_http_client.exceptions import HTTPError
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from authcore.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    recipient: str
    subject: str
    body: str


class EmailService:
    """Service for sending transactional emails via SendGrid."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def send(self, message: EmailMessage) -> bool:
        """Send email via SendGrid. Returns True if successful."""
        if not self._settings.sendgrid_api_key:
            logger.warning("SendGrid API key not configured, skipping email send")
            return False

        mail = Mail(
            from_email=(self._settings.email_from_address, self._settings.email_from_name),
            to_emails=message.recipient,
            subject=message.subject,
            plain_text_content=message.body,
        )

        try:
            sg = SendGridAPIClient(self._settings.sendgrid_api_key)
            response = sg.send(mail)
        except HTTPError:
            logger.exception(f"Failed to send email: {message.subject}")
            return False

        logger.info(f"Email sent: {message.subject}, status: {response.status_code}")
        return response.status_code in (200, 201, 202)

    @staticmethod
    def password_reset_message(email: str, reset_url: str) -> EmailMessage:
        body = (
            "You are receiving this email because you (or someone else) has requested "
            f"the reset of a password. Please make a PUT request to: \n\n {reset_url}"
        )
        return EmailMessage(recipient=email, subject="Password reset token", body=body)
