"""SMS delivery using Twilio."""

import logging

from twilio.base.exceptions import TwilioException
from twilio.rest import Client as TwilioClient

from authcore.config import Settings

logger = logging.getLogger(__name__)


class SmsService:
    """Sends BVN verification codes to the mobile number resolved for a BVN."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def configured(self) -> bool:
        return all(
            [
                self._settings.twilio_account_sid,
                self._settings.twilio_auth_token,
                self._settings.twilio_phone_number,
            ]
        )

    def send_bvn_code(self, mobile: str, code: str, expires_minutes: int) -> bool:
        """Send the verification code. Returns True if Twilio accepted it."""
        if not self.configured:
            logger.warning("Twilio not configured, skipping SMS send")
            return False

        body = f"Your BVN verification code is {code}. It expires in {expires_minutes} minutes."
        try:
            client = TwilioClient(self._settings.twilio_account_sid, self._settings.twilio_auth_token)
            message = client.messages.create(
                to=mobile, from_=self._settings.twilio_phone_number, body=body
            )
        except TwilioException:
            logger.exception("Failed to send BVN code SMS")
            return False

        logger.info(f"BVN code SMS queued, sid: {message.sid}")
        return True
