"""BVN verification workflow.

A user moves through three states::

    UNVERIFIED -> CODE_ISSUED -> VERIFIED

A new request while a code is outstanding overwrites it (one active code per
user). A wrong or expired submission leaves the state unchanged.
"""

import enum
import hmac
import logging
import secrets
from datetime import timedelta

from authcore.config import Settings
from authcore.models.user import User
from authcore.services.exceptions import (
    AlreadyVerifiedError,
    DeliveryError,
    ExpiredError,
    MismatchError,
)
from authcore.services.paystack_client import BvnIdentity, PaystackClient
from authcore.services.repositories.user_repository import UserRepository
from authcore.services.sms_service import SmsService
from authcore.services.token_service import Clock, as_utc, hash_token, utc_now

logger = logging.getLogger(__name__)

CODE_DIGITS = 6


class VerificationState(enum.StrEnum):
    UNVERIFIED = "unverified"
    CODE_ISSUED = "code_issued"
    VERIFIED = "verified"


def verification_state(user: User) -> VerificationState:
    if user.is_verified:
        return VerificationState.VERIFIED
    if user.bvn_code_hash:
        return VerificationState.CODE_ISSUED
    return VerificationState.UNVERIFIED


def generate_code() -> str:
    """Generate a numeric verification code."""
    return f"{secrets.randbelow(10**CODE_DIGITS):0{CODE_DIGITS}d}"


class BvnVerificationService:
    """Issues and checks the BVN verification code for a user."""

    def __init__(
        self,
        users: UserRepository,
        lookup: PaystackClient,
        sms: SmsService,
        settings: Settings,
        clock: Clock = utc_now,
    ) -> None:
        self._users = users
        self._lookup = lookup
        self._sms = sms
        self._expire_minutes = settings.bvn_code_expire_minutes
        self._clock = clock

    def request_verification(self, user_id: str, bvn: str) -> BvnIdentity:
        """Resolve the BVN, issue a code and text it to the resolved mobile.

        Returns the resolved identity for display; the code is never returned.

        Raises:
            IdentityLookupError: lookup failed or BVN is invalid.
            AlreadyVerifiedError: user already completed verification.
            DeliveryError: the SMS could not be sent (the code is discarded).
        """
        user = self._users.get_by_id(user_id)
        if user.is_verified:
            raise AlreadyVerifiedError()

        identity = self._lookup.resolve_bvn(bvn)

        code = generate_code()
        # Hash and expiry are written together so a concurrent request
        # never leaves a half-updated code on the record
        self._users.update(
            user.id,
            bvn_code_hash=hash_token(code),
            bvn_code_expire=self._clock() + timedelta(minutes=self._expire_minutes),
        )

        try:
            delivered = self._sms.send_bvn_code(identity.mobile, code, self._expire_minutes)
        except Exception:
            logger.exception(f"BVN code SMS for user {user.id} raised")
            delivered = False

        if not delivered:
            self._users.update(user.id, bvn_code_hash=None, bvn_code_expire=None)
            raise DeliveryError("Verification code could not be sent")

        logger.info(f"BVN verification code issued for user {user.id}")
        return identity

    def submit_verification(self, user_id: str, code: str) -> User:
        """Check a submitted code. Expiry is checked before equality.

        Raises:
            AlreadyVerifiedError: user already completed verification.
            ExpiredError: no active code, or the code has expired.
            MismatchError: the code does not match.
        """
        user = self._users.get_by_id(user_id)
        if user.is_verified:
            raise AlreadyVerifiedError()

        if user.bvn_code_expire is None or self._clock() > as_utc(user.bvn_code_expire):
            raise ExpiredError("Bvn token expired")

        submitted = hash_token(str(code or "").strip())
        if not user.bvn_code_hash or not hmac.compare_digest(submitted, user.bvn_code_hash):
            raise MismatchError("Invalid token")

        user = self._users.update(
            user.id, is_verified=True, bvn_code_hash=None, bvn_code_expire=None
        )
        logger.info(f"User {user.id} verified via BVN")
        return user
