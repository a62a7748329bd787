"""Session tokens (JWT) and single-use reset tokens."""

import hashlib
import hmac
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt

from authcore.config import Settings

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

SESSION_TOKEN_TYPE = "access"


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def hash_token(value: str) -> str:
    """Hash a secret using SHA-256 (hex digest)."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class SessionToken:
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class ResetToken:
    """A reset token: the cleartext goes to the user, only the hash is stored."""

    cleartext: str
    token_hash: str


class TokenService:
    """Issues and validates session tokens and reset tokens.

    Session tokens are stateless: a token is valid while its signature
    checks out and ``exp`` is in the future. There is no revocation list.
    """

    def __init__(self, settings: Settings, clock: Clock = utc_now) -> None:
        self._settings = settings
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def issue_session_token(
        self,
        user_id: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> SessionToken:
        """Create a signed JWT for the user."""
        if expires_delta is None:
            expires_delta = timedelta(days=self._settings.jwt_expire_days)

        issued_at = self.now()
        expires_at = issued_at + expires_delta
        payload = {
            "sub": user_id,
            "role": role,
            "exp": expires_at,
            "iat": issued_at,
            "type": SESSION_TOKEN_TYPE,
        }
        token = jwt.encode(
            payload, self._settings.jwt_secret_key, algorithm=self._settings.jwt_algorithm
        )
        return SessionToken(token=token, expires_at=expires_at)

    def decode_session_token(self, token: str) -> dict | None:
        """Decode and validate a session token. Returns None if invalid or expired."""
        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret_key,
                algorithms=[self._settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid token: {e}")
            return None

        if payload.get("type") != SESSION_TOKEN_TYPE or not payload.get("sub"):
            logger.debug("Token has wrong type or no subject")
            return None
        return payload

    @staticmethod
    def hash_token(value: str) -> str:
        return hash_token(value)

    @staticmethod
    def issue_reset_token() -> ResetToken:
        """Generate a random reset token and its SHA-256 hash."""
        cleartext = secrets.token_hex(20)
        return ResetToken(cleartext=cleartext, token_hash=hash_token(cleartext))

    def reset_token_expiry(self) -> datetime:
        return self.now() + timedelta(minutes=self._settings.reset_token_expire_minutes)

    def validate_reset_token(
        self,
        submitted: str,
        stored_hash: str | None,
        stored_expiry: datetime | None,
    ) -> bool:
        """Check a submitted reset token against the stored hash and expiry.

        The submitted value is re-hashed; cleartext is never stored or compared.
        """
        if not submitted or not stored_hash or stored_expiry is None:
            return False
        expired = as_utc(stored_expiry) <= self.now()
        matches = hmac.compare_digest(hash_token(submitted), stored_hash)
        return matches and not expired
