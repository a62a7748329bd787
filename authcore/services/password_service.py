"""Password lifecycle: register, login, password change, forgot/reset."""

import logging

from authcore.models.user import ROLE_USER, ROLES, User
from authcore.services.email_service import EmailService
from authcore.services.exceptions import (
    AuthError,
    DeliveryError,
    DuplicateError,
    NotFoundError,
    TokenError,
    ValidationError,
)
from authcore.services.password_hasher import (
    MAX_PASSWORD_BYTES,
    get_dummy_hash,
    hash_password,
    password_too_long,
    verify_password,
)
from authcore.services.repositories.user_repository import UserRepository
from authcore.services.token_service import SessionToken, TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
PASSWORD_TOO_LONG = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise ValidationError(f"Please provide {', '.join(missing)}")


def _new_password_hash(password: str) -> str:
    if password_too_long(password):
        raise ValidationError(PASSWORD_TOO_LONG)
    return hash_password(password)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class PasswordService:
    """Orchestrates credential checks and the password-reset handshake.

    Each public method is a complete unit of work against the user store.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        notifier: EmailService,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._notifier = notifier

    def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: str | None = None,
        phone: str | None = None,
    ) -> tuple[User, SessionToken]:
        """Create a user and issue a session token."""
        _require(first_name=first_name, last_name=last_name, email=email, password=password)
        role = role or ROLE_USER
        if role not in ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")
        if password_too_long(password):
            raise ValidationError(PASSWORD_TOO_LONG)

        email = _normalize_email(email)
        if self._users.find_by_email(email):
            raise ValidationError("Email already registered")

        try:
            user = self._users.create(
                first_name=first_name,
                last_name=last_name,
                email=email,
                password_hash=hash_password(password),
                role=role,
                phone=phone,
            )
        except DuplicateError as e:
            raise ValidationError("Email already registered") from e

        logger.info(f"User registered: {user.id}")
        return user, self._tokens.issue_session_token(user.id, user.role)

    def login(self, email: str | None, password: str | None) -> tuple[User, SessionToken]:
        """Check credentials and issue a session token.

        Unknown email and wrong password raise the same error.
        """
        if not email or not password:
            raise ValidationError("Please provide an email and password")

        user = self._users.find_by_email(email)
        if user is None:
            # Dummy verification keeps timing close to the wrong-password path
            verify_password(password, get_dummy_hash())
            raise AuthError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            raise AuthError(INVALID_CREDENTIALS)

        logger.info(f"User logged in: {user.id}")
        return user, self._tokens.issue_session_token(user.id, user.role)

    def get_user(self, user_id: str) -> User:
        return self._users.get_by_id(user_id)

    def update_details(
        self,
        user_id: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
    ) -> User:
        """Update whitelisted profile fields; absent fields keep their stored value."""
        user = self._users.get_by_id(user_id)

        email = _normalize_email(email) if email else None
        if email and email != user.email.lower():
            existing = self._users.find_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ValidationError("Email already registered")

        try:
            return self._users.update(
                user_id,
                first_name=first_name or user.first_name,
                last_name=last_name or user.last_name,
                email=email or user.email,
            )
        except DuplicateError as e:
            raise ValidationError("Email already registered") from e

    def change_password(
        self, user_id: str, current_password: str, new_password: str
    ) -> tuple[User, SessionToken]:
        """Change password after checking the current one."""
        _require(new_password=new_password)
        user = self._users.get_by_id(user_id)

        if not current_password or not verify_password(current_password, user.password_hash):
            raise AuthError("Password is incorrect")

        user = self._users.update(user_id, password_hash=_new_password_hash(new_password))
        logger.info(f"Password changed for user: {user.id}")
        return user, self._tokens.issue_session_token(user.id, user.role)

    def forgot_password(self, email: str, reset_url_base: str) -> None:
        """Store a reset-token hash and email the cleartext link.

        If the email cannot be sent the stored hash and expiry are cleared
        before raising, so no undeliverable token stays live.
        """
        _require(email=email)
        user = self._users.find_by_email(email)
        if user is None:
            raise NotFoundError("There is no user with that email")

        reset = self._tokens.issue_reset_token()
        self._users.update(
            user.id,
            reset_password_token=reset.token_hash,
            reset_password_expire=self._tokens.reset_token_expiry(),
        )

        reset_url = f"{reset_url_base.rstrip('/')}/{reset.cleartext}"
        message = self._notifier.password_reset_message(user.email, reset_url)
        try:
            delivered = self._notifier.send(message)
        except Exception:
            logger.exception(f"Password reset email for user {user.id} raised")
            delivered = False

        if not delivered:
            self._users.update(user.id, reset_password_token=None, reset_password_expire=None)
            raise DeliveryError("Email could not be sent")

        logger.info(f"Password reset email sent for user: {user.id}")

    def reset_password(self, cleartext: str, new_password: str) -> tuple[User, SessionToken]:
        """Consume a reset token and set a new password."""
        _require(password=new_password)
        if not cleartext:
            raise TokenError("Invalid token")

        user = self._users.find_by_reset_token(self._tokens.hash_token(cleartext))
        if user is None or not self._tokens.validate_reset_token(
            cleartext, user.reset_password_token, user.reset_password_expire
        ):
            raise TokenError("Invalid token")

        user = self._users.update(
            user.id,
            password_hash=_new_password_hash(new_password),
            reset_password_token=None,
            reset_password_expire=None,
        )
        logger.info(f"Password reset for user: {user.id}")
        return user, self._tokens.issue_session_token(user.id, user.role)
