"""Account service exceptions.

Every failure surfaced to a caller carries a stable ``kind`` and a
human-readable ``message``. The HTTP layer renders them as
``{"success": false, "error": kind, "message": message}``.
"""


class AccountError(Exception):
    """Base exception for account and verification operations."""

    kind = "account_error"
    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    """Missing or malformed input."""

    kind = "validation_error"
    status_code = 400
    default_message = "Invalid input"


class AuthError(AccountError):
    """Credentials did not match."""

    kind = "auth_error"
    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(AccountError):
    """No such user."""

    kind = "not_found"
    status_code = 404
    default_message = "User not found"


class TokenError(AccountError):
    """Reset token unknown, expired or already consumed."""

    kind = "token_error"
    status_code = 400
    default_message = "Invalid token"


class ExpiredError(AccountError):
    """BVN verification code has expired."""

    kind = "expired"
    status_code = 400
    default_message = "Bvn token expired"


class MismatchError(AccountError):
    """Submitted BVN verification code differs from the issued one."""

    kind = "mismatch"
    status_code = 401
    default_message = "Invalid token"


class AlreadyVerifiedError(AccountError):
    """User has already completed BVN verification."""

    kind = "already_verified"
    status_code = 409
    default_message = "User is already verified"


class DeliveryError(AccountError):
    """Outbound message (email or SMS) could not be delivered."""

    kind = "delivery_error"
    status_code = 500
    default_message = "Message could not be sent"


class IdentityLookupError(AccountError):
    """External BVN lookup failed or rejected the identifier."""

    kind = "lookup_error"
    status_code = 400
    default_message = "Enter a valid BVN Number"


class StoreError(AccountError):
    """Persistence backend unavailable or failed."""

    kind = "store_error"
    status_code = 503
    default_message = "Storage unavailable"


class DuplicateError(StoreError):
    """Record already exists (unique constraint violation)."""

    kind = "duplicate"
    status_code = 400

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}={value} already exists")
