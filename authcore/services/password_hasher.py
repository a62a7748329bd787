"""Password hashing with bcrypt."""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# Pre-computed bcrypt hash for timing-consistent password verification
# Used when user doesn't exist to prevent email enumeration via timing attacks
_DUMMY_HASH = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.VTtYA9dWQ6E3Ky"

# bcrypt only accepts this many bytes of input
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    """Whether the UTF-8 encoding of a password exceeds what bcrypt accepts."""
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def get_dummy_hash() -> str:
    """Get a dummy password hash for timing-consistent verification."""
    return _DUMMY_HASH


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against its hash."""
    if password_too_long(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False
