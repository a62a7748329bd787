"""User model for authentication and verification state."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from authcore.database import Base

ROLE_USER = "user"
ROLE_PUBLISHER = "publisher"
ROLES = (ROLE_USER, ROLE_PUBLISHER)


class User(Base):
    """User record.

    Owns every secret tied to the account: the bcrypt password hash, the
    SHA-256 hash of a pending reset token and the SHA-256 hash of the pending
    BVN verification code, each with its expiry.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    first_name: Mapped[str] = mapped_column(String(100))
    last_name: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default=ROLE_USER)
    phone: Mapped[str | None] = mapped_column(String(32))

    # Password reset (SHA-256 hex of the emailed token)
    reset_password_token: Mapped[str | None] = mapped_column(String(64), index=True)
    reset_password_expire: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    # BVN verification (SHA-256 hex of the SMS code)
    bvn_code_hash: Mapped[str | None] = mapped_column(String(64))
    bvn_code_expire: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
