"""User data access layer (the credential store)."""

import logging
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from authcore.models import User
from authcore.services.exceptions import DuplicateError, NotFoundError, StoreError

logger = logging.getLogger(__name__)


class UserRepository:
    """Centralized user data access.

    Naming conventions:
    - find_* : Query that may return None
    - get_* : Query that raises NotFoundError if missing

    Every write commits, so a multi-field ``update`` lands atomically.
    Backend failures are rolled back and raised as ``StoreError``.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, user_id: str) -> User | None:
        """Find user by primary key."""
        try:
            return self._db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            raise self._store_error("find_by_id", e) from e

    def get_by_id(self, user_id: str) -> User:
        """Find user by primary key, raising NotFoundError if missing."""
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"No user with id {user_id}")
        return user

    def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive, exact match)."""
        try:
            return (
                self._db.query(User).filter(func.lower(User.email) == email.lower()).first()
            )
        except SQLAlchemyError as e:
            raise self._store_error("find_by_email", e) from e

    def find_by_reset_token(self, token_hash: str) -> User | None:
        """Find user holding the given reset-token hash."""
        try:
            return (
                self._db.query(User).filter(User.reset_password_token == token_hash).first()
            )
        except SQLAlchemyError as e:
            raise self._store_error("find_by_reset_token", e) from e

    def create(self, **fields: Any) -> User:
        """Insert a new user."""
        user = User(**fields)
        self._db.add(user)
        self._commit("create", email=fields.get("email"))
        self._db.refresh(user)
        logger.debug(f"Created user {user.id}")
        return user

    def update(self, user_id: str, **fields: Any) -> User:
        """Set the given fields on a user in a single commit."""
        user = self.get_by_id(user_id)
        for field, value in fields.items():
            if not hasattr(User, field):
                raise AttributeError(f"User has no field {field!r}")
            setattr(user, field, value)
        self._commit("update", email=fields.get("email"))
        return user

    def save(self, user: User) -> User:
        """Persist pending changes on an already-loaded user."""
        self._db.add(user)
        self._commit("save", email=user.email)
        return user

    def _commit(self, operation: str, email: str | None = None) -> None:
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            raise DuplicateError("User", "email", email or "") from e
        except SQLAlchemyError as e:
            raise self._store_error(operation, e) from e

    def _store_error(self, operation: str, error: Exception) -> StoreError:
        self._db.rollback()
        logger.error(f"User store {operation} failed: {error}")
        return StoreError()
