"""Identity store: user table access behind a small storage-agnostic protocol."""

import logging
from typing import Any, Protocol

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Role, User
from app.schemas.auth import Identity, IdentityCredentials

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"username", "email", "password"})


class DuplicateIdentityError(Exception):
    """Raised when an insert or update violates the username/email unique constraints."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class IdentityStore(Protocol):
    """Operations the account service needs from user storage."""

    def find_by_username_or_email(self, username: str, email: str) -> Identity | None: ...

    def find_by_id(self, user_id: int) -> Identity | None: ...

    def find_by_username(self, username: str) -> IdentityCredentials | None: ...

    def create(self, username: str, email: str, password_hash: str, role: Role) -> Identity: ...

    def update_by_id(self, user_id: int, fields: dict[str, Any]) -> int: ...

    def delete_by_id(self, user_id: int) -> int: ...

    def find_all(self) -> list[Identity]: ...


class UserStore:
    """SQLAlchemy-backed IdentityStore. Commits on every write."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_username_or_email(self, username: str, email: str) -> Identity | None:
        user = (
            self.db.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        return Identity.model_validate(user) if user is not None else None

    def find_by_id(self, user_id: int) -> Identity | None:
        """Load a user by primary key, without the password hash."""
        user = self.db.query(User).filter(User.id == user_id).first()
        return Identity.model_validate(user) if user is not None else None

    def find_by_username(self, username: str) -> IdentityCredentials | None:
        """Load a user by exact username, including the password hash."""
        user = self.db.query(User).filter(User.username == username).first()
        return IdentityCredentials.model_validate(user) if user is not None else None

    def create(self, username: str, email: str, password_hash: str, role: Role) -> Identity:
        user = User(username=username, email=email, password=password_hash, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateIdentityError("Username or email already exists.", cause=e) from e
        self.db.refresh(user)
        return Identity.model_validate(user)

    def update_by_id(self, user_id: int, fields: dict[str, Any]) -> int:
        """Apply fields to the user row; return the number of rows affected."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
        try:
            affected = (
                self.db.query(User)
                .filter(User.id == user_id)
                .update(fields, synchronize_session=False)
            )
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateIdentityError("Username or email already exists.", cause=e) from e
        return affected

    def delete_by_id(self, user_id: int) -> int:
        """Delete the user row; return the number of rows affected."""
        deleted = (
            self.db.query(User)
            .filter(User.id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted

    def find_all(self) -> list[Identity]:
        users = self.db.query(User).order_by(User.id).all()
        return [Identity.model_validate(u) for u in users]
