"""Account rules: registration, login, profile changes and user listing."""

import logging
from typing import TYPE_CHECKING, Any

from app.core.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from app.core.security import (
    PASSWORD_MIN_LEN,
    create_access_token,
    hash_password,
    verify_password,
)
from app.models.user import USERNAME_MAX_LEN, Role
from app.schemas.auth import Identity, Profile
from app.services.user_store import DuplicateIdentityError, IdentityStore

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

REGISTRATION_CONFLICT_MESSAGE = "Username or Email is already registered"
UPDATE_CONFLICT_MESSAGE = "Username or email is already in use."


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _validate_username(username: str) -> None:
    if len(username) > USERNAME_MAX_LEN:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LEN} characters long.")


class AccountService:
    """
    Business rules for accounts. Trusts its caller for authorization: the
    identity passed to profile operations and the right to call list_all are
    established by the access guard.
    """

    def __init__(self, store: IdentityStore, settings: "Settings") -> None:
        self.store = store
        self.settings = settings

    def register(self, username: str | None, email: str | None, password: str | None) -> None:
        """
        Create a user with role 'user'. Does not say which of username/email
        collided, and returns nothing: the caller logs in separately.
        """
        if _is_blank(username) or _is_blank(email) or _is_blank(password):
            raise ValidationError("All fields are required")
        username = username.strip()
        _validate_username(username)
        email = email.strip().lower()

        if self.store.find_by_username_or_email(username, email) is not None:
            raise ConflictError(REGISTRATION_CONFLICT_MESSAGE)

        password_hash = hash_password(password)
        try:
            identity = self.store.create(username, email, password_hash, Role.USER)
        except DuplicateIdentityError as e:
            # Lost a race with a concurrent registration; the unique constraint caught it.
            raise ConflictError(REGISTRATION_CONFLICT_MESSAGE) from e
        logger.info("Registered user id=%s", identity.id)

    def login(self, username: str | None, password: str | None) -> str:
        """Check credentials and return a signed session token."""
        if not username or not password:
            raise ValidationError("All fields are required")

        user = self.store.find_by_username(username)
        if user is None:
            logger.info("Login failed: user not found")
            raise InvalidCredentialsError("user not found")
        if not verify_password(password, user.password):
            logger.info("Login failed: password incorrect for user id=%s", user.id)
            raise InvalidCredentialsError("password incorrect")

        token = create_access_token(user, self.settings)
        logger.info("Login succeeded for user id=%s", user.id)
        return token

    def get_profile(self, identity: Identity) -> Profile:
        return Profile.model_validate(identity)

    def update_profile(
        self,
        identity: Identity,
        username: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> Profile:
        """Change only the supplied fields; returns the updated profile."""
        fields: dict[str, Any] = {}
        # "" means "not supplied"; whitespace-only values are rejected.
        for name, value in (("username", username), ("email", email), ("password", password)):
            if value and not value.strip():
                raise ValidationError(f"{name.capitalize()} must not be blank.")
        if username:
            username = username.strip()
            _validate_username(username)
            fields["username"] = username
        if email:
            fields["email"] = email.strip().lower()
        if password:
            if len(password) < PASSWORD_MIN_LEN:
                raise ValidationError(
                    f"New password must be at least {PASSWORD_MIN_LEN} characters long."
                )
            fields["password"] = hash_password(password)
        if not fields:
            raise ValidationError("No fields to update")

        try:
            affected = self.store.update_by_id(identity.id, fields)
        except DuplicateIdentityError as e:
            raise ConflictError(UPDATE_CONFLICT_MESSAGE) from e
        if affected == 0:
            raise NotFoundError("User not found or no changes applied.")

        updated = self.store.find_by_id(identity.id)
        if updated is None:
            raise NotFoundError("User not found.")
        logger.info("Updated profile for user id=%s fields=%s", identity.id, sorted(fields))
        return Profile.model_validate(updated)

    def delete_profile(self, identity: Identity) -> None:
        deleted = self.store.delete_by_id(identity.id)
        if deleted == 0:
            raise NotFoundError("User not found.")
        logger.info("Deleted user id=%s", identity.id)

    def list_all(self) -> list[Identity]:
        """Every user, without password hashes. Admin-only at the route level."""
        return self.store.find_all()
