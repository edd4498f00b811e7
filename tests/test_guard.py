"""Unit tests for the two-stage access guard (authenticate, then authorize)."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

from app.core.config import Settings
from app.core.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    Unauthenticated,
    Unauthorized,
)
from app.core.guard import authenticate, authorize
from app.core.security import create_access_token
from app.models.user import Role
from app.schemas.auth import Identity


def _settings() -> Settings:
    return Settings(_env_file=None, JWT_SECRET="guard-secret", DATABASE_URL="sqlite://")


def _identity(role: Role = Role.USER) -> Identity:
    return Identity(id=3, username="bob", email="bob@example.com", role=role)


class TestAuthenticate(unittest.TestCase):
    """authenticate verifies the token and reloads the user from the store."""

    def setUp(self) -> None:
        self.settings = _settings()
        self.store = MagicMock()

    def test_missing_token(self) -> None:
        for token in (None, ""):
            with self.subTest(token=token):
                with self.assertRaises(Unauthenticated) as ctx:
                    authenticate(token, self.store, self.settings)
                self.assertIn("No token provided", ctx.exception.message)
        self.store.find_by_id.assert_not_called()

    def test_valid_token_loads_identity(self) -> None:
        stored = _identity()
        self.store.find_by_id.return_value = stored
        token = create_access_token(stored, self.settings)
        self.assertEqual(authenticate(token, self.store, self.settings), stored)
        self.store.find_by_id.assert_called_once_with(3)

    def test_user_removed_after_issue(self) -> None:
        self.store.find_by_id.return_value = None
        token = create_access_token(_identity(), self.settings)
        with self.assertRaises(Unauthenticated) as ctx:
            authenticate(token, self.store, self.settings)
        self.assertIn("User not found", ctx.exception.message)

    def test_expired_token(self) -> None:
        token = create_access_token(
            _identity(), self.settings, now=datetime.now(UTC) - timedelta(days=1)
        )
        with self.assertRaises(ExpiredTokenError):
            authenticate(token, self.store, self.settings)
        self.store.find_by_id.assert_not_called()

    def test_garbled_token(self) -> None:
        with self.assertRaises(InvalidTokenError):
            authenticate("garbled.token.value", self.store, self.settings)

    def test_expired_and_invalid_have_distinct_messages(self) -> None:
        self.assertNotEqual(ExpiredTokenError().message, InvalidTokenError().message)


class TestAuthorize(unittest.TestCase):
    """authorize enforces a fixed role set; 403 semantics, never 401."""

    def test_no_identity(self) -> None:
        with self.assertRaises(Unauthorized) as ctx:
            authorize(None, frozenset({Role.ADMIN}))
        self.assertEqual(ctx.exception.status_code, 403)

    def test_role_not_allowed_names_role(self) -> None:
        with self.assertRaises(Unauthorized) as ctx:
            authorize(_identity(Role.USER), frozenset({Role.ADMIN}))
        self.assertIn("'user'", ctx.exception.message)
        self.assertNotIsInstance(ctx.exception, Unauthenticated)

    def test_allowed_role_passes_identity_through(self) -> None:
        admin = _identity(Role.ADMIN)
        self.assertIs(authorize(admin, frozenset({Role.ADMIN})), admin)

    def test_multiple_allowed_roles(self) -> None:
        user = _identity(Role.USER)
        self.assertIs(authorize(user, frozenset({Role.USER, Role.ADMIN})), user)


if __name__ == "__main__":
    unittest.main()
