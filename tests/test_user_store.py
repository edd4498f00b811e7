"""Integration tests for UserStore against an in-memory SQLite database."""

import unittest

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.database import build_engine, build_session_factory
from app.models import Base, Role
from app.services.user_store import DuplicateIdentityError, UserStore


class UserStoreTestCase(unittest.TestCase):
    def setUp(self) -> None:
        settings = Settings(_env_file=None, DATABASE_URL="sqlite://")
        self.engine = build_engine(settings)
        Base.metadata.create_all(self.engine)
        self.db: Session = build_session_factory(self.engine)()
        self.store = UserStore(self.db)

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def _create(self, username: str = "alice", email: str = "alice@example.com", role: Role = Role.USER):
        return self.store.create(username, email, "$2b$10$hash-" + username, role)


class TestCreateAndFind(UserStoreTestCase):
    """create persists a row; find_* return projections with or without the hash."""

    def test_create_sets_id_role_and_timestamps(self) -> None:
        identity = self._create()
        self.assertIsInstance(identity.id, int)
        self.assertEqual(identity.role, Role.USER)
        self.assertIsNotNone(identity.created_at)
        self.assertIsNotNone(identity.updated_at)

    def test_find_by_id_excludes_password(self) -> None:
        created = self._create()
        found = self.store.find_by_id(created.id)
        self.assertEqual(found.username, "alice")
        self.assertFalse(hasattr(found, "password"))
        self.assertIsNone(self.store.find_by_id(created.id + 100))

    def test_find_by_username_includes_password(self) -> None:
        self._create()
        creds = self.store.find_by_username("alice")
        self.assertEqual(creds.password, "$2b$10$hash-alice")
        self.assertIsNone(self.store.find_by_username("ALICE"))

    def test_find_by_username_or_email(self) -> None:
        self._create()
        self.assertIsNotNone(self.store.find_by_username_or_email("alice", "x@example.com"))
        self.assertIsNotNone(self.store.find_by_username_or_email("x", "alice@example.com"))
        self.assertIsNone(self.store.find_by_username_or_email("x", "x@example.com"))

    def test_duplicate_username_raises_and_session_stays_usable(self) -> None:
        self._create()
        with self.assertRaises(DuplicateIdentityError):
            self._create(email="another@example.com")
        with self.assertRaises(DuplicateIdentityError):
            self._create(username="another")
        self._create("bob", "bob@example.com")
        self.assertEqual([u.username for u in self.store.find_all()], ["alice", "bob"])

    def test_find_all_excludes_password(self) -> None:
        self._create()
        self._create("root", "root@example.com", Role.ADMIN)
        users = self.store.find_all()
        self.assertEqual([u.role for u in users], [Role.USER, Role.ADMIN])
        for user in users:
            self.assertNotIn("password", user.model_dump())


class TestUpdateAndDelete(UserStoreTestCase):
    """update_by_id / delete_by_id report affected row counts."""

    def test_update_reports_one_row(self) -> None:
        created = self._create()
        self.assertEqual(self.store.update_by_id(created.id, {"email": "new@example.com"}), 1)
        self.assertEqual(self.store.find_by_id(created.id).email, "new@example.com")
        self.assertEqual(self.store.find_by_id(created.id).username, "alice")

    def test_update_missing_row_reports_zero(self) -> None:
        self.assertEqual(self.store.update_by_id(999, {"username": "ghost"}), 0)

    def test_update_into_existing_email_raises(self) -> None:
        self._create()
        bob = self._create("bob", "bob@example.com")
        with self.assertRaises(DuplicateIdentityError):
            self.store.update_by_id(bob.id, {"email": "alice@example.com"})
        self.assertEqual(self.store.find_by_id(bob.id).email, "bob@example.com")

    def test_update_rejects_role_changes(self) -> None:
        created = self._create()
        with self.assertRaises(ValueError):
            self.store.update_by_id(created.id, {"role": Role.ADMIN})

    def test_delete_reports_counts(self) -> None:
        created = self._create()
        self.assertEqual(self.store.delete_by_id(created.id), 1)
        self.assertEqual(self.store.delete_by_id(created.id), 0)
        self.assertIsNone(self.store.find_by_id(created.id))


if __name__ == "__main__":
    unittest.main()
