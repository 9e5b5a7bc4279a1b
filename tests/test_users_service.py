"""Tests for app.services.users projections."""

import unittest
from unittest.mock import MagicMock

from app.repositories.table import TableAccessor
from app.services.users import (
    get_all_users_secure,
    get_user_by_email_no_password,
    get_user_by_secret_no_password,
)
from tests._support import ADMIN_SECRET, add_user, make_session_factory, seed_users


class TestUserLookups(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        seed_users(self.db)
        add_user(self.db, "pw@example.com", "pw-secret", ["DEFAULT"], password="$2b$12$hash")
        self.accessor = TableAccessor(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_secure_listing_hides_password_and_secret(self) -> None:
        users = get_all_users_secure(self.accessor)
        self.assertEqual(len(users), 3)
        for user in users:
            dumped = user.model_dump()
            self.assertNotIn("password", dumped)
            self.assertNotIn("secret", dumped)

    def test_lookup_by_secret(self) -> None:
        user = get_user_by_secret_no_password(self.accessor, ADMIN_SECRET)
        self.assertEqual(user.email, "admin@example.com")
        self.assertEqual(user.secret, ADMIN_SECRET)
        self.assertEqual(user.permissions, ["ADMIN"])
        self.assertNotIn("password", user.model_dump())

    def test_lookup_by_unknown_secret(self) -> None:
        self.assertIsNone(get_user_by_secret_no_password(self.accessor, "not-a-secret"))

    def test_lookup_by_email(self) -> None:
        user = get_user_by_email_no_password(self.accessor, "pw@example.com")
        self.assertEqual(user.secret, "pw-secret")
        self.assertNotIn("password", user.model_dump())

    def test_lookup_by_email_ignores_case(self) -> None:
        user = get_user_by_email_no_password(self.accessor, "PW@Example.com")
        self.assertEqual(user.email, "pw@example.com")

    def test_empty_secret_skips_lookup(self) -> None:
        accessor = MagicMock()
        self.assertIsNone(get_user_by_secret_no_password(accessor, ""))
        accessor.find_one.assert_not_called()


if __name__ == "__main__":
    unittest.main()
