"""Tests for app.services.initiatives: validation, default image, and accessor round-trips."""

import unittest
from unittest.mock import MagicMock

from app.core.config import Settings
from app.repositories.table import TableAccessor
from app.schemas.initiative import InitiativeFields
from app.services.initiatives import (
    create_initiative,
    delete_initiative_by_id,
    get_all_initiatives,
    get_initiative_by_id,
    is_valid_initiative_data,
    resolve_image,
    update_initiative_by_id,
)
from tests._support import make_session_factory

SETTINGS = Settings(_env_file=None)


def _fields(name: str = "Hack Club", description: str = "Weekly hackathons", image: str | None = None) -> InitiativeFields:
    """Build fields without schema validation so out-of-bounds values reach the service."""
    return InitiativeFields.model_construct(name=name, description=description, image=image)


class TestIsValidInitiativeData(unittest.TestCase):
    def test_valid(self) -> None:
        self.assertTrue(is_valid_initiative_data(_fields(), SETTINGS))

    def test_missing_initiative(self) -> None:
        self.assertFalse(is_valid_initiative_data(None, SETTINGS))

    def test_name_bounds(self) -> None:
        self.assertFalse(is_valid_initiative_data(_fields(name=""), SETTINGS))
        self.assertTrue(is_valid_initiative_data(_fields(name="x" * 50), SETTINGS))
        self.assertFalse(is_valid_initiative_data(_fields(name="x" * 51), SETTINGS))

    def test_description_bounds(self) -> None:
        self.assertFalse(is_valid_initiative_data(_fields(description=""), SETTINGS))
        self.assertTrue(is_valid_initiative_data(_fields(description="d" * 100), SETTINGS))
        self.assertFalse(is_valid_initiative_data(_fields(description="d" * 101), SETTINGS))

    def test_respects_configured_bounds(self) -> None:
        strict = Settings(_env_file=None, INITIATIVE_NAME_MIN_LENGTH=5, INITIATIVE_NAME_MAX_LENGTH=10)
        self.assertFalse(is_valid_initiative_data(_fields(name="Hack"), strict))
        self.assertTrue(is_valid_initiative_data(_fields(name="Hack Club"), strict))


class TestResolveImage(unittest.TestCase):
    def test_missing_or_blank_uses_default(self) -> None:
        self.assertEqual(resolve_image(None, SETTINGS), SETTINGS.INITIATIVE_DEFAULT_IMAGE)
        self.assertEqual(resolve_image("", SETTINGS), SETTINGS.INITIATIVE_DEFAULT_IMAGE)
        self.assertEqual(resolve_image("   ", SETTINGS), SETTINGS.INITIATIVE_DEFAULT_IMAGE)

    def test_given_image_is_kept(self) -> None:
        self.assertEqual(resolve_image("/images/hack.png", SETTINGS), "/images/hack.png")


class TestInvalidDataNeverReachesStorage(unittest.TestCase):
    def test_create_skips_accessor(self) -> None:
        accessor = MagicMock()
        self.assertIsNone(create_initiative(accessor, "i-1", _fields(name="x" * 51), SETTINGS))
        accessor.create.assert_not_called()

    def test_update_skips_accessor(self) -> None:
        accessor = MagicMock()
        self.assertIsNone(update_initiative_by_id(accessor, "i-1", _fields(description=""), SETTINGS))
        accessor.update.assert_not_called()


class TestInitiativeRoundTrip(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.accessor = TableAccessor(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_create_then_fetch_uses_default_image(self) -> None:
        created = create_initiative(self.accessor, "i-1", _fields(), SETTINGS)
        self.assertIsNotNone(created)
        fetched = get_initiative_by_id(self.accessor, created.id)
        self.assertEqual(fetched.name, "Hack Club")
        self.assertEqual(fetched.description, "Weekly hackathons")
        self.assertEqual(fetched.image, SETTINGS.INITIATIVE_DEFAULT_IMAGE)

    def test_update_replaces_all_fields(self) -> None:
        create_initiative(self.accessor, "i-1", _fields(image="/a.png"), SETTINGS)
        fetched = get_initiative_by_id(self.accessor, "i-1")
        updated = update_initiative_by_id(
            self.accessor,
            "i-1",
            _fields(name="Hack Club 2", description=fetched.description, image=None),
            SETTINGS,
        )
        self.assertEqual(updated.name, "Hack Club 2")
        self.assertEqual(updated.description, "Weekly hackathons")
        self.assertEqual(updated.image, SETTINGS.INITIATIVE_DEFAULT_IMAGE)

    def test_update_missing_returns_none(self) -> None:
        self.assertIsNone(update_initiative_by_id(self.accessor, "missing", _fields(), SETTINGS))

    def test_list_and_delete(self) -> None:
        create_initiative(self.accessor, "i-1", _fields(name="One"), SETTINGS)
        create_initiative(self.accessor, "i-2", _fields(name="Two"), SETTINGS)
        self.assertEqual({i.id for i in get_all_initiatives(self.accessor)}, {"i-1", "i-2"})

        deleted = delete_initiative_by_id(self.accessor, "i-1")
        self.assertEqual(deleted.name, "One")
        self.assertIsNone(get_initiative_by_id(self.accessor, "i-1"))
        self.assertIsNone(delete_initiative_by_id(self.accessor, "i-1"))


if __name__ == "__main__":
    unittest.main()
