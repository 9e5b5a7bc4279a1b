"""Initiative accessors and validation."""

import logging
from typing import TYPE_CHECKING

from app.repositories.table import Table, TableAccessor
from app.schemas.initiative import Initiative, InitiativeFields

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)


def is_valid_initiative_data(initiative: InitiativeFields | None, settings: "Settings") -> bool:
    """
    Check name and description against the configured length bounds.

    Invalid when the initiative is missing, or its name/description is empty,
    shorter than the min, or longer than the max.
    """
    if initiative is None:
        return False

    name = initiative.name
    if (
        not name
        or len(name) > settings.INITIATIVE_NAME_MAX_LENGTH
        or len(name) < settings.INITIATIVE_NAME_MIN_LENGTH
    ):
        return False

    description = initiative.description
    if (
        not description
        or len(description) > settings.INITIATIVE_DESCRIPTION_MAX_LENGTH
        or len(description) < settings.INITIATIVE_DESCRIPTION_MIN_LENGTH
    ):
        return False

    return True


def resolve_image(image: str | None, settings: "Settings") -> str:
    """Blank or missing image falls back to the configured default image."""
    if image is None or not image.strip():
        return settings.INITIATIVE_DEFAULT_IMAGE
    return image


def get_all_initiatives(accessor: TableAccessor) -> list[Initiative]:
    rows = accessor.find_many(Table.INITIATIVE, {"order_by": ["created_at"]})
    return [Initiative.model_validate(row) for row in rows]


def get_initiative_by_id(accessor: TableAccessor, initiative_id: str) -> Initiative | None:
    row = accessor.find_one(Table.INITIATIVE, {"where": {"id": initiative_id}})
    return Initiative.model_validate(row) if row is not None else None


def delete_initiative_by_id(accessor: TableAccessor, initiative_id: str) -> Initiative | None:
    row = accessor.delete(Table.INITIATIVE, {"where": {"id": initiative_id}})
    return Initiative.model_validate(row) if row is not None else None


def create_initiative(
    accessor: TableAccessor,
    initiative_id: str,
    fields: InitiativeFields,
    settings: "Settings",
) -> Initiative | None:
    """Store a new initiative under initiative_id. Returns None if invalid or not stored."""
    if not is_valid_initiative_data(fields, settings):
        logger.info("Rejected invalid initiative before create", extra={"initiative_id": initiative_id})
        return None
    row = accessor.create(
        Table.INITIATIVE,
        {
            "data": {
                "id": initiative_id,
                "name": fields.name,
                "description": fields.description,
                "image": resolve_image(fields.image, settings),
            }
        },
    )
    return Initiative.model_validate(row) if row is not None else None


def update_initiative_by_id(
    accessor: TableAccessor,
    initiative_id: str,
    fields: InitiativeFields,
    settings: "Settings",
) -> Initiative | None:
    """Replace name, description and image of an existing initiative."""
    if not is_valid_initiative_data(fields, settings):
        logger.info("Rejected invalid initiative before update", extra={"initiative_id": initiative_id})
        return None
    row = accessor.update(
        Table.INITIATIVE,
        {
            "where": {"id": initiative_id},
            "data": {
                "name": fields.name,
                "description": fields.description,
                "image": resolve_image(fields.image, settings),
            },
        },
    )
    return Initiative.model_validate(row) if row is not None else None
