"""Request/response schemas for the initiative RPC procedures."""

from datetime import datetime

from pydantic import Field

from app.core.config import settings
from app.schemas.base import CamelModel


class InitiativeFields(CamelModel):
    """Editable initiative fields with the configured length bounds."""

    name: str = Field(
        ...,
        min_length=settings.INITIATIVE_NAME_MIN_LENGTH,
        max_length=settings.INITIATIVE_NAME_MAX_LENGTH,
        description="Display name",
    )
    description: str = Field(
        ...,
        min_length=settings.INITIATIVE_DESCRIPTION_MIN_LENGTH,
        max_length=settings.INITIATIVE_DESCRIPTION_MAX_LENGTH,
        description="Short description shown on the card",
    )
    image: str | None = Field(
        default=None,
        description="Image URL or path; blank means the default image",
    )


class InitiativeCreate(InitiativeFields):
    """Payload for createInitiative; the server generates an id when none is given."""

    id: str | None = Field(default=None, max_length=36)


class InitiativeUpdate(InitiativeFields):
    """Payload for updateInitiative: a full replace of name, description and image."""

    id: str = Field(..., min_length=1, max_length=36)


class Initiative(CamelModel):
    """Persisted initiative as returned to clients."""

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    name: str
    description: str
    image: str


class CreateInitiativeRequest(CamelModel):
    access_token: str
    initiative: InitiativeCreate


class UpdateInitiativeRequest(CamelModel):
    access_token: str
    initiative: InitiativeUpdate


class DeleteInitiativeRequest(CamelModel):
    access_token: str
    id: str


class GetInitiativeRequest(CamelModel):
    id: str


class InitiativeResponse(CamelModel):
    """Envelope for single-initiative procedures; initiative is null whenever success is false."""

    success: bool
    initiative: Initiative | None = None


class InitiativesResponse(CamelModel):
    success: bool
    initiatives: list[Initiative]
