"""
Initiative RPC procedures.

Every procedure answers HTTP 200 with a {success, initiative|initiatives}
envelope once the body has validated. Mutations resolve the caller from
accessToken (matched against User.secret) and require the ADMIN permission;
unknown tokens, missing permissions and storage failures all produce
{success: false, initiative: null}.
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.deps import get_accessor
from app.core.config import get_settings
from app.core.permissions import Permission, has_permissions
from app.repositories.table import RecordNotFoundError, TableAccessor
from app.schemas.initiative import (
    CreateInitiativeRequest,
    DeleteInitiativeRequest,
    GetInitiativeRequest,
    InitiativeResponse,
    InitiativesResponse,
    UpdateInitiativeRequest,
)
from app.services import initiatives as initiative_service
from app.services.users import get_user_by_secret_no_password

logger = logging.getLogger(__name__)

router = APIRouter()


def _failure() -> InitiativeResponse:
    return InitiativeResponse(success=False, initiative=None)


def _reject(procedure: str, reason: str, **extra: str) -> InitiativeResponse:
    logger.info(
        "RPC call rejected",
        extra={"procedure": procedure, "reason": reason, **extra},
    )
    return _failure()


def _authorize_admin(
    accessor: TableAccessor, access_token: str, procedure: str
) -> InitiativeResponse | None:
    """Return a failure envelope when the caller may not mutate initiatives, else None."""
    user = get_user_by_secret_no_password(accessor, access_token)
    if user is None:
        error = accessor.last_error
        if error is not None and not isinstance(error, RecordNotFoundError):
            return _reject(procedure, "user_lookup_failed", error_kind=error.kind)
        return _reject(procedure, "unknown_access_token")
    if not has_permissions(user, [Permission.ADMIN]):
        return _reject(procedure, "missing_permission", user_id=user.id)
    return None


@router.post("/createInitiative", response_model=InitiativeResponse)
def create_initiative(
    body: CreateInitiativeRequest,
    accessor: Annotated[TableAccessor, Depends(get_accessor)],
) -> InitiativeResponse:
    """
    Add an initiative. Uses the client-supplied id when present, otherwise a new
    UUID4; a blank image becomes the configured default image.
    """
    denied = _authorize_admin(accessor, body.access_token, "createInitiative")
    if denied is not None:
        return denied

    initiative_id = body.initiative.id or str(uuid.uuid4())
    created = initiative_service.create_initiative(
        accessor, initiative_id, body.initiative, get_settings()
    )
    if created is None:
        return _reject("createInitiative", "persistence_failed", initiative_id=initiative_id)
    return InitiativeResponse(success=True, initiative=created)


@router.post("/deleteInitiative", response_model=InitiativeResponse)
def delete_initiative(
    body: DeleteInitiativeRequest,
    accessor: Annotated[TableAccessor, Depends(get_accessor)],
) -> InitiativeResponse:
    """Delete an initiative and return it as it was."""
    denied = _authorize_admin(accessor, body.access_token, "deleteInitiative")
    if denied is not None:
        return denied

    deleted = initiative_service.delete_initiative_by_id(accessor, body.id)
    if deleted is None:
        return _reject("deleteInitiative", "persistence_failed", initiative_id=body.id)
    return InitiativeResponse(success=True, initiative=deleted)


@router.post("/updateInitiative", response_model=InitiativeResponse)
def update_initiative(
    body: UpdateInitiativeRequest,
    accessor: Annotated[TableAccessor, Depends(get_accessor)],
) -> InitiativeResponse:
    """Replace name, description and image of an initiative."""
    denied = _authorize_admin(accessor, body.access_token, "updateInitiative")
    if denied is not None:
        return denied

    updated = initiative_service.update_initiative_by_id(
        accessor, body.initiative.id, body.initiative, get_settings()
    )
    if updated is None:
        return _reject("updateInitiative", "persistence_failed", initiative_id=body.initiative.id)
    return InitiativeResponse(success=True, initiative=updated)


@router.post("/getAllInitiatives", response_model=InitiativesResponse)
def get_all_initiatives(
    accessor: Annotated[TableAccessor, Depends(get_accessor)],
) -> InitiativesResponse:
    """List every initiative. No authentication required."""
    initiatives = initiative_service.get_all_initiatives(accessor)
    return InitiativesResponse(success=True, initiatives=initiatives)


@router.post("/getInitiative", response_model=InitiativeResponse)
def get_initiative(
    body: GetInitiativeRequest,
    accessor: Annotated[TableAccessor, Depends(get_accessor)],
) -> InitiativeResponse:
    """Fetch one initiative by id. No authentication required."""
    initiative = initiative_service.get_initiative_by_id(accessor, body.id)
    if initiative is None:
        return _failure()
    return InitiativeResponse(success=True, initiative=initiative)
