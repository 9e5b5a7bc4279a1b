"""Pydantic request/response schemas."""

from app.schemas.auth import SessionResponse, SignInRequest
from app.schemas.health import HealthResponse
from app.schemas.initiative import (
    CreateInitiativeRequest,
    DeleteInitiativeRequest,
    GetInitiativeRequest,
    Initiative,
    InitiativeCreate,
    InitiativeFields,
    InitiativeResponse,
    InitiativesResponse,
    InitiativeUpdate,
    UpdateInitiativeRequest,
)
from app.schemas.user import SecureUser, SessionUser, UsersListResponse

__all__ = [
    "CreateInitiativeRequest",
    "DeleteInitiativeRequest",
    "GetInitiativeRequest",
    "HealthResponse",
    "Initiative",
    "InitiativeCreate",
    "InitiativeFields",
    "InitiativeResponse",
    "InitiativesResponse",
    "InitiativeUpdate",
    "SecureUser",
    "SessionResponse",
    "SessionUser",
    "SignInRequest",
    "UpdateInitiativeRequest",
    "UsersListResponse",
]
