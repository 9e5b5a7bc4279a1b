"""Request/response schemas for session endpoints."""

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.user import SessionUser


class SignInRequest(CamelModel):
    """Credentials for the legacy email/password sign-in."""

    email: str = Field(..., min_length=3, max_length=255, description="Email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class SessionResponse(CamelModel):
    """The signed-in user, looked up fresh on every request."""

    user: SessionUser
