"""User projections returned by the user accessors (never the password)."""

from pydantic import Field

from app.schemas.base import CamelModel


class SecureUser(CamelModel):
    """User without password or secret, for listings."""

    id: str
    name: str
    email: str
    image: str | None = None
    roles: list[str] = Field(default_factory=list)
    permissions: list[str] = Field(default_factory=list)


class SessionUser(SecureUser):
    """User without password; carries the bearer secret the client sends as accessToken."""

    secret: str


class UsersListResponse(CamelModel):
    users: list[SecureUser]
