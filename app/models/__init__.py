"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.initiative import Initiative
from app.models.user import User

__all__ = ["Base", "Initiative", "User"]
