"""Shared route dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.repositories.table import TableAccessor


def get_accessor(db: Annotated[Session, Depends(get_db)]) -> TableAccessor:
    """Table accessor bound to the request's session."""
    return TableAccessor(db)
