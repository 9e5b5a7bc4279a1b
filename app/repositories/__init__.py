"""Data access over the ORM models."""

from app.repositories.table import (
    BackendUnavailableError,
    ConstraintViolationError,
    InvalidQueryError,
    QueryOptions,
    RecordNotFoundError,
    RepositoryError,
    Table,
    TableAccessor,
)

__all__ = [
    "BackendUnavailableError",
    "ConstraintViolationError",
    "InvalidQueryError",
    "QueryOptions",
    "RecordNotFoundError",
    "RepositoryError",
    "Table",
    "TableAccessor",
]
