"""
Generic table accessor: the same five CRUD shapes over every ORM table.

Tables are a closed enum rather than free-form names. The public methods never
raise: a failed call returns [] or None, logs the classified error, and leaves
it on `last_error` for callers that need to tell "not found" from "database
down".
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, TypedDict

from sqlalchemy import inspect, select as sa_select
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.orm import Session

from app.models import Base, Initiative, User

logger = logging.getLogger(__name__)


class Table(str, Enum):
    """Tables reachable through the accessor."""

    USER = "user"
    INITIATIVE = "initiative"


MODELS: dict[Table, type[Base]] = {
    Table.USER: User,
    Table.INITIATIVE: Initiative,
}


class QueryOptions(TypedDict, total=False):
    """
    where: equality filters, attribute name -> value.
    select: projection, attribute name -> include flag.
    data: values for create/update.
    order_by: attribute names; a leading '-' sorts descending.
    """

    where: dict[str, Any]
    select: dict[str, bool]
    data: dict[str, Any]
    order_by: list[str]


class RepositoryError(Exception):
    """Base class for classified accessor failures."""

    kind = "error"

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class RecordNotFoundError(RepositoryError):
    kind = "not_found"


class InvalidQueryError(RepositoryError):
    """Unknown table or attribute, or options that do not fit the operation."""

    kind = "invalid_query"


class ConstraintViolationError(RepositoryError):
    kind = "constraint_violation"


class BackendUnavailableError(RepositoryError):
    kind = "backend_unavailable"


def _translate(exc: SQLAlchemyError) -> RepositoryError:
    if isinstance(exc, IntegrityError):
        return ConstraintViolationError("Constraint violated.", cause=exc)
    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError)):
        return BackendUnavailableError("Database is unreachable.", cause=exc)
    return RepositoryError(f"Database error: {type(exc).__name__}", cause=exc)


def _columns(model: type[Base]) -> set[str]:
    return {attr.key for attr in inspect(model).column_attrs}


def _check_fields(model: type[Base], fields: dict[str, Any] | None, part: str) -> None:
    if not fields:
        return
    unknown = sorted(set(fields) - _columns(model))
    if unknown:
        raise InvalidQueryError(
            f"Unknown {part} field(s) for {model.__tablename__}: {', '.join(unknown)}"
        )


def _checked_options(options: Any) -> QueryOptions:
    """Reject options whose parts have the wrong shape before they reach the ORM."""
    if options is None:
        return {}
    if not isinstance(options, dict):
        raise InvalidQueryError(f"Options must be a mapping, got {type(options).__name__}")
    for part in ("where", "select", "data"):
        value = options.get(part)
        if value is not None and not isinstance(value, dict):
            raise InvalidQueryError(f"Option {part!r} must be a mapping, got {type(value).__name__}")
    order_by = options.get("order_by")
    if order_by is not None and (
        not isinstance(order_by, (list, tuple))
        or not all(isinstance(field, str) for field in order_by)
    ):
        raise InvalidQueryError("Option 'order_by' must be a list of field names")
    return options


def to_record(obj: Base, projection: dict[str, bool] | None = None) -> dict[str, Any]:
    """
    Convert an ORM row to a dict keyed by attribute name.

    With a projection, fields set to True are the only ones returned when any
    is True; fields set to False are always dropped.
    """
    row = {key: getattr(obj, key) for key in _columns(type(obj))}
    if not projection:
        return row
    included = [key for key, wanted in projection.items() if wanted]
    if included:
        return {key: row[key] for key in included}
    return {key: value for key, value in row.items() if projection.get(key, True)}


class TableAccessor:
    """CRUD façade over a request-scoped Session."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.last_error: RepositoryError | None = None

    def find_many(
        self, table: Table | str, options: QueryOptions | None = None
    ) -> list[dict[str, Any]]:
        """Return every row matching options['where']; [] on failure."""
        self.last_error = None
        try:
            return self._find_many(table, options)
        except RepositoryError as e:
            self._record_failure(table, "find_many", e)
            return []

    def find_one(
        self, table: Table | str, options: QueryOptions | None = None
    ) -> dict[str, Any] | None:
        """Return the first matching row, or None."""
        self.last_error = None
        try:
            return self._find_one(table, options)
        except RepositoryError as e:
            self._record_failure(table, "find_one", e)
            return None

    def create(self, table: Table | str, options: QueryOptions) -> dict[str, Any] | None:
        """Insert options['data'] and return the stored row, or None."""
        self.last_error = None
        try:
            return self._create(table, options)
        except RepositoryError as e:
            self._record_failure(table, "create", e)
            return None

    def update(self, table: Table | str, options: QueryOptions) -> dict[str, Any] | None:
        """Apply options['data'] to the single row matching options['where']."""
        self.last_error = None
        try:
            return self._update(table, options)
        except RepositoryError as e:
            self._record_failure(table, "update", e)
            return None

    def delete(self, table: Table | str, options: QueryOptions) -> dict[str, Any] | None:
        """Remove the single row matching options['where'] and return it as it was."""
        self.last_error = None
        try:
            return self._delete(table, options)
        except RepositoryError as e:
            self._record_failure(table, "delete", e)
            return None

    def _record_failure(self, table: Table | str, operation: str, error: RepositoryError) -> None:
        self.last_error = error
        log_extra = {
            "table": getattr(table, "value", table),
            "operation": operation,
            "error_kind": error.kind,
        }
        if isinstance(error, RecordNotFoundError):
            logger.debug("Table access found no row", extra=log_extra)
        else:
            log_extra["reason"] = error.message[:200]
            logger.warning("Table access failed", extra=log_extra)

    @contextmanager
    def _guard(self) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            raise _translate(e) from e

    def _model(self, table: Table | str) -> type[Base]:
        try:
            return MODELS[Table(table)]
        except ValueError as e:
            raise InvalidQueryError(f"Unknown table {table!r}", cause=e) from e

    def _statement(self, model: type[Base], options: QueryOptions):
        where = options.get("where") or {}
        _check_fields(model, where, "where")
        _check_fields(model, options.get("select"), "select")
        stmt = sa_select(model).filter_by(**where)
        for field in options.get("order_by") or []:
            descending = field.startswith("-")
            name = field.lstrip("-")
            _check_fields(model, {name: None}, "order_by")
            column = getattr(model, name)
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        return stmt

    def _single(self, model: type[Base], options: QueryOptions) -> Base:
        if not options.get("where"):
            raise InvalidQueryError("A where clause is required to target a single row.")
        rows = self.db.scalars(self._statement(model, options).limit(2)).all()
        if not rows:
            raise RecordNotFoundError(f"No {model.__tablename__} row matches the where clause.")
        if len(rows) > 1:
            raise InvalidQueryError("The where clause matches more than one row.")
        return rows[0]

    def _find_many(self, table: Table | str, options: QueryOptions) -> list[dict[str, Any]]:
        model = self._model(table)
        options = _checked_options(options)
        with self._guard():
            rows = self.db.scalars(self._statement(model, options)).all()
            return [to_record(row, options.get("select")) for row in rows]

    def _find_one(self, table: Table | str, options: QueryOptions) -> dict[str, Any] | None:
        model = self._model(table)
        options = _checked_options(options)
        with self._guard():
            row = self.db.scalars(self._statement(model, options).limit(1)).first()
            if row is None:
                raise RecordNotFoundError(f"No {model.__tablename__} row matches the where clause.")
            return to_record(row, options.get("select"))

    def _create(self, table: Table | str, options: QueryOptions) -> dict[str, Any]:
        model = self._model(table)
        options = _checked_options(options)
        data = options.get("data") or {}
        _check_fields(model, data, "data")
        _check_fields(model, options.get("select"), "select")
        with self._guard():
            row = model(**data)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return to_record(row, options.get("select"))

    def _update(self, table: Table | str, options: QueryOptions) -> dict[str, Any]:
        model = self._model(table)
        options = _checked_options(options)
        data = options.get("data") or {}
        _check_fields(model, data, "data")
        with self._guard():
            row = self._single(model, options)
            for key, value in data.items():
                setattr(row, key, value)
            self.db.commit()
            self.db.refresh(row)
            return to_record(row, options.get("select"))

    def _delete(self, table: Table | str, options: QueryOptions) -> dict[str, Any]:
        model = self._model(table)
        options = _checked_options(options)
        with self._guard():
            row = self._single(model, options)
            record = to_record(row, options.get("select"))
            self.db.delete(row)
            self.db.commit()
            return record
