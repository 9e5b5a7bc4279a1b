"""User lookups. Projections never include the password hash."""

from app.repositories.table import QueryOptions, Table, TableAccessor
from app.schemas.user import SecureUser, SessionUser

# Listing: no password, no secret.
_SECURE_SELECT: dict[str, bool] = {
    "id": True,
    "name": True,
    "email": True,
    "image": True,
    "permissions": True,
    "roles": True,
    "password": False,
    "secret": False,
}

# Point lookups: no password; the secret is needed to act on behalf of the user.
_NO_PASSWORD_SELECT: dict[str, bool] = {
    "id": True,
    "name": True,
    "email": True,
    "image": True,
    "secret": True,
    "permissions": True,
    "roles": True,
    "password": False,
}


def get_all_users_secure(accessor: TableAccessor) -> list[SecureUser]:
    """Every user, without password or secret."""
    rows = accessor.find_many(Table.USER, {"select": _SECURE_SELECT, "order_by": ["email"]})
    return [SecureUser.model_validate(row) for row in rows]


def _find_user(accessor: TableAccessor, options: QueryOptions) -> SessionUser | None:
    row = accessor.find_one(Table.USER, options)
    if row is None:
        return None
    return SessionUser.model_validate(row)


def normalize_email(email: str) -> str:
    """Emails are stored trimmed and lowercased; lookups use the same form."""
    return email.strip().lower()


def get_user_by_email_no_password(accessor: TableAccessor, email: str) -> SessionUser | None:
    return _find_user(accessor, {"where": {"email": normalize_email(email)}, "select": _NO_PASSWORD_SELECT})


def get_user_by_secret_no_password(accessor: TableAccessor, secret: str) -> SessionUser | None:
    """Resolve a bearer secret (RPC accessToken) to its user, or None."""
    if not secret:
        return None
    return _find_user(accessor, {"where": {"secret": secret}, "select": _NO_PASSWORD_SELECT})
