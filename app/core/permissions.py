"""Permission labels and the permission check used to gate initiative mutations."""

from collections.abc import Iterable
from enum import Enum
from typing import Protocol


class Permission(str, Enum):
    """Permission labels stored on User.permissions."""

    ADMIN = "ADMIN"
    DEFAULT = "DEFAULT"


class HasPermissions(Protocol):
    permissions: list[str]


def _label(permission: Permission | str) -> str:
    return permission.value if isinstance(permission, Permission) else str(permission)


def has_permissions(
    user: HasPermissions | None,
    required: Iterable[Permission | str],
) -> bool:
    """
    True iff the user holds at least one of the required permissions.

    The check is an OR over `required`; an empty `required` never matches.
    """
    if user is None:
        return False
    held = {_label(p) for p in user.permissions or []}
    wanted = {_label(p) for p in required}
    return not held.isdisjoint(wanted)
