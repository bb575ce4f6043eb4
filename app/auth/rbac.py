"""Role-based authorization helpers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from app.core.exceptions import AuthorizationError, UnauthenticatedError
from app.models.enums import UserRole

if TYPE_CHECKING:
    from app.auth.session import Identity

ADMIN = UserRole.ADMIN.value
MANAGER = UserRole.MANAGER.value
ANNOUNCER = UserRole.ANNOUNCER.value

STAFF = frozenset({ADMIN, MANAGER})
EVERYONE = frozenset({ADMIN, MANAGER, ANNOUNCER})

# Operation names are kept explicit for endpoint-level declarations.
OPERATION_ROLES: dict[str, frozenset[str]] = {
    "auth.register": frozenset({ADMIN}),
    "auth.profile": EVERYONE,
    "users.read": STAFF,
    "users.write": frozenset({ADMIN}),
    "users.delete": frozenset({ADMIN}),
    "users.reset_password": frozenset({ADMIN}),
    "clients.read": EVERYONE,
    "clients.write": STAFF,
    "clients.delete": frozenset({ADMIN}),
    "clients.stats": STAFF,
    "contracts.read": EVERYONE,
    "contracts.stats": EVERYONE,
    "contracts.write": STAFF,
    "contracts.approve": STAFF,
    "contracts.transition": STAFF,
    "contracts.delete": frozenset({ADMIN}),
}


def get_roles_for_operation(operation: str) -> frozenset[str]:
    """Return the roles allowed to run an operation."""
    try:
        return OPERATION_ROLES[operation]
    except KeyError as exc:
        raise KeyError(f"Unknown operation: {operation}") from exc


def get_operations_for_role(role: str) -> set[str]:
    """Return every operation a role may run."""
    return {operation for operation, roles in OPERATION_ROLES.items() if role.lower() in roles}


def authorize(identity: Identity | None, allowed_roles: Iterable[str]) -> None:
    """Raise unless the identity is resolved and its role is allowed."""
    if identity is None:
        raise UnauthenticatedError("User not authenticated.")
    if identity.role not in set(allowed_roles):
        raise AuthorizationError("Access denied. Insufficient permissions.")


def require_operation(identity: Identity | None, operation: str) -> None:
    """Apply the capability table for a named operation."""
    authorize(identity, get_roles_for_operation(operation))
