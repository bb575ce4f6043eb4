"""Shared authorization helpers for API v1 route modules."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends

from app.auth.rbac import get_roles_for_operation, require_operation
from app.auth.session import Identity
from app.core.dependencies import get_current_identity


def requires(operation: str) -> Callable[..., Identity]:
    """Build a dependency that resolves the caller and applies the capability table."""
    # Unknown operation names raise when the route is declared.
    get_roles_for_operation(operation)

    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        require_operation(identity, operation)
        return identity

    dependency.__name__ = f"requires_{operation.replace('.', '_')}"
    return dependency
