"""Role-scoped visibility rules for contract reads."""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import ColumnElement, select

from app.auth.rbac import ANNOUNCER
from app.auth.session import Identity
from app.core.exceptions import AuthorizationError
from app.models import Contract, RadioProgram

ContractPredicate = Callable[[Identity], ColumnElement[bool]]


def _announcer_programs(identity: Identity) -> ColumnElement[bool]:
    owned_programs = select(RadioProgram.id).where(RadioProgram.locutor_id == identity.user_id)
    return Contract.program_id.in_(owned_programs)


# Roles absent from this table see every contract.
CONTRACT_VISIBILITY: dict[str, ContractPredicate] = {
    ANNOUNCER: _announcer_programs,
}


def contract_visibility_clause(identity: Identity) -> ColumnElement[bool] | None:
    """Return the WHERE predicate limiting contracts for an identity, if any."""
    rule = CONTRACT_VISIBILITY.get(identity.role)
    if rule is None:
        return None
    return rule(identity)


def can_view_contract(identity: Identity, contract: Contract) -> bool:
    if identity.role != ANNOUNCER:
        return True
    program = contract.program
    return program is not None and program.locutor_id == identity.user_id


def ensure_contract_visible(identity: Identity, contract: Contract) -> None:
    if not can_view_contract(identity, contract):
        raise AuthorizationError("Access denied. You can only view contracts of your own programs.")
