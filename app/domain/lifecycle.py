"""Contract lifecycle rules: legal transitions and who may trigger them."""

from __future__ import annotations

from datetime import date

from app.auth.rbac import ADMIN, ANNOUNCER
from app.auth.session import Identity
from app.core.exceptions import AuthorizationError, InvalidStateError
from app.domain.state_machine import StateMachine
from app.models.enums import ContractStatus

DRAFT = ContractStatus.DRAFT.value
ACTIVE = ContractStatus.ACTIVE.value
COMPLETED = ContractStatus.COMPLETED.value
CANCELLED = ContractStatus.CANCELLED.value

CONTRACT_TRANSITIONS = StateMachine(
    {
        DRAFT: {ACTIVE, CANCELLED},
        ACTIVE: {COMPLETED, CANCELLED},
        COMPLETED: set(),
        CANCELLED: set(),
    }
)

# Statuses that keep a client from being deactivated.
OPEN_STATUSES = frozenset({DRAFT, ACTIVE})


def status_value(status: ContractStatus | str) -> str:
    return status.value if isinstance(status, ContractStatus) else str(status)


def ensure_can_modify(actor: Identity) -> None:
    if actor.role == ANNOUNCER:
        raise AuthorizationError("Announcers cannot modify contracts.")


def check_approve(current: ContractStatus | str, actor: Identity) -> str:
    if actor.role == ANNOUNCER:
        raise AuthorizationError("Announcers cannot approve contracts.")
    if status_value(current) != DRAFT:
        raise InvalidStateError("Only draft contracts can be approved.")
    return ACTIVE


def check_complete(current: ContractStatus | str, end_date: date, actor: Identity, today: date) -> str:
    ensure_can_modify(actor)
    CONTRACT_TRANSITIONS.assert_transition(status_value(current), COMPLETED)
    if end_date > today:
        raise InvalidStateError("A contract can only be completed after its end date.")
    return COMPLETED


def check_cancel(current: ContractStatus | str, actor: Identity) -> str:
    ensure_can_modify(actor)
    CONTRACT_TRANSITIONS.assert_transition(status_value(current), CANCELLED)
    return CANCELLED


def check_delete(current: ContractStatus | str, actor: Identity) -> None:
    if actor.role != ADMIN:
        raise AuthorizationError("Only administrators can delete contracts.")
    if status_value(current) == ACTIVE:
        raise InvalidStateError("Active contracts cannot be deleted.")
