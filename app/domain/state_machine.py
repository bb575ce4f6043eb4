"""Canonical state transition helpers for lifecycle entities."""

from __future__ import annotations

from collections.abc import Mapping

from app.core.exceptions import InvalidStateError


class InvalidTransitionError(InvalidStateError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine:
    """Table-driven state machine; states without outgoing edges are terminal."""

    def __init__(self, transitions: Mapping[str, set[str]]) -> None:
        self._transitions = {state: frozenset(targets) for state, targets in transitions.items()}

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, frozenset())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")

    def is_terminal(self, state: str) -> bool:
        return not self._transitions.get(state)

    def targets(self, state: str) -> frozenset[str]:
        return self._transitions.get(state, frozenset())
