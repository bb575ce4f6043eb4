"""Structured logging helpers for request-scoped events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from app.auth.session import Identity


@dataclass(frozen=True)
class LogContext:
    """Who made the request and under which request id."""

    request_id: str | None = None
    user_id: int | None = None
    role: str | None = None

    @classmethod
    def for_request(cls, request_id: str | None, identity: Identity | None = None) -> LogContext:
        if identity is None:
            return cls(request_id=request_id)
        return cls(request_id=request_id, user_id=identity.user_id, role=identity.role)


def build_log_event(event: str, context: LogContext, **fields: Any) -> dict[str, Any]:
    """Merge the request context and event fields into one `extra` payload.

    Fields left as None are dropped so anonymous requests log no identity keys.
    """
    payload: dict[str, Any] = {
        "event": event,
        "request_id": context.request_id,
        "user_id": context.user_id,
        "role": context.role,
    }
    payload.update(fields)
    return {key: value for key, value in payload.items() if value is not None}
