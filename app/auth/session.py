"""Session guard: bearer token to active identity resolution."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.auth.jwt import ACCESS_TOKEN_USE, decode_jwt
from app.core.exceptions import InactiveOrUnknownUserError, InvalidTokenError, UnauthenticatedError
from app.models import User


@dataclass(frozen=True)
class Identity:
    user_id: int
    username: str
    email: str
    full_name: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        role = user.role.value if hasattr(user.role, "value") else str(user.role)
        return cls(
            user_id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            role=role,
        )


def extract_bearer_token(authorization: str | None) -> str:
    if authorization is None or not authorization.strip():
        raise UnauthenticatedError("Authorization header is required.")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise UnauthenticatedError("Authorization header must use Bearer token.")
    return parts[1].strip()


def resolve(token: str | None, db: Session, secret: str) -> Identity:
    """Resolve a token to the current state of an active user.

    The user row is re-read on every call, so deactivation takes effect
    immediately for tokens that are still within their expiry.
    """
    if not token:
        raise UnauthenticatedError()

    claims = decode_jwt(token=token, secret=secret)
    if claims.get("token_use") != ACCESS_TOKEN_USE:
        raise InvalidTokenError("Token is not an access token.")
    try:
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidTokenError("Invalid auth claims.") from exc

    user = db.execute(
        select(User).where(User.id == user_id, User.is_active.is_(True))
    ).scalar_one_or_none()
    if user is None:
        raise InactiveOrUnknownUserError()
    return Identity.from_user(user)
