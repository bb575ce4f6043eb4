"""Password hashing primitives backed by bcrypt."""

from __future__ import annotations

import bcrypt

from app.core.exceptions import ValidationError

DEFAULT_ROUNDS = 10
MAX_PASSWORD_BYTES = 72


def password_fits(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a salted bcrypt hash for the password."""
    if not password_fits(password):
        raise ValidationError(
            "Password is too long.",
            errors=[{"field": "password", "message": f"must be at most {MAX_PASSWORD_BYTES} bytes"}],
        )
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Constant-time check of a password against a stored bcrypt hash."""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or an over-long candidate.
        return False
