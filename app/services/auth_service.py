"""Credential verification, token issuing and self-service account operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select

from app.auth.jwt import create_access_token
from app.auth.session import Identity
from app.core.exceptions import InvalidCredentialsError
from app.core.security import hash_password, verify_password
from app.models import User, UserRole
from app.services.base_service import BaseService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

# Verified when the username is unknown so both failure paths cost one bcrypt check.
_DUMMY_HASH = hash_password("not-a-real-password", rounds=4)


@dataclass(frozen=True)
class LoginResult:
    user: User
    identity: Identity
    token: str


class AuthService(BaseService):
    """Service for login, registration and password changes."""

    def authenticate(self, username: str, password: str) -> LoginResult:
        user = self.db.execute(
            select(User).where(User.username == username, User.is_active.is_(True))
        ).scalar_one_or_none()

        if user is None:
            verify_password(password, _DUMMY_HASH)
            logger.info("auth.login_failed", extra={"event": "auth.login_failed"})
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", extra={"event": "auth.login_failed", "user_id": user.id})
            raise InvalidCredentialsError()

        identity = Identity.from_user(user)
        token = create_access_token(
            user_id=user.id,
            role=identity.role,
            secret=self.config.JWT_SECRET,
            ttl_minutes=self.config.JWT_ACCESS_TTL_MINUTES,
        )
        logger.info("auth.login", extra={"event": "auth.login", "user_id": user.id, "role": identity.role})
        return LoginResult(user=user, identity=identity, token=token)

    def register(self, username: str, email: str, password: str, full_name: str, role: UserRole | str) -> User:
        return UserService(self.db, self.config).create_user(
            username=username,
            email=email,
            password=password,
            full_name=full_name,
            role=role,
        )

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        users = UserService(self.db, self.config)
        user = users.get_user(user_id)
        if not verify_password(current_password, user.password_hash):
            raise InvalidCredentialsError("Current password is incorrect.")
        users.set_password(user_id, new_password)
