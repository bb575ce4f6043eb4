"""User administration service."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.core.security import hash_password
from app.models import User, UserRole
from app.services.base_service import BaseService
from app.utils.pagination import PageRequest
from app.utils.validators import LIKE_ESCAPE, like_pattern, sanitize_text

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """Service for user CRUD; users are deactivated, never removed."""

    def _ensure_unique(self, username: str | None, email: str | None, exclude_id: int | None = None) -> None:
        # Uniqueness spans inactive rows too.
        conditions = []
        if username:
            conditions.append(User.username == username)
        if email:
            conditions.append(User.email == email)
        if not conditions:
            return
        stmt = select(User.id).where(or_(*conditions))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if self.db.execute(stmt.limit(1)).first() is not None:
            raise ConflictError("Username or email already exists.")

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found.")
        return user

    def list_users(self, page: PageRequest, search: str | None = None, role: str | None = None) -> tuple[list[User], int]:
        filters = []
        if search:
            pattern = like_pattern(search)
            filters.append(
                or_(
                    User.username.ilike(pattern, escape=LIKE_ESCAPE),
                    User.full_name.ilike(pattern, escape=LIKE_ESCAPE),
                    User.email.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if role:
            try:
                filters.append(User.role == UserRole(role))
            except ValueError as exc:
                raise ValidationError(
                    "Invalid role filter.", errors=[{"field": "role", "message": "unknown role"}]
                ) from exc

        total = self.db.execute(select(func.count()).select_from(User).where(*filters)).scalar_one()
        users = (
            self.db.execute(
                select(User)
                .where(*filters)
                .order_by(User.created_at.desc(), User.id.desc())
                .limit(page.limit)
                .offset(page.offset)
            )
            .scalars()
            .all()
        )
        return list(users), int(total)

    def list_announcers(self) -> list[User]:
        return list(
            self.db.execute(
                select(User)
                .where(User.role == UserRole.ANNOUNCER, User.is_active.is_(True))
                .order_by(User.full_name)
            ).scalars()
        )

    def create_user(self, username: str, email: str, password: str, full_name: str, role: UserRole | str) -> User:
        username = sanitize_text(username, max_len=50)
        self._ensure_unique(username, email)
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password, rounds=self.config.BCRYPT_ROUNDS),
            full_name=sanitize_text(full_name, max_len=100),
            role=UserRole(role),
            is_active=True,
        )
        try:
            with self.transaction():
                self.db.add(user)
        except IntegrityError as exc:
            raise ConflictError("Username or email already exists.") from exc
        self.db.refresh(user)
        logger.info("user.created", extra={"event": "user.created", "target_user_id": user.id})
        return user

    def update_user(self, user_id: int, changes: dict[str, Any], actor_id: int | None = None) -> User:
        user = self.get_user(user_id)
        if changes.get("is_active") is False and user.id == actor_id:
            raise ValidationError("You cannot deactivate your own account.")
        self._ensure_unique(changes.get("username"), changes.get("email"), exclude_id=user.id)
        try:
            with self.transaction():
                for field in ("username", "email", "full_name", "role", "is_active"):
                    value = changes.get(field)
                    if value is None:
                        continue
                    if field == "role":
                        value = UserRole(value)
                    setattr(user, field, value)
        except IntegrityError as exc:
            raise ConflictError("Username or email already exists.") from exc
        self.db.refresh(user)
        logger.info("user.updated", extra={"event": "user.updated", "target_user_id": user.id})
        return user

    def update_profile(self, user_id: int, full_name: str | None = None, email: str | None = None) -> User:
        return self.update_user(user_id, {"full_name": full_name, "email": email})

    def deactivate_user(self, user_id: int, actor_id: int) -> User:
        user = self.get_user(user_id)
        if user.id == actor_id:
            raise ValidationError("You cannot deactivate your own account.")
        with self.transaction():
            user.is_active = False
        logger.info("user.deactivated", extra={"event": "user.deactivated", "target_user_id": user.id})
        return user

    def set_password(self, user_id: int, new_password: str) -> None:
        user = self.get_user(user_id)
        with self.transaction():
            user.password_hash = hash_password(new_password, rounds=self.config.BCRYPT_ROUNDS)
        logger.info("user.password_reset", extra={"event": "user.password_reset", "target_user_id": user.id})
