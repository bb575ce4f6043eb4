"""User administration request schemas."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, EmailStr, Field, field_validator

from app.models.enums import UserRole
from app.schemas.auth import USERNAME_PATTERN, RegisterRequest, check_password_length, normalize_email_value


class UserCreateRequest(RegisterRequest):
    pass


class UserUpdateRequest(BaseModel):
    username: str | None = Field(default=None, min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    email: EmailStr | None = None
    full_name: str | None = Field(default=None, min_length=2, max_length=100)
    role: UserRole | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return normalize_email_value(value)


class ResetPasswordRequest(BaseModel):
    new_password: str = Field(
        min_length=6, max_length=256, validation_alias=AliasChoices("new_password", "newPassword")
    )

    @field_validator("new_password")
    @classmethod
    def password_length(cls, value: str) -> str:
        return check_password_length(value)
