"""Auth and user schema module."""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import MAX_PASSWORD_BYTES, password_fits
from app.models.enums import UserRole

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"


def normalize_email_value(value: str | None) -> str | None:
    return value.strip().lower() if value is not None else None


def check_password_length(value: str) -> str:
    if not password_fits(value):
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=256)


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    email: EmailStr
    password: str = Field(min_length=6, max_length=256)
    full_name: str = Field(min_length=2, max_length=100)
    role: UserRole

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return normalize_email_value(value)

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        return check_password_length(value)


class ProfileUpdateRequest(BaseModel):
    full_name: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return normalize_email_value(value)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(
        min_length=1, max_length=256, validation_alias=AliasChoices("current_password", "currentPassword")
    )
    new_password: str = Field(
        min_length=6, max_length=256, validation_alias=AliasChoices("new_password", "newPassword")
    )

    @field_validator("new_password")
    @classmethod
    def password_length(cls, value: str) -> str:
        return check_password_length(value)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    full_name: str
    role: UserRole
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AnnouncerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    full_name: str
