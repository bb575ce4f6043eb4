"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1._authz import requires
from app.auth.session import Identity
from app.core.config import Config
from app.core.dependencies import get_db_session, get_settings
from app.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from app.schemas.common import success
from app.services.auth_service import AuthService
from app.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _user(user) -> dict:
    return UserResponse.model_validate(user).model_dump(mode="json")


@router.post("/login")
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    result = AuthService(db, settings).authenticate(payload.username, payload.password)
    return success({"token": result.token, "user": _user(result.user)}, "Login successful.")


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    identity: Identity = Depends(requires("auth.register")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    user = AuthService(db, settings).register(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        role=payload.role,
    )
    return success({"user": _user(user)}, "User registered successfully.")


@router.get("/profile")
def get_profile(
    identity: Identity = Depends(requires("auth.profile")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    user = UserService(db, settings).get_user(identity.user_id)
    return success({"user": _user(user)})


@router.put("/profile")
def update_profile(
    payload: ProfileUpdateRequest,
    identity: Identity = Depends(requires("auth.profile")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    user = UserService(db, settings).update_profile(
        identity.user_id, full_name=payload.full_name, email=payload.email
    )
    return success({"user": _user(user)}, "Profile updated successfully.")


@router.put("/change-password")
def change_password(
    payload: ChangePasswordRequest,
    identity: Identity = Depends(requires("auth.profile")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    AuthService(db, settings).change_password(identity.user_id, payload.current_password, payload.new_password)
    return success(message="Password changed successfully.")
