"""User administration endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1._authz import requires
from app.auth.session import Identity
from app.core.config import Config
from app.core.dependencies import get_db_session, get_settings
from app.schemas.auth import AnnouncerResponse, UserResponse
from app.schemas.common import Pagination, success
from app.schemas.users import ResetPasswordRequest, UserCreateRequest, UserUpdateRequest
from app.services.user_service import UserService
from app.utils.pagination import page_request

router = APIRouter(prefix="/users", tags=["users"])


def _user(user) -> dict:
    return UserResponse.model_validate(user).model_dump(mode="json")


@router.get("")
def list_users(
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    search: str | None = Query(default=None),
    role: str | None = Query(default=None),
    identity: Identity = Depends(requires("users.read")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    paging = page_request(page, limit, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    users, total = UserService(db, settings).list_users(paging, search=search, role=role)
    return success(
        {
            "users": [_user(user) for user in users],
            "pagination": Pagination.build(paging.page, paging.limit, total).model_dump(),
        }
    )


@router.get("/announcers")
def list_announcers(
    identity: Identity = Depends(requires("users.read")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    announcers = UserService(db, settings).list_announcers()
    return success(
        {"announcers": [AnnouncerResponse.model_validate(user).model_dump(mode="json") for user in announcers]}
    )


@router.get("/{user_id}")
def get_user(
    user_id: int,
    identity: Identity = Depends(requires("users.read")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    return success({"user": _user(UserService(db, settings).get_user(user_id))})


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreateRequest,
    identity: Identity = Depends(requires("users.write")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    user = UserService(db, settings).create_user(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        role=payload.role,
    )
    return success({"user": _user(user)}, "User created successfully.")


@router.put("/{user_id}")
def update_user(
    user_id: int,
    payload: UserUpdateRequest,
    identity: Identity = Depends(requires("users.write")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    user = UserService(db, settings).update_user(
        user_id, payload.model_dump(exclude_unset=True), actor_id=identity.user_id
    )
    return success({"user": _user(user)}, "User updated successfully.")


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    identity: Identity = Depends(requires("users.delete")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    UserService(db, settings).deactivate_user(user_id, actor_id=identity.user_id)
    return success(message="User deactivated successfully.")


@router.put("/{user_id}/reset-password")
def reset_password(
    user_id: int,
    payload: ResetPasswordRequest,
    identity: Identity = Depends(requires("users.reset_password")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    UserService(db, settings).set_password(user_id, payload.new_password)
    return success(message="Password reset successfully.")
