"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.auth.session import Identity, extract_bearer_token, resolve
from app.core.config import Config
from app.database.db import Database


def get_settings(request: Request) -> Config:
    """Return the configuration the application was built with."""
    return request.app.state.config


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db_session(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """Yield one SQLAlchemy session per request; it is closed on every exit path."""
    yield from database.sessions()


def get_current_identity(
    request: Request,
    authorization: str | None = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> Identity:
    """Resolve the bearer token to the current state of an active user."""
    token = extract_bearer_token(authorization)
    identity = resolve(token, db, settings.JWT_SECRET)
    request.state.identity = identity
    return identity
