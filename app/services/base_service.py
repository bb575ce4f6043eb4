"""Shared service base: session, settings and unit-of-work handling."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from app.core.config import Config, get_config


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session, config: Config | None = None) -> None:
        self.db = db
        self.config = config or get_config()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run a unit of work: commit when the block exits cleanly, roll back otherwise."""
        try:
            yield self.db
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
