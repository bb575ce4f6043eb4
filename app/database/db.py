"""Database connection and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Config, get_config

logger = logging.getLogger(__name__)


def _build_engine(config: Config, database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=config.DEBUG and config.LOG_LEVEL == "DEBUG",
            pool_pre_ping=True,
            connect_args={"check_same_thread": False, "timeout": config.DB_POOL_TIMEOUT_SECONDS},
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        echo=config.DEBUG and config.LOG_LEVEL == "DEBUG",
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=config.DB_POOL_SIZE,
        max_overflow=config.DB_MAX_OVERFLOW,
        pool_timeout=config.DB_POOL_TIMEOUT_SECONDS,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine (connection pool) and the session factory.

    Built once by the application root and handed to request handlers through
    dependency injection.
    """

    def __init__(self, config: Config | None = None, database_url: str | None = None) -> None:
        self.config = config or get_config()
        self.url = database_url or self.config.DATABASE_URL
        self.engine = _build_engine(self.config, self.url)
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def new_session(self) -> Session:
        return self.session_factory()

    def sessions(self) -> Generator[Session, None, None]:
        """Yield a session for dependency injection contexts."""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Context-manager wrapper for safe DB session lifecycle."""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def create_all(self) -> None:
        from app.models import Base

        Base.metadata.create_all(bind=self.engine)

    def verify_connection(self) -> bool:
        """Verify DB connectivity during startup."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("database.connection_failed", extra={"event": "database.connection_failed"})
            return False

    def dispose(self) -> None:
        self.engine.dispose()

    @property
    def scheme(self) -> str:
        return self.url.split("://", 1)[0]
