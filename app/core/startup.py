"""Startup validation and bootstrap helpers."""

from __future__ import annotations

import logging

from app.core.exceptions import ConfigurationError
from app.core.logging_config import configure_logging
from app.database.db import Database

logger = logging.getLogger(__name__)


def validate_startup_config(database: Database) -> None:
    """Fail-fast config and connectivity checks."""
    config = database.config
    database_ok = database.verify_connection()
    if not database_ok and config.DB_CONNECTIVITY_REQUIRED:
        raise ConfigurationError("Database connectivity check failed.")
    if not database_ok:
        logger.warning(
            "startup.database.connectivity_optional_failed",
            extra={"event": "startup.database.connectivity_optional_failed"},
        )

    if config.is_production and database.scheme == "sqlite":
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    logger.info(
        "startup.config.validated",
        extra={"event": "startup.config.validated"},
    )


def bootstrap(database: Database) -> None:
    """Initialize logging and validate runtime configuration."""
    configure_logging(database.config)
    validate_startup_config(database)
