"""Create the schema and seed reference data for a local installation.

Run as ``python -m app.database.init_db``. The first administrator is only
created when ``INITIAL_ADMIN_PASSWORD`` is set.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import Config
from app.core.logging_config import configure_logging
from app.core.security import hash_password
from app.database.db import Database
from app.models import AdType, RadioProgram, User, UserRole, Weekday

logger = logging.getLogger(__name__)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_AD_TYPES = (
    ("Spot 15s", 15),
    ("Spot 30s", 30),
    ("Spot 60s", 60),
    ("Testemunhal", 60),
)

WEEKDAYS = [day.value for day in Weekday if day not in (Weekday.SATURDAY, Weekday.SUNDAY)]
DEFAULT_PROGRAMS = (
    ("Manhã Total", "06:00", "09:00", WEEKDAYS),
    ("Jornal do Meio-Dia", "12:00", "13:00", WEEKDAYS),
    ("Tarde Show", "14:00", "17:00", WEEKDAYS),
    ("Sábado Especial", "10:00", "12:00", [Weekday.SATURDAY.value]),
)


def _build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def seed_reference_data(db: Session, config: Config, admin_password: str | None = None) -> dict[str, int]:
    """Insert missing ad types, programs and the first admin; safe to run repeatedly."""
    created = {"ad_types": 0, "programs": 0, "users": 0}

    existing_types = set(db.execute(select(AdType.type_name)).scalars())
    for type_name, duration in DEFAULT_AD_TYPES:
        if type_name not in existing_types:
            db.add(AdType(type_name=type_name, duration_seconds=duration))
            created["ad_types"] += 1

    existing_programs = set(db.execute(select(RadioProgram.program_name)).scalars())
    for name, start, end, days in DEFAULT_PROGRAMS:
        if name not in existing_programs:
            db.add(RadioProgram(program_name=name, start_time=start, end_time=end, days_of_week=list(days)))
            created["programs"] += 1

    has_admin = db.execute(select(User.id).where(User.role == UserRole.ADMIN).limit(1)).first() is not None
    if not has_admin and admin_password:
        db.add(
            User(
                username="admin",
                email="admin@radio.example.com",
                password_hash=hash_password(admin_password, rounds=config.BCRYPT_ROUNDS),
                full_name="Administrator",
                role=UserRole.ADMIN,
            )
        )
        created["users"] += 1
    elif not has_admin:
        logger.warning("database.seed.admin_skipped", extra={"event": "database.seed.admin_skipped"})

    db.commit()
    return created


def init_db(database: Database | None = None, use_migrations: bool = True) -> dict[str, int]:
    database = database or Database()
    configure_logging(database.config)
    if use_migrations:
        command.upgrade(_build_alembic_config(database.url), "head")
    else:
        database.create_all()
    logger.info("database.tables.created", extra={"event": "database.tables.created"})

    with database.session_scope() as db:
        created = seed_reference_data(db, database.config, os.getenv("INITIAL_ADMIN_PASSWORD"))
    logger.info("database.seeded", extra={"event": "database.seeded"})
    return created


if __name__ == "__main__":
    init_db()
