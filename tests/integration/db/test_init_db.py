from __future__ import annotations

from sqlalchemy import func, select

from app.database.init_db import DEFAULT_AD_TYPES, DEFAULT_PROGRAMS, init_db, seed_reference_data
from app.models import AdType, RadioProgram, User


def test_seed_is_idempotent(session, config):
    first = seed_reference_data(session, config, admin_password="segredo1")
    second = seed_reference_data(session, config, admin_password="segredo1")
    assert first == {"ad_types": len(DEFAULT_AD_TYPES), "programs": len(DEFAULT_PROGRAMS), "users": 1}
    assert second == {"ad_types": 0, "programs": 0, "users": 0}
    assert session.execute(select(func.count()).select_from(User)).scalar_one() == 1


def test_seed_skips_admin_without_password(session, config):
    created = seed_reference_data(session, config)
    assert created["users"] == 0
    assert session.execute(select(func.count()).select_from(AdType)).scalar_one() == len(DEFAULT_AD_TYPES)


def test_init_db_without_migrations_creates_and_seeds(database, monkeypatch):
    monkeypatch.setenv("INITIAL_ADMIN_PASSWORD", "segredo1")
    created = init_db(database, use_migrations=False)
    assert created["users"] == 1
    with database.session_scope() as db:
        assert db.execute(select(func.count()).select_from(RadioProgram)).scalar_one() == len(DEFAULT_PROGRAMS)
