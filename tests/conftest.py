from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.auth.session import Identity
from app.core.config import get_config
from app.core.security import hash_password
from app.database.db import Database
from app.main import create_app
from app.models import AdType, Client, RadioProgram, User, UserRole
from app.services.contract_service import ContractService

PASSWORD = "secret123"
TODAY = date(2026, 10, 19)


@pytest.fixture
def config():
    return replace(
        get_config(),
        ENV="test",
        JWT_SECRET="test-secret",
        BCRYPT_ROUNDS=4,
        LOG_FILE="",
        DB_CONNECTIVITY_REQUIRED=False,
    )


@pytest.fixture
def database(tmp_path, config):
    db = Database(config, database_url=f"sqlite:///{tmp_path / 'radio_test.db'}")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    db = database.new_session()
    yield db
    db.close()


def _user(session, username, role, full_name):
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=hash_password(PASSWORD, rounds=4),
        full_name=full_name,
        role=role,
    )
    session.add(user)
    return user


@pytest.fixture
def seed(session):
    admin = _user(session, "admin", UserRole.ADMIN, "Ana Admin")
    manager = _user(session, "manager", UserRole.MANAGER, "Marcos Gerente")
    announcer = _user(session, "locutor", UserRole.ANNOUNCER, "Lia Locutora")
    other_announcer = _user(session, "locutor2", UserRole.ANNOUNCER, "Rui Locutor")
    session.flush()

    client = Client(company_name="Padaria Central", contact_name="Joana Lima", email="contato@padaria.com.br")
    program = RadioProgram(
        program_name="Manhã Total", start_time="06:00", end_time="09:00", days_of_week=["monday"], locutor_id=announcer.id
    )
    other_program = RadioProgram(
        program_name="Tarde Show", start_time="14:00", end_time="17:00", days_of_week=["friday"], locutor_id=other_announcer.id
    )
    ad_type = AdType(type_name="Spot 30s", duration_seconds=30)
    session.add_all([client, program, other_program, ad_type])
    session.commit()

    return SimpleNamespace(
        admin=admin,
        manager=manager,
        announcer=announcer,
        other_announcer=other_announcer,
        client=client,
        program=program,
        other_program=other_program,
        ad_type=ad_type,
        as_admin=Identity.from_user(admin),
        as_manager=Identity.from_user(manager),
        as_announcer=Identity.from_user(announcer),
        as_other_announcer=Identity.from_user(other_announcer),
    )


def contract_payload(seed, program=None, **overrides):
    payload = {
        "client_id": seed.client.id,
        "program_id": (program or seed.program).id,
        "ad_type_id": seed.ad_type.id,
        "title": "Campanha de Verão",
        "description": "Spots no horário nobre",
        "start_date": date(2026, 1, 1),
        "end_date": date(2026, 3, 31),
        "total_spots": 10,
        "price_per_spot": Decimal("100.00"),
        "discount_percentage": Decimal("10"),
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def contracts(session, config):
    return ContractService(session, config, today=lambda: TODAY)


@pytest.fixture
def make_payload(seed):
    def _make(program=None, **overrides):
        return contract_payload(seed, program, **overrides)

    return _make


@pytest.fixture
def password():
    return PASSWORD


@pytest.fixture
def api(config, database, seed):
    return TestClient(create_app(config, database))


@pytest.fixture
def login(api):
    def _login(username: str) -> dict[str, str]:
        response = api.post("/api/auth/login", json={"username": username, "password": PASSWORD})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['data']['token']}"}

    return _login


@pytest.fixture
def contract_json(seed):
    def _make(program=None, **overrides):
        data = {
            "client_id": seed.client.id,
            "program_id": (program or seed.program).id,
            "ad_type_id": seed.ad_type.id,
            "title": "Campanha de Verão",
            "start_date": "2020-01-01",
            "end_date": "2020-03-31",
            "total_spots": 10,
            "price_per_spot": "100.00",
            "discount_percentage": "10",
        }
        data.update(overrides)
        return data

    return _make
