from __future__ import annotations

import pytest

from app.core.config import PLACEHOLDER_JWT_SECRET, _build_config
from app.core.exceptions import ConfigurationError


def test_defaults_build_in_development(monkeypatch):
    for name in ("DATABASE_URL", "JWT_SECRET", "API_PREFIX", "BCRYPT_ROUNDS", "MAX_PAGE_SIZE", "DEFAULT_PAGE_SIZE"):
        monkeypatch.delenv(name, raising=False)
    config = _build_config("development")
    assert config.API_PREFIX == "/api"
    assert config.BCRYPT_ROUNDS == 10
    assert config.CONTRACT_NUMBER_MAX_RETRIES >= 1
    assert config.DATABASE_URL.startswith("sqlite")
    assert config.is_production is False


def test_production_rejects_placeholder_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", PLACEHOLDER_JWT_SECRET)
    monkeypatch.setenv("DATABASE_URL", "postgresql://radio:pw@db:5432/radio")
    with pytest.raises(ConfigurationError, match="JWT_SECRET"):
        _build_config("production")


def test_production_accepts_real_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "a-real-production-secret")
    monkeypatch.delenv("DB_CONNECTIVITY_REQUIRED", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql://radio:pw@db:5432/radio")
    config = _build_config("production")
    assert config.is_production is True
    assert config.DEBUG is False
    assert config.DB_CONNECTIVITY_REQUIRED is True


@pytest.mark.parametrize(
    "name, value",
    [
        ("DATABASE_URL", "oracle://db/radio"),
        ("BCRYPT_ROUNDS", "2"),
        ("DEFAULT_PAGE_SIZE", "500"),
        ("LOG_LEVEL", "chatty"),
        ("CONTRACT_NUMBER_MAX_RETRIES", "0"),
    ],
)
def test_invalid_values_raise_configuration_error(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError):
        _build_config("development")
