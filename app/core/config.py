"""Configuration module for the radio contracts API."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from app.core.exceptions import ConfigurationError

load_dotenv()

PLACEHOLDER_JWT_SECRET = "change_me_jwt_secret"


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_POOL_SIZE: int
    DB_MAX_OVERFLOW: int
    DB_POOL_TIMEOUT_SECONDS: int
    DB_CONNECTIVITY_REQUIRED: bool
    JWT_SECRET: str
    JWT_ACCESS_TTL_MINUTES: int
    BCRYPT_ROUNDS: int
    CONTRACT_NUMBER_MAX_RETRIES: int
    DEFAULT_PAGE_SIZE: int
    MAX_PAGE_SIZE: int
    API_HOST: str
    API_PORT: int
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=(resolved_env != "production"))

    config = Config(
        APP_NAME="Radio Contracts",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./radio_contracts.db"),
        DB_POOL_SIZE=int(os.getenv("DB_POOL_SIZE", "10")),
        DB_MAX_OVERFLOW=int(os.getenv("DB_MAX_OVERFLOW", "20")),
        DB_POOL_TIMEOUT_SECONDS=int(os.getenv("DB_POOL_TIMEOUT_SECONDS", "10")),
        DB_CONNECTIVITY_REQUIRED=_as_bool(
            os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
        ),
        JWT_SECRET=os.getenv("JWT_SECRET", PLACEHOLDER_JWT_SECRET),
        JWT_ACCESS_TTL_MINUTES=int(os.getenv("JWT_ACCESS_TTL_MINUTES", "480")),
        BCRYPT_ROUNDS=int(os.getenv("BCRYPT_ROUNDS", "10")),
        CONTRACT_NUMBER_MAX_RETRIES=int(os.getenv("CONTRACT_NUMBER_MAX_RETRIES", "5")),
        DEFAULT_PAGE_SIZE=int(os.getenv("DEFAULT_PAGE_SIZE", "10")),
        MAX_PAGE_SIZE=int(os.getenv("MAX_PAGE_SIZE", "100")),
        API_HOST=os.getenv("API_HOST", "0.0.0.0"),
        API_PORT=int(os.getenv("API_PORT", "8000")),
        API_PREFIX=os.getenv("API_PREFIX", "/api"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", "radio_contracts.log"),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2", "mysql+pymysql"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite://, postgresql:// or mysql+pymysql:// style URL."
        )
    if parsed.scheme != "sqlite" and not parsed.hostname:
        raise ConfigurationError("Server DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.DB_POOL_SIZE < 1:
        raise ConfigurationError("DB_POOL_SIZE must be >= 1.")
    if config.DB_MAX_OVERFLOW < 0:
        raise ConfigurationError("DB_MAX_OVERFLOW must be >= 0.")
    if config.DB_POOL_TIMEOUT_SECONDS < 1:
        raise ConfigurationError("DB_POOL_TIMEOUT_SECONDS must be >= 1.")
    if config.JWT_ACCESS_TTL_MINUTES < 1:
        raise ConfigurationError("JWT_ACCESS_TTL_MINUTES must be >= 1.")
    if not 4 <= config.BCRYPT_ROUNDS <= 31:
        raise ConfigurationError("BCRYPT_ROUNDS must be between 4 and 31.")
    if config.CONTRACT_NUMBER_MAX_RETRIES < 1:
        raise ConfigurationError("CONTRACT_NUMBER_MAX_RETRIES must be >= 1.")
    if not 1 <= config.DEFAULT_PAGE_SIZE <= config.MAX_PAGE_SIZE:
        raise ConfigurationError("DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE.")
    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if config.is_production and config.JWT_SECRET == PLACEHOLDER_JWT_SECRET:
        raise ConfigurationError("Production JWT_SECRET uses the placeholder value.")
    if config.is_production and "change_me" in config.DATABASE_URL.lower():
        raise ConfigurationError("Production DATABASE_URL uses placeholder credentials.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
