"""Health endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.core.config import Config
from app.core.dependencies import get_database, get_settings
from app.database.db import Database
from app.schemas.common import success

router = APIRouter(tags=["health"])


@router.get("/health")
def health(database: Database = Depends(get_database), settings: Config = Depends(get_settings)) -> dict:
    database_ok = database.verify_connection()
    return success(
        {
            "status": "ok" if database_ok else "degraded",
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "database": "connected" if database_ok else "unavailable",
        }
    )
