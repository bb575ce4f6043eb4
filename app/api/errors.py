"""Translate application exceptions into the JSON envelope."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.middleware import get_request_id
from app.core.exceptions import RadioContractsError
from app.schemas.common import failure

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error."
# Location prefixes FastAPI adds in front of the field name.
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def _field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        errors.append({"field": ".".join(location) or "request", "message": error.get("msg", "invalid value")})
    return errors


def setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RadioContractsError)
    async def application_error_handler(request: Request, exc: RadioContractsError) -> JSONResponse:
        level = logging.ERROR if exc.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "api.error",
            extra={
                "event": "api.error",
                "request_id": get_request_id(),
                "path": request.url.path,
                "status_code": exc.status_code,
                "error_type": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=exc.status_code, content=failure(exc.message, exc.errors))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=failure("Invalid data.", _field_errors(exc)))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "api.unhandled_error",
            extra={
                "event": "api.unhandled_error",
                "request_id": get_request_id(),
                "path": request.url.path,
                "error_type": type(exc).__name__,
            },
        )
        return JSONResponse(status_code=500, content=failure(GENERIC_ERROR_MESSAGE))
