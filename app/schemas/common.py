"""Common schema module."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, Field


class APIEnvelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None


class FieldError(BaseModel):
    field: str
    message: str


class Pagination(BaseModel):
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0)

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit) if total else 0)


def success(data: dict[str, Any] | None = None, message: str | None = None) -> dict[str, Any]:
    """Wrap a payload in the success envelope."""
    return APIEnvelope(success=True, message=message, data=data).model_dump(mode="json", exclude_none=True)


def failure(message: str, errors: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    """Wrap an error in the failure envelope."""
    return APIEnvelope(success=False, message=message, errors=errors or None).model_dump(
        mode="json", exclude_none=True
    )
