"""Client request/response schemas."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.models.enums import ContractStatus, PaymentStatus
from app.schemas.auth import normalize_email_value

CNPJ_PATTERN = r"^\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}$"
PHONE_PATTERN = r"^\+?[\d\s()-]{8,20}$"


class ClientCreateRequest(BaseModel):
    company_name: str = Field(min_length=2, max_length=100)
    contact_name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    address: str | None = Field(default=None, max_length=500)
    cnpj: str | None = Field(default=None, pattern=CNPJ_PATTERN)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return normalize_email_value(value)


class ClientUpdateRequest(BaseModel):
    company_name: str | None = Field(default=None, min_length=2, max_length=100)
    contact_name: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    address: str | None = Field(default=None, max_length=500)
    cnpj: str | None = Field(default=None, pattern=CNPJ_PATTERN)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return normalize_email_value(value)


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str
    contact_name: str
    email: str
    phone: str | None = None
    address: str | None = None
    cnpj: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ClientContractRow(BaseModel):
    """Contract line shown on a client's detail page."""

    id: int
    contract_number: str
    title: str
    start_date: date
    end_date: date
    total_value: Decimal
    final_value: Decimal
    status: ContractStatus
    payment_status: PaymentStatus
    program_name: str
    type_name: str
