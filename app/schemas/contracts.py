"""Contract request/response schemas for API contracts."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.domain.valuation import MAX_TOTAL_SPOTS
from app.models.enums import ContractStatus, PaymentStatus, SpotStatus


class ContractCreateRequest(BaseModel):
    client_id: int = Field(ge=1)
    program_id: int = Field(ge=1)
    ad_type_id: int = Field(ge=1)
    title: str = Field(min_length=5, max_length=200)
    description: str | None = Field(default=None, max_length=10000)
    start_date: date
    end_date: date
    total_spots: int = Field(ge=1, le=MAX_TOTAL_SPOTS)
    price_per_spot: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    discount_percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100, max_digits=5, decimal_places=2)

    @model_validator(mode="after")
    def end_after_start(self) -> "ContractCreateRequest":
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class ContractUpdateRequest(BaseModel):
    """Partial update; omitted fields keep their stored values."""

    client_id: int | None = Field(default=None, ge=1)
    program_id: int | None = Field(default=None, ge=1)
    ad_type_id: int | None = Field(default=None, ge=1)
    title: str | None = Field(default=None, min_length=5, max_length=200)
    description: str | None = Field(default=None, max_length=10000)
    start_date: date | None = None
    end_date: date | None = None
    total_spots: int | None = Field(default=None, ge=1, le=MAX_TOTAL_SPOTS)
    price_per_spot: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    discount_percentage: Decimal | None = Field(default=None, ge=0, le=100, max_digits=5, decimal_places=2)
    payment_status: PaymentStatus | None = None

    @model_validator(mode="before")
    @classmethod
    def reject_status(cls, data: Any) -> Any:
        if isinstance(data, dict) and "status" in data:
            raise ValueError("status cannot be changed by update; use approve, complete or cancel")
        return data


class ContractSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contract_number: str
    client_id: int
    program_id: int
    ad_type_id: int
    title: str
    description: str | None = None
    start_date: date
    end_date: date
    total_spots: int
    price_per_spot: Decimal
    discount_percentage: Decimal
    total_value: Decimal
    final_value: Decimal
    status: ContractStatus
    payment_status: PaymentStatus
    created_by: int
    approved_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ContractResponse(ContractSummary):
    company_name: str | None = None
    contact_name: str | None = None
    program_name: str | None = None
    type_name: str | None = None
    duration_seconds: int | None = None
    created_by_name: str | None = None
    approved_by_name: str | None = None
    locutor_id: int | None = None

    @classmethod
    def from_contract(cls, contract: Any) -> "ContractResponse":
        """Flatten a contract and its loaded references into one response row."""
        base = ContractSummary.model_validate(contract).model_dump()
        client = contract.client
        program = contract.program
        ad_type = contract.ad_type
        return cls(
            **base,
            company_name=client.company_name if client else None,
            contact_name=client.contact_name if client else None,
            program_name=program.program_name if program else None,
            locutor_id=program.locutor_id if program else None,
            type_name=ad_type.type_name if ad_type else None,
            duration_seconds=ad_type.duration_seconds if ad_type else None,
            created_by_name=contract.creator.full_name if contract.creator else None,
            approved_by_name=contract.approver.full_name if contract.approver else None,
        )


class SpotScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    scheduled_date: date
    scheduled_time: str
    status: SpotStatus
    notes: str | None = None


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    amount: Decimal
    payment_date: date
    payment_method: str | None = None
    notes: str | None = None
    created_by: int


class ContractFileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_name: str
    file_size: int | None = None
    uploaded_by: int
    uploaded_at: datetime


class ContractDetailResponse(ContractResponse):
    spots: list[SpotScheduleResponse] = []
    payments: list[PaymentResponse] = []
    files: list[ContractFileResponse] = []
