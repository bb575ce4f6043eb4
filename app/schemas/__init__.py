"""Pydantic schema package for API contracts."""

from app.schemas.auth import (
    AnnouncerResponse,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from app.schemas.clients import ClientContractRow, ClientCreateRequest, ClientResponse, ClientUpdateRequest
from app.schemas.common import APIEnvelope, FieldError, Pagination, failure, success
from app.schemas.contracts import (
    ContractCreateRequest,
    ContractDetailResponse,
    ContractFileResponse,
    ContractResponse,
    ContractSummary,
    ContractUpdateRequest,
    PaymentResponse,
    SpotScheduleResponse,
)
from app.schemas.users import ResetPasswordRequest, UserCreateRequest, UserUpdateRequest

__all__ = [
    "APIEnvelope",
    "AnnouncerResponse",
    "ChangePasswordRequest",
    "ClientContractRow",
    "ClientCreateRequest",
    "ClientResponse",
    "ClientUpdateRequest",
    "ContractCreateRequest",
    "ContractDetailResponse",
    "ContractFileResponse",
    "ContractResponse",
    "ContractSummary",
    "ContractUpdateRequest",
    "FieldError",
    "LoginRequest",
    "Pagination",
    "PaymentResponse",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "SpotScheduleResponse",
    "UserCreateRequest",
    "UserResponse",
    "UserUpdateRequest",
    "failure",
    "success",
]
