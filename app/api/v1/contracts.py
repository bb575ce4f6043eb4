"""Contract endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1._authz import requires
from app.auth.session import Identity
from app.core.config import Config
from app.core.dependencies import get_db_session, get_settings
from app.schemas.common import Pagination, success
from app.schemas.contracts import (
    ContractCreateRequest,
    ContractDetailResponse,
    ContractFileResponse,
    ContractResponse,
    ContractUpdateRequest,
    PaymentResponse,
    SpotScheduleResponse,
)
from app.services.contract_service import ContractService
from app.utils.pagination import page_request

router = APIRouter(prefix="/contracts", tags=["contracts"])


def _contract(contract) -> dict:
    return ContractResponse.from_contract(contract).model_dump(mode="json")


@router.get("")
def list_contracts(
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    search: str | None = Query(default=None),
    status_filter: str | None = Query(default=None, alias="status"),
    payment_status: str | None = Query(default=None),
    identity: Identity = Depends(requires("contracts.read")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    paging = page_request(page, limit, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    contracts, total = ContractService(db, settings).list_contracts(
        identity, paging, search=search, status=status_filter, payment_status=payment_status
    )
    return success(
        {
            "contracts": [_contract(contract) for contract in contracts],
            "pagination": Pagination.build(paging.page, paging.limit, total).model_dump(),
        }
    )


@router.get("/stats")
def get_contract_stats(
    identity: Identity = Depends(requires("contracts.stats")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    return success(ContractService(db, settings).contract_stats(identity))


@router.get("/{contract_id}")
def get_contract(
    contract_id: int,
    identity: Identity = Depends(requires("contracts.read")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    detail = ContractService(db, settings).get_contract(identity, contract_id)
    response = ContractDetailResponse(
        **ContractResponse.from_contract(detail.contract).model_dump(),
        spots=[SpotScheduleResponse.model_validate(spot) for spot in detail.spots],
        payments=[PaymentResponse.model_validate(payment) for payment in detail.payments],
        files=[ContractFileResponse.model_validate(item) for item in detail.files],
    )
    return success({"contract": response.model_dump(mode="json")})


@router.post("", status_code=status.HTTP_201_CREATED)
def create_contract(
    payload: ContractCreateRequest,
    identity: Identity = Depends(requires("contracts.write")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    contract = ContractService(db, settings).create_contract(identity, payload.model_dump())
    return success({"contract": _contract(contract)}, "Contract created successfully.")


@router.put("/{contract_id}")
def update_contract(
    contract_id: int,
    payload: ContractUpdateRequest,
    identity: Identity = Depends(requires("contracts.write")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    contract = ContractService(db, settings).update_contract(
        identity, contract_id, payload.model_dump(exclude_unset=True)
    )
    return success({"contract": _contract(contract)}, "Contract updated successfully.")


@router.put("/{contract_id}/approve")
def approve_contract(
    contract_id: int,
    identity: Identity = Depends(requires("contracts.approve")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    contract = ContractService(db, settings).approve(identity, contract_id)
    return success({"contract": _contract(contract)}, "Contract approved successfully.")


@router.put("/{contract_id}/complete")
def complete_contract(
    contract_id: int,
    identity: Identity = Depends(requires("contracts.transition")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    contract = ContractService(db, settings).complete(identity, contract_id)
    return success({"contract": _contract(contract)}, "Contract completed successfully.")


@router.put("/{contract_id}/cancel")
def cancel_contract(
    contract_id: int,
    identity: Identity = Depends(requires("contracts.transition")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    contract = ContractService(db, settings).cancel(identity, contract_id)
    return success({"contract": _contract(contract)}, "Contract cancelled successfully.")


@router.delete("/{contract_id}")
def delete_contract(
    contract_id: int,
    identity: Identity = Depends(requires("contracts.delete")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    ContractService(db, settings).delete_contract(identity, contract_id)
    return success(message="Contract deleted successfully.")
