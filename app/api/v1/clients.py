"""Client endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1._authz import requires
from app.auth.session import Identity
from app.core.config import Config
from app.core.dependencies import get_db_session, get_settings
from app.schemas.clients import ClientContractRow, ClientCreateRequest, ClientResponse, ClientUpdateRequest
from app.schemas.common import Pagination, success
from app.services.client_service import ClientService
from app.utils.pagination import page_request

router = APIRouter(prefix="/clients", tags=["clients"])


def _client(client) -> dict:
    return ClientResponse.model_validate(client).model_dump(mode="json")


@router.get("")
def list_clients(
    page: int | None = Query(default=None),
    limit: int | None = Query(default=None),
    search: str | None = Query(default=None),
    identity: Identity = Depends(requires("clients.read")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    paging = page_request(page, limit, settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
    clients, total = ClientService(db, settings).list_clients(paging, search=search)
    return success(
        {
            "clients": [_client(client) for client in clients],
            "pagination": Pagination.build(paging.page, paging.limit, total).model_dump(),
        }
    )


@router.get("/{client_id}")
def get_client(
    client_id: int,
    identity: Identity = Depends(requires("clients.read")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    service = ClientService(db, settings)
    client = service.get_client(client_id)
    contracts = service.list_client_contracts(identity, client.id)
    return success(
        {
            "client": _client(client),
            "contracts": [ClientContractRow.model_validate(row).model_dump(mode="json") for row in contracts],
        }
    )


@router.get("/{client_id}/stats")
def get_client_stats(
    client_id: int,
    identity: Identity = Depends(requires("clients.stats")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    service = ClientService(db, settings)
    client = service.get_client(client_id)
    stats = service.client_stats(client.id)
    return success({"client": {"id": client.id, "company_name": client.company_name}, **stats})


@router.post("", status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientCreateRequest,
    identity: Identity = Depends(requires("clients.write")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    client = ClientService(db, settings).create_client(payload.model_dump())
    return success({"client": _client(client)}, "Client created successfully.")


@router.put("/{client_id}")
def update_client(
    client_id: int,
    payload: ClientUpdateRequest,
    identity: Identity = Depends(requires("clients.write")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    client = ClientService(db, settings).update_client(client_id, payload.model_dump(exclude_unset=True))
    return success({"client": _client(client)}, "Client updated successfully.")


@router.delete("/{client_id}")
def delete_client(
    client_id: int,
    identity: Identity = Depends(requires("clients.delete")),
    db: Session = Depends(get_db_session),
    settings: Config = Depends(get_settings),
) -> dict:
    ClientService(db, settings).deactivate_client(client_id)
    return success(message="Client deactivated successfully.")
