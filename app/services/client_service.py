"""Client (advertiser) service."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, or_, select

from app.auth.session import Identity
from app.auth.visibility import contract_visibility_clause
from app.core.exceptions import ConflictError, InvalidStateError, NotFoundError
from app.domain.lifecycle import OPEN_STATUSES
from app.models import AdType, Client, Contract, ContractStatus, RadioProgram
from app.services.base_service import BaseService
from app.services.stats import contract_totals, monthly_series
from app.utils.pagination import PageRequest
from app.utils.validators import LIKE_ESCAPE, like_pattern

logger = logging.getLogger(__name__)

CLIENT_FIELDS = ("company_name", "contact_name", "email", "phone", "address", "cnpj")


class ClientService(BaseService):
    """Service for client CRUD, soft delete and per-client statistics."""

    def _ensure_unique(self, email: str | None, cnpj: str | None, exclude_id: int | None = None) -> None:
        # Email and CNPJ only need to be unique among active clients.
        conditions = []
        if email:
            conditions.append(Client.email == email)
        if cnpj:
            conditions.append(Client.cnpj == cnpj)
        if not conditions:
            return
        stmt = select(Client.id).where(or_(*conditions), Client.is_active.is_(True))
        if exclude_id is not None:
            stmt = stmt.where(Client.id != exclude_id)
        if self.db.execute(stmt.limit(1)).first() is not None:
            raise ConflictError("A client with this email or CNPJ already exists.")

    def get_client(self, client_id: int) -> Client:
        client = self.db.execute(
            select(Client).where(Client.id == client_id, Client.is_active.is_(True))
        ).scalar_one_or_none()
        if client is None:
            raise NotFoundError("Client not found.")
        return client

    def list_clients(self, page: PageRequest, search: str | None = None) -> tuple[list[Client], int]:
        filters = [Client.is_active.is_(True)]
        if search:
            pattern = like_pattern(search)
            filters.append(
                or_(
                    Client.company_name.ilike(pattern, escape=LIKE_ESCAPE),
                    Client.contact_name.ilike(pattern, escape=LIKE_ESCAPE),
                    Client.email.ilike(pattern, escape=LIKE_ESCAPE),
                    Client.cnpj.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        total = self.db.execute(select(func.count()).select_from(Client).where(*filters)).scalar_one()
        clients = self.db.execute(
            select(Client)
            .where(*filters)
            .order_by(Client.company_name.asc(), Client.id.asc())
            .limit(page.limit)
            .offset(page.offset)
        ).scalars()
        return list(clients), int(total)

    def list_client_contracts(self, identity: Identity, client_id: int) -> list[dict[str, Any]]:
        filters = [Contract.client_id == client_id]
        clause = contract_visibility_clause(identity)
        if clause is not None:
            filters.append(clause)
        rows = self.db.execute(
            select(
                Contract.id,
                Contract.contract_number,
                Contract.title,
                Contract.start_date,
                Contract.end_date,
                Contract.total_value,
                Contract.final_value,
                Contract.status,
                Contract.payment_status,
                RadioProgram.program_name,
                AdType.type_name,
            )
            .join(RadioProgram, Contract.program_id == RadioProgram.id)
            .join(AdType, Contract.ad_type_id == AdType.id)
            .where(*filters)
            .order_by(Contract.created_at.desc(), Contract.id.desc())
        ).mappings()
        return [dict(row) for row in rows]

    def create_client(self, data: dict[str, Any]) -> Client:
        self._ensure_unique(data.get("email"), data.get("cnpj"))
        client = Client(**{field: data.get(field) for field in CLIENT_FIELDS}, is_active=True)
        with self.transaction():
            self.db.add(client)
        self.db.refresh(client)
        logger.info("client.created", extra={"event": "client.created", "client_id": client.id})
        return client

    def update_client(self, client_id: int, changes: dict[str, Any]) -> Client:
        client = self.get_client(client_id)
        self._ensure_unique(changes.get("email"), changes.get("cnpj"), exclude_id=client.id)
        with self.transaction():
            for field in CLIENT_FIELDS:
                value = changes.get(field)
                if value is not None:
                    setattr(client, field, value)
        self.db.refresh(client)
        logger.info("client.updated", extra={"event": "client.updated", "client_id": client.id})
        return client

    def deactivate_client(self, client_id: int) -> Client:
        with self.transaction():
            # Contract creation and update lock this row too.
            client = self.db.execute(
                select(Client)
                .where(Client.id == client_id, Client.is_active.is_(True))
                .with_for_update()
                .execution_options(populate_existing=True)
            ).scalar_one_or_none()
            if client is None:
                raise NotFoundError("Client not found.")
            open_contract = self.db.execute(
                select(Contract.id)
                .where(
                    Contract.client_id == client.id,
                    Contract.status.in_([ContractStatus(status) for status in OPEN_STATUSES]),
                )
                .limit(1)
            ).first()
            if open_contract is not None:
                raise InvalidStateError("Cannot deactivate a client with active or draft contracts.")
            client.is_active = False
        logger.info("client.deactivated", extra={"event": "client.deactivated", "client_id": client.id})
        return client

    def client_stats(self, client_id: int) -> dict[str, Any]:
        client = self.get_client(client_id)
        scope = [Contract.client_id == client.id]
        return {
            "stats": contract_totals(self.db, scope),
            "monthly_contracts": monthly_series(self.db, scope),
        }
