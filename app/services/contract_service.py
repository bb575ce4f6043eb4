"""Contract service: creation, updates, lifecycle transitions and scoped reads."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.auth.session import Identity
from app.auth.visibility import contract_visibility_clause, ensure_contract_visible
from app.core.config import Config
from app.core.exceptions import InternalError, NotFoundError, ValidationError
from app.domain import lifecycle, valuation
from app.models import (
    AdType,
    Client,
    Contract,
    ContractFile,
    ContractStatus,
    Payment,
    PaymentStatus,
    RadioProgram,
    SpotSchedule,
)
from app.services.base_service import BaseService
from app.services.contract_numbering import next_number
from app.services.stats import contract_totals, monthly_series
from app.utils.pagination import PageRequest
from app.utils.validators import LIKE_ESCAPE, like_pattern, sanitize_text

logger = logging.getLogger(__name__)

REFERENCE_FIELDS = ("client_id", "program_id", "ad_type_id")
PLAIN_FIELDS = ("title", "description", "start_date", "end_date", "payment_status")


@dataclass
class ContractDetail:
    contract: Contract
    spots: list[SpotSchedule] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    files: list[ContractFile] = field(default_factory=list)


def _with_references(stmt):
    return stmt.options(
        joinedload(Contract.client),
        joinedload(Contract.program),
        joinedload(Contract.ad_type),
        joinedload(Contract.creator),
        joinedload(Contract.approver),
    )


def _enum_filter(enum_cls, value: str, field_name: str):
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {field_name} filter.", errors=[{"field": field_name, "message": f"unknown {field_name}"}]
        ) from exc


class ContractService(BaseService):
    """Service for the contract workflow.

    Every read is narrowed by the caller's visibility rule, and every write
    passes through valuation and the lifecycle checks before it is flushed.
    """

    def __init__(self, db: Session, config: Config | None = None, today: Callable[[], date] | None = None) -> None:
        super().__init__(db, config)
        self.today = today or date.today

    def _scope(self, identity: Identity) -> list[ColumnElement[bool]]:
        clause = contract_visibility_clause(identity)
        return [] if clause is None else [clause]

    def _load(self, contract_id: int) -> Contract:
        contract = self.db.execute(
            _with_references(select(Contract))
            .where(Contract.id == contract_id)
            .execution_options(populate_existing=True)
        ).unique().scalar_one_or_none()
        if contract is None:
            raise NotFoundError("Contract not found.")
        return contract

    def _ensure_references(self, client_id: int | None, program_id: int | None, ad_type_id: int | None) -> None:
        errors = []
        if client_id is not None:
            found = self.db.execute(
                select(Client.id).where(Client.id == client_id, Client.is_active.is_(True))
            ).first()
            if found is None:
                errors.append({"field": "client_id", "message": "client not found"})
        if program_id is not None:
            found = self.db.execute(
                select(RadioProgram.id).where(RadioProgram.id == program_id, RadioProgram.is_active.is_(True))
            ).first()
            if found is None:
                errors.append({"field": "program_id", "message": "program not found"})
        if ad_type_id is not None:
            found = self.db.execute(
                select(AdType.id).where(AdType.id == ad_type_id, AdType.is_active.is_(True))
            ).first()
            if found is None:
                errors.append({"field": "ad_type_id", "message": "ad type not found"})
        if errors:
            raise ValidationError("Referenced records do not exist.", errors=errors)

    def _lock_active_client(self, client_id: int) -> None:
        found = self.db.execute(
            select(Client.id).where(Client.id == client_id, Client.is_active.is_(True)).with_for_update()
        ).first()
        if found is None:
            raise ValidationError(
                "Referenced records do not exist.", errors=[{"field": "client_id", "message": "client not found"}]
            )

    def list_contracts(
        self,
        identity: Identity,
        page: PageRequest,
        search: str | None = None,
        status: str | None = None,
        payment_status: str | None = None,
    ) -> tuple[list[Contract], int]:
        filters = self._scope(identity)
        if search:
            pattern = like_pattern(search)
            filters.append(
                or_(
                    Contract.contract_number.ilike(pattern, escape=LIKE_ESCAPE),
                    Contract.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Client.company_name.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        if status:
            filters.append(Contract.status == _enum_filter(ContractStatus, status, "status"))
        if payment_status:
            filters.append(Contract.payment_status == _enum_filter(PaymentStatus, payment_status, "payment_status"))

        total = self.db.execute(
            select(func.count(Contract.id)).join(Client, Contract.client_id == Client.id).where(*filters)
        ).scalar_one()
        contracts = self.db.execute(
            _with_references(select(Contract))
            .join(Client, Contract.client_id == Client.id)
            .where(*filters)
            .order_by(Contract.created_at.desc(), Contract.id.desc())
            .limit(page.limit)
            .offset(page.offset)
        ).unique().scalars()
        return list(contracts), int(total)

    def get_contract(self, identity: Identity, contract_id: int) -> ContractDetail:
        contract = self._load(contract_id)
        ensure_contract_visible(identity, contract)
        spots = self.db.execute(
            select(SpotSchedule)
            .where(SpotSchedule.contract_id == contract.id)
            .order_by(SpotSchedule.scheduled_date, SpotSchedule.scheduled_time)
        ).scalars()
        payments = self.db.execute(
            select(Payment).where(Payment.contract_id == contract.id).order_by(Payment.payment_date.desc())
        ).scalars()
        files = self.db.execute(
            select(ContractFile).where(ContractFile.contract_id == contract.id).order_by(ContractFile.uploaded_at.desc())
        ).scalars()
        return ContractDetail(contract=contract, spots=list(spots), payments=list(payments), files=list(files))

    def create_contract(self, identity: Identity, data: dict[str, Any]) -> Contract:
        lifecycle.ensure_can_modify(identity)
        self._ensure_references(data["client_id"], data["program_id"], data["ad_type_id"])
        if data["end_date"] <= data["start_date"]:
            raise ValidationError(
                "End date must be after start date.",
                errors=[{"field": "end_date", "message": "must be after start_date"}],
            )
        values = valuation.compute(
            data["total_spots"], data["price_per_spot"], data.get("discount_percentage") or 0
        )
        year = self.today().year

        attempts = self.config.CONTRACT_NUMBER_MAX_RETRIES
        for _ in range(attempts):
            contract = Contract(
                client_id=data["client_id"],
                program_id=data["program_id"],
                ad_type_id=data["ad_type_id"],
                title=sanitize_text(data["title"], max_len=200),
                description=data.get("description"),
                start_date=data["start_date"],
                end_date=data["end_date"],
                total_spots=data["total_spots"],
                price_per_spot=valuation.quantize_money(valuation.to_decimal(data["price_per_spot"], "price_per_spot")),
                discount_percentage=valuation.to_decimal(data.get("discount_percentage") or 0, "discount_percentage"),
                total_value=values.total_value,
                final_value=values.final_value,
                status=ContractStatus.DRAFT,
                payment_status=PaymentStatus.PENDING,
                created_by=identity.user_id,
            )
            try:
                with self.transaction():
                    self._lock_active_client(contract.client_id)
                    contract.contract_number = next_number(self.db, year)
                    self.db.add(contract)
                    self.db.flush()
            except IntegrityError:
                logger.warning(
                    "contract.number_conflict",
                    extra={"event": "contract.number_conflict", "user_id": identity.user_id},
                )
                continue
            logger.info(
                "contract.created",
                extra={
                    "event": "contract.created",
                    "user_id": identity.user_id,
                    "contract_id": contract.id,
                    "contract_number": contract.contract_number,
                },
            )
            return self._load(contract.id)

        raise InternalError(f"Could not allocate a contract number after {attempts} attempts.")

    def update_contract(self, identity: Identity, contract_id: int, changes: dict[str, Any]) -> Contract:
        if "status" in changes:
            raise ValidationError(
                "Status cannot be changed by update.",
                errors=[{"field": "status", "message": "use approve, complete or cancel"}],
            )
        lifecycle.ensure_can_modify(identity)
        contract = self._load(contract_id)
        self._ensure_references(*(changes.get(name) for name in REFERENCE_FIELDS))

        start_date = changes.get("start_date") or contract.start_date
        end_date = changes.get("end_date") or contract.end_date
        if end_date <= start_date:
            raise ValidationError(
                "End date must be after start date.",
                errors=[{"field": "end_date", "message": "must be after start_date"}],
            )

        recomputed = None
        if changes.get("total_spots") is not None and changes.get("price_per_spot") is not None:
            discount = changes.get("discount_percentage")
            if discount is None:
                discount = contract.discount_percentage
            recomputed = valuation.compute(changes["total_spots"], changes["price_per_spot"], discount)

        with self.transaction():
            if changes.get("client_id") is not None:
                self._lock_active_client(changes["client_id"])
            for name in REFERENCE_FIELDS + PLAIN_FIELDS:
                value = changes.get(name)
                if value is None:
                    continue
                if name == "title":
                    value = sanitize_text(value, max_len=200)
                elif name == "payment_status":
                    value = PaymentStatus(value)
                setattr(contract, name, value)
            if changes.get("discount_percentage") is not None:
                contract.discount_percentage = valuation.to_decimal(changes["discount_percentage"], "discount_percentage")
            if changes.get("total_spots") is not None:
                contract.total_spots = changes["total_spots"]
            if changes.get("price_per_spot") is not None:
                contract.price_per_spot = valuation.quantize_money(
                    valuation.to_decimal(changes["price_per_spot"], "price_per_spot")
                )
            if recomputed is not None:
                contract.total_value = recomputed.total_value
                contract.final_value = recomputed.final_value

        logger.info(
            "contract.updated",
            extra={"event": "contract.updated", "user_id": identity.user_id, "contract_id": contract.id},
        )
        return self._load(contract.id)

    def _transition(self, identity: Identity, contract: Contract, target: str, event: str) -> Contract:
        with self.transaction():
            contract.status = ContractStatus(target)
            if target == lifecycle.ACTIVE:
                contract.approved_by = identity.user_id
        logger.info(
            event,
            extra={
                "event": event,
                "user_id": identity.user_id,
                "contract_id": contract.id,
                "contract_number": contract.contract_number,
            },
        )
        return self._load(contract.id)

    def approve(self, identity: Identity, contract_id: int) -> Contract:
        contract = self._load(contract_id)
        target = lifecycle.check_approve(contract.status, identity)
        return self._transition(identity, contract, target, "contract.approved")

    def complete(self, identity: Identity, contract_id: int) -> Contract:
        contract = self._load(contract_id)
        target = lifecycle.check_complete(contract.status, contract.end_date, identity, self.today())
        return self._transition(identity, contract, target, "contract.completed")

    def cancel(self, identity: Identity, contract_id: int) -> Contract:
        contract = self._load(contract_id)
        target = lifecycle.check_cancel(contract.status, identity)
        return self._transition(identity, contract, target, "contract.cancelled")

    def delete_contract(self, identity: Identity, contract_id: int) -> None:
        contract = self._load(contract_id)
        lifecycle.check_delete(contract.status, identity)
        with self.transaction():
            for dependent in (SpotSchedule, Payment, ContractFile):
                self.db.execute(delete(dependent).where(dependent.contract_id == contract.id))
            self.db.delete(contract)
        logger.info(
            "contract.deleted",
            extra={
                "event": "contract.deleted",
                "user_id": identity.user_id,
                "contract_id": contract_id,
                "contract_number": contract.contract_number,
            },
        )

    def contract_stats(self, identity: Identity) -> dict[str, Any]:
        scope = self._scope(identity)
        return {
            "stats": contract_totals(self.db, scope),
            "monthly_contracts": monthly_series(self.db, scope),
        }
