"""Aggregate contract statistics shared by the client and contract services."""

from __future__ import annotations

from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import ColumnElement, case, func, select
from sqlalchemy.orm import Session

from app.domain.valuation import quantize_money
from app.models import Contract, ContractStatus, PaymentStatus

MONTHLY_WINDOW_DAYS = 365


def _money(value: Any) -> Decimal:
    return quantize_money(Decimal(str(value or 0)))


def _count_where(condition: ColumnElement[bool]):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


def _sum_where(condition: ColumnElement[bool], column):
    return func.coalesce(func.sum(case((condition, column), else_=0)), 0)


def contract_totals(db: Session, filters: list[ColumnElement[bool]]) -> dict[str, Any]:
    """Counts per status plus value sums for the contracts matching ``filters``."""
    row = db.execute(
        select(
            func.count(Contract.id).label("total_contracts"),
            _count_where(Contract.status == ContractStatus.DRAFT).label("draft_contracts"),
            _count_where(Contract.status == ContractStatus.ACTIVE).label("active_contracts"),
            _count_where(Contract.status == ContractStatus.COMPLETED).label("completed_contracts"),
            _count_where(Contract.status == ContractStatus.CANCELLED).label("cancelled_contracts"),
            func.coalesce(func.sum(Contract.total_value), 0).label("total_value"),
            func.coalesce(func.sum(Contract.final_value), 0).label("final_value"),
            _sum_where(Contract.payment_status == PaymentStatus.PAID, Contract.final_value).label("paid_value"),
            _sum_where(Contract.payment_status == PaymentStatus.PENDING, Contract.final_value).label("pending_value"),
        ).where(*filters)
    ).mappings().one()

    stats: dict[str, Any] = {}
    for key, value in row.items():
        stats[key] = _money(value) if key.endswith("_value") else int(value or 0)
    return stats


def monthly_series(
    db: Session,
    filters: list[ColumnElement[bool]],
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """Contracts created per month over the last twelve months, oldest first."""
    now = now or datetime.now(timezone.utc)
    since = now - timedelta(days=MONTHLY_WINDOW_DAYS)
    rows = db.execute(
        select(Contract.created_at, Contract.final_value)
        .where(*filters, Contract.created_at >= since)
        .order_by(Contract.created_at)
    ).all()

    buckets: OrderedDict[str, dict[str, Any]] = OrderedDict()
    for created_at, final_value in rows:
        month = created_at.strftime("%Y-%m")
        bucket = buckets.setdefault(month, {"month": month, "contracts_count": 0, "total_value": Decimal("0")})
        bucket["contracts_count"] += 1
        bucket["total_value"] += _money(final_value)
    return list(buckets.values())
