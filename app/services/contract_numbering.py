"""Per-year contract number allocation (``CT<year><0001>``)."""

from __future__ import annotations

import re

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models import Contract, ContractSequence

PREFIX = "CT"
SEQUENCE_WIDTH = 4


def year_prefix(year: int) -> str:
    return f"{PREFIX}{year}"


def format_contract_number(year: int, sequence: int) -> str:
    return f"{year_prefix(year)}{sequence:0{SEQUENCE_WIDTH}d}"


def parse_sequence(contract_number: str, year: int) -> int | None:
    """Return the numeric suffix of a number issued in ``year``, else None."""
    match = re.fullmatch(rf"{year_prefix(year)}(\d+)", contract_number or "")
    return int(match.group(1)) if match else None


def highest_issued_sequence(db: Session, year: int) -> int:
    """Scan issued numbers for the year, highest first, and return the largest suffix."""
    prefix = year_prefix(year)
    numbers = db.execute(
        select(Contract.contract_number)
        .where(Contract.contract_number.like(f"{prefix}%"))
        .order_by(Contract.contract_number.desc())
    ).scalars()
    highest = 0
    for number in numbers:
        sequence = parse_sequence(number, year)
        if sequence is not None and sequence > highest:
            highest = sequence
    return highest


def next_number(db: Session, year: int) -> str:
    """Allocate the next contract number for ``year`` inside the caller's transaction.

    The counter UPDATE runs first so the write lock on the sequence row is
    held before anything is read; concurrent allocations for the same year
    queue behind it until the surrounding transaction ends. A missing row is
    seeded from already issued numbers; two racing seeds collide on the
    primary key and the loser's transaction is retried by the caller.
    """
    result = db.execute(
        update(ContractSequence)
        .where(ContractSequence.year == year)
        .values(last_value=ContractSequence.last_value + 1)
        .execution_options(synchronize_session=False)
    )

    if result.rowcount:
        bumped = db.execute(
            select(ContractSequence.last_value).where(ContractSequence.year == year)
        ).scalar_one()
    else:
        bumped = highest_issued_sequence(db, year) + 1
        db.add(ContractSequence(year=year, last_value=bumped))
        db.flush()

    return format_contract_number(year, bumped)
