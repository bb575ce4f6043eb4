from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.exceptions import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from app.models import Contract, ContractFile, ContractStatus, Payment, PaymentStatus, SpotSchedule, SpotStatus
from app.services.client_service import ClientService
from app.services.contract_service import ContractService
from app.utils.pagination import PageRequest

FIRST_PAGE = PageRequest(page=1, limit=10)


def test_create_contract_derives_values_and_starts_as_draft(seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())
    assert contract.contract_number == "CT20260001"
    assert contract.total_value == Decimal("1000.00")
    assert contract.final_value == Decimal("900.00")
    assert contract.status == ContractStatus.DRAFT
    assert contract.payment_status == PaymentStatus.PENDING
    assert contract.created_by == seed.manager.id
    assert contract.approved_by is None
    assert contract.client.company_name == "Padaria Central"


def test_create_contract_rejects_announcer_and_bad_references(seed, contracts, make_payload):
    with pytest.raises(AuthorizationError):
        contracts.create_contract(seed.as_announcer, make_payload())
    with pytest.raises(ValidationError) as exc_info:
        contracts.create_contract(seed.as_admin, make_payload(client_id=999, ad_type_id=999))
    assert {error["field"] for error in exc_info.value.errors} == {"client_id", "ad_type_id"}
    with pytest.raises(ValidationError):
        contracts.create_contract(seed.as_admin, make_payload(end_date=date(2026, 1, 1)))


def test_create_contract_rejects_inactive_client(session, seed, contracts, make_payload):
    seed.client.is_active = False
    session.commit()
    with pytest.raises(ValidationError):
        contracts.create_contract(seed.as_admin, make_payload())


def test_approve_records_approver(seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())
    approved = contracts.approve(seed.as_admin, contract.id)
    assert approved.status == ContractStatus.ACTIVE
    assert approved.approved_by == seed.admin.id
    assert approved.approver.full_name == "Ana Admin"


def test_approve_fails_for_non_draft(seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())
    contracts.approve(seed.as_manager, contract.id)
    with pytest.raises(InvalidStateError):
        contracts.approve(seed.as_manager, contract.id)

    cancelled = contracts.create_contract(seed.as_manager, make_payload())
    contracts.cancel(seed.as_manager, cancelled.id)
    with pytest.raises(InvalidStateError):
        contracts.approve(seed.as_admin, cancelled.id)


def test_approve_forbidden_for_announcer(seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())
    with pytest.raises(AuthorizationError):
        contracts.approve(seed.as_announcer, contract.id)


def test_complete_requires_active_and_past_end_date(seed, contracts, make_payload):
    finished = contracts.create_contract(seed.as_manager, make_payload())
    running = contracts.create_contract(seed.as_manager, make_payload(end_date=date(2026, 12, 31)))
    with pytest.raises(InvalidStateError):
        contracts.complete(seed.as_manager, finished.id)

    contracts.approve(seed.as_manager, finished.id)
    contracts.approve(seed.as_manager, running.id)
    assert contracts.complete(seed.as_manager, finished.id).status == ContractStatus.COMPLETED
    with pytest.raises(InvalidStateError):
        contracts.complete(seed.as_manager, running.id)


def test_cancel_is_terminal(seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())
    contracts.approve(seed.as_manager, contract.id)
    assert contracts.cancel(seed.as_manager, contract.id).status == ContractStatus.CANCELLED
    with pytest.raises(InvalidStateError):
        contracts.cancel(seed.as_manager, contract.id)


def test_update_recomputes_only_with_spots_and_price(seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())

    partial = contracts.update_contract(seed.as_manager, contract.id, {"total_spots": 20})
    assert partial.total_spots == 20
    assert partial.final_value == Decimal("900.00")

    full = contracts.update_contract(
        seed.as_manager, contract.id, {"total_spots": 20, "price_per_spot": Decimal("50.00")}
    )
    assert full.total_value == Decimal("1000.00")
    assert full.final_value == Decimal("900.00")

    rediscounted = contracts.update_contract(
        seed.as_manager,
        contract.id,
        {"total_spots": 20, "price_per_spot": Decimal("50.00"), "discount_percentage": Decimal("25")},
    )
    assert rediscounted.final_value == Decimal("750.00")
    assert rediscounted.discount_percentage == Decimal("25.00")


def test_update_checks_merged_dates_and_rejects_status(seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())
    with pytest.raises(ValidationError):
        contracts.update_contract(seed.as_manager, contract.id, {"end_date": date(2025, 12, 31)})
    with pytest.raises(ValidationError):
        contracts.update_contract(seed.as_manager, contract.id, {"status": "active"})
    with pytest.raises(AuthorizationError):
        contracts.update_contract(seed.as_announcer, contract.id, {"title": "Novo título"})

    updated = contracts.update_contract(
        seed.as_manager, contract.id, {"title": "Campanha de Inverno", "payment_status": "paid"}
    )
    assert updated.title == "Campanha de Inverno"
    assert updated.payment_status == PaymentStatus.PAID
    assert updated.status == ContractStatus.DRAFT


def test_delete_cascades_dependents(session, seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())
    session.add_all(
        [
            SpotSchedule(contract_id=contract.id, scheduled_date=date(2026, 1, 5), scheduled_time="07:30", status=SpotStatus.SCHEDULED),
            Payment(contract_id=contract.id, amount=Decimal("450.00"), payment_date=date(2026, 1, 10), created_by=seed.admin.id),
            ContractFile(contract_id=contract.id, file_name="contrato.pdf", file_path="/files/contrato.pdf", uploaded_by=seed.admin.id),
        ]
    )
    session.commit()

    with pytest.raises(AuthorizationError):
        contracts.delete_contract(seed.as_manager, contract.id)
    contracts.delete_contract(seed.as_admin, contract.id)

    for model in (Contract, SpotSchedule, Payment, ContractFile):
        assert session.execute(select(func.count()).select_from(model)).scalar_one() == 0
    with pytest.raises(NotFoundError):
        contracts.get_contract(seed.as_admin, contract.id)


def test_delete_refuses_active_contract(seed, contracts, make_payload):
    contract = contracts.create_contract(seed.as_manager, make_payload())
    contracts.approve(seed.as_manager, contract.id)
    with pytest.raises(InvalidStateError):
        contracts.delete_contract(seed.as_admin, contract.id)


def test_announcer_only_sees_own_programs(seed, contracts, make_payload):
    own = contracts.create_contract(seed.as_manager, make_payload(title="Contrato da manhã"))
    foreign = contracts.create_contract(seed.as_manager, make_payload(program=seed.other_program, title="Contrato da tarde"))

    visible, total = contracts.list_contracts(seed.as_announcer, FIRST_PAGE)
    assert total == 1
    assert [contract.id for contract in visible] == [own.id]

    _, manager_total = contracts.list_contracts(seed.as_manager, FIRST_PAGE)
    assert manager_total == 2

    detail = contracts.get_contract(seed.as_announcer, own.id)
    assert detail.contract.id == own.id
    with pytest.raises(AuthorizationError):
        contracts.get_contract(seed.as_announcer, foreign.id)

    stats = contracts.contract_stats(seed.as_other_announcer)["stats"]
    assert stats["total_contracts"] == 1
    assert stats["final_value"] == Decimal("900.00")


def test_list_filters_and_search(seed, contracts, make_payload):
    first = contracts.create_contract(seed.as_manager, make_payload(title="Promoção 50% off"))
    contracts.create_contract(seed.as_manager, make_payload(title="Campanha institucional"))
    contracts.approve(seed.as_manager, first.id)

    active, total = contracts.list_contracts(seed.as_admin, FIRST_PAGE, status="active")
    assert total == 1 and active[0].id == first.id

    found, total = contracts.list_contracts(seed.as_admin, FIRST_PAGE, search="50%")
    assert total == 1 and found[0].id == first.id

    by_client, total = contracts.list_contracts(seed.as_admin, FIRST_PAGE, search="padaria")
    assert total == 2

    _, total = contracts.list_contracts(seed.as_admin, FIRST_PAGE, search="CT20260002")
    assert total == 1

    with pytest.raises(ValidationError):
        contracts.list_contracts(seed.as_admin, FIRST_PAGE, status="archived")


def test_list_pagination(seed, contracts, make_payload):
    for _ in range(3):
        contracts.create_contract(seed.as_manager, make_payload())
    page, total = contracts.list_contracts(seed.as_admin, PageRequest(page=2, limit=2))
    assert total == 3
    assert len(page) == 1


def test_stats_aggregate_by_status(seed, contracts, make_payload):
    draft = contracts.create_contract(seed.as_manager, make_payload())
    active = contracts.create_contract(seed.as_manager, make_payload(total_spots=5, discount_percentage=Decimal("0")))
    contracts.approve(seed.as_manager, active.id)
    contracts.update_contract(seed.as_manager, active.id, {"payment_status": "paid"})

    result = contracts.contract_stats(seed.as_admin)
    stats = result["stats"]
    assert stats["total_contracts"] == 2
    assert stats["draft_contracts"] == 1
    assert stats["active_contracts"] == 1
    assert stats["total_value"] == Decimal("1500.00")
    assert stats["final_value"] == Decimal("1400.00")
    assert stats["paid_value"] == Decimal("500.00")
    assert stats["pending_value"] == Decimal("900.00")
    assert sum(month["contracts_count"] for month in result["monthly_contracts"]) == 2
    assert draft.id != active.id


def test_contract_service_uses_injected_clock(session, config, seed, make_payload):
    service = ContractService(session, config, today=lambda: date(2027, 2, 1))
    assert service.create_contract(seed.as_admin, make_payload()).contract_number == "CT20270001"


def test_client_deactivated_after_reference_check_blocks_creation(session, config, seed, contracts, make_payload, monkeypatch):
    check_references = ContractService._ensure_references

    def check_then_deactivate(self, *ids):
        check_references(self, *ids)
        ClientService(session, config).deactivate_client(seed.client.id)

    monkeypatch.setattr(ContractService, "_ensure_references", check_then_deactivate)
    with pytest.raises(ValidationError) as excinfo:
        contracts.create_contract(seed.as_manager, make_payload())
    assert excinfo.value.errors[0]["field"] == "client_id"
    assert session.execute(select(func.count(Contract.id))).scalar_one() == 0
