from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.services.client_service import ClientService


def test_create_contract_scenario(api, login, contract_json):
    response = api.post("/api/contracts", json=contract_json(), headers=login("manager"))
    assert response.status_code == 201
    contract = response.json()["data"]["contract"]
    assert contract["contract_number"] == f"CT{date.today().year}0001"
    assert contract["total_value"] == "1000.00"
    assert contract["final_value"] == "900.00"
    assert contract["status"] == "draft"
    assert contract["company_name"] == "Padaria Central"
    assert contract["created_by_name"] == "Marcos Gerente"


def test_contract_lifecycle_over_http(api, login, contract_json):
    manager = login("manager")
    contract_id = api.post("/api/contracts", json=contract_json(), headers=manager).json()["data"]["contract"]["id"]

    assert api.put(f"/api/contracts/{contract_id}/approve", headers=login("locutor")).status_code == 403

    approved = api.put(f"/api/contracts/{contract_id}/approve", headers=manager)
    assert approved.status_code == 200
    assert approved.json()["data"]["contract"]["status"] == "active"
    assert approved.json()["data"]["contract"]["approved_by_name"] == "Marcos Gerente"

    again = api.put(f"/api/contracts/{contract_id}/approve", headers=manager)
    assert again.status_code == 400
    assert again.json()["success"] is False

    assert api.delete(f"/api/contracts/{contract_id}", headers=login("admin")).status_code == 400

    completed = api.put(f"/api/contracts/{contract_id}/complete", headers=manager)
    assert completed.status_code == 200
    assert completed.json()["data"]["contract"]["status"] == "completed"

    assert api.put(f"/api/contracts/{contract_id}/cancel", headers=manager).status_code == 400
    assert api.delete(f"/api/contracts/{contract_id}", headers=manager).status_code == 403
    assert api.delete(f"/api/contracts/{contract_id}", headers=login("admin")).status_code == 200
    assert api.get(f"/api/contracts/{contract_id}", headers=manager).status_code == 404


def test_update_rejects_status_field(api, login, contract_json):
    manager = login("manager")
    contract_id = api.post("/api/contracts", json=contract_json(), headers=manager).json()["data"]["contract"]["id"]

    response = api.put(f"/api/contracts/{contract_id}", json={"status": "active"}, headers=manager)
    assert response.status_code == 400
    assert response.json()["errors"]

    updated = api.put(
        f"/api/contracts/{contract_id}",
        json={"total_spots": 20, "price_per_spot": "50.00", "discount_percentage": "0"},
        headers=manager,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["contract"]["final_value"] == "1000.00"
    assert updated.json()["data"]["contract"]["status"] == "draft"


def test_request_validation_errors_use_envelope(api, login, contract_json):
    response = api.post(
        "/api/contracts", json=contract_json(total_spots=0, end_date="2019-01-01"), headers=login("admin")
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert "total_spots" in {error["field"] for error in body["errors"]}


def test_announcer_scope_over_http(api, login, seed, contract_json):
    manager = login("manager")
    own = api.post("/api/contracts", json=contract_json(), headers=manager).json()["data"]["contract"]
    foreign = api.post(
        "/api/contracts", json=contract_json(program=seed.other_program, title="Tarde promocional"), headers=manager
    ).json()["data"]["contract"]

    announcer = login("locutor")
    listing = api.get("/api/contracts", headers=announcer).json()["data"]
    assert [item["id"] for item in listing["contracts"]] == [own["id"]]
    assert listing["pagination"]["total"] == 1

    assert api.get(f"/api/contracts/{own['id']}", headers=announcer).status_code == 200
    assert api.get(f"/api/contracts/{foreign['id']}", headers=announcer).status_code == 403
    assert api.post("/api/contracts", json=contract_json(), headers=announcer).status_code == 403

    stats = api.get("/api/contracts/stats", headers=announcer).json()["data"]["stats"]
    assert stats["total_contracts"] == 1
    assert stats["final_value"] == "900.00"


def test_contract_detail_lists_dependents(api, login, contract_json):
    manager = login("manager")
    contract_id = api.post("/api/contracts", json=contract_json(), headers=manager).json()["data"]["contract"]["id"]
    detail = api.get(f"/api/contracts/{contract_id}", headers=manager).json()["data"]["contract"]
    assert detail["spots"] == []
    assert detail["payments"] == []
    assert detail["files"] == []
    assert detail["program_name"] == "Manhã Total"


def test_contract_list_filters(api, login, contract_json):
    manager = login("manager")
    first = api.post("/api/contracts", json=contract_json(), headers=manager).json()["data"]["contract"]
    api.post("/api/contracts", json=contract_json(title="Outra campanha"), headers=manager)
    api.put(f"/api/contracts/{first['id']}/approve", headers=manager)

    active = api.get("/api/contracts", params={"status": "active"}, headers=manager).json()["data"]
    assert [item["id"] for item in active["contracts"]] == [first["id"]]

    invalid = api.get("/api/contracts", params={"status": "archived"}, headers=manager)
    assert invalid.status_code == 400


def test_client_endpoints(api, login, seed, contract_json):
    manager = login("manager")
    payload = {"company_name": "Ótica Visão", "contact_name": "Paula", "email": "paula@otica.com.br"}
    created = api.post("/api/clients", json=payload, headers=manager)
    assert created.status_code == 201
    assert api.post("/api/clients", json=payload, headers=manager).status_code == 409
    assert api.post("/api/clients", json=payload, headers=login("locutor")).status_code == 403

    listing = api.get("/api/clients", params={"search": "visão"}, headers=login("locutor")).json()["data"]
    assert listing["pagination"]["total"] == 1

    api.post("/api/contracts", json=contract_json(), headers=manager)
    detail = api.get(f"/api/clients/{seed.client.id}", headers=manager).json()["data"]
    assert len(detail["contracts"]) == 1
    assert detail["contracts"][0]["final_value"] == "900.00"

    stats = api.get(f"/api/clients/{seed.client.id}/stats", headers=manager).json()["data"]
    assert stats["stats"]["total_contracts"] == 1
    assert api.get(f"/api/clients/{seed.client.id}/stats", headers=login("locutor")).status_code == 403

    admin = login("admin")
    assert api.delete(f"/api/clients/{seed.client.id}", headers=manager).status_code == 403
    assert api.delete(f"/api/clients/{seed.client.id}", headers=admin).status_code == 400
    new_id = created.json()["data"]["client"]["id"]
    assert api.delete(f"/api/clients/{new_id}", headers=admin).status_code == 200
    assert api.get(f"/api/clients/{new_id}", headers=admin).status_code == 404


def test_request_id_is_propagated(api):
    response = api.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert api.get("/api/health").headers["X-Request-ID"]


def test_unexpected_errors_return_generic_500(config, database, seed, login, monkeypatch):
    def explode(self, *args, **kwargs):
        raise RuntimeError("connection string with secrets")

    monkeypatch.setattr(ClientService, "list_clients", explode)
    client = TestClient(create_app(config, database), raise_server_exceptions=False)
    response = client.get("/api/clients", headers=login("admin"))
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error."}


@pytest.mark.parametrize("path", ["/api/contracts", "/api/clients", "/api/users"])
def test_pagination_shape(api, login, path):
    response = api.get(path, params={"page": 1, "limit": 5}, headers=login("admin"))
    assert response.status_code == 200
    pagination = response.json()["data"]["pagination"]
    assert set(pagination) == {"page", "limit", "total", "total_pages"}
    assert pagination["limit"] == 5


def test_client_detail_hides_other_programs_from_announcer(api, login, seed, contract_json):
    manager = login("manager")
    api.post("/api/contracts", json=contract_json(program=seed.other_program), headers=manager)

    detail = api.get(f"/api/clients/{seed.client.id}", headers=login("locutor"))
    assert detail.status_code == 200
    assert detail.json()["data"]["contracts"] == []

    full = api.get(f"/api/clients/{seed.client.id}", headers=manager).json()["data"]
    assert [row["program_name"] for row in full["contracts"]] == ["Tarde Show"]
