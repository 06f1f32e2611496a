"""API tests for the /carer routes.

Most tests run the service on an in-memory repository; the ``sqlite_client``
tests go through ``SQLiteCarerRepository`` and a temporary database.
"""

import pytest
from fastapi.testclient import TestClient

from animal_shelter_api.app.api.v1.endpoints.carers import CARER_EXAMPLE, get_carer_service
from animal_shelter_api.app.main import app
from animal_shelter_api.app.models.carer import Carer
from animal_shelter_api.app.repositories import SQLiteCarerRepository
from animal_shelter_api.app.services.carer_service import (
    INVALID_CARER_DATA_MESSAGE,
    INVALID_ID_MESSAGE,
    MAX_CARER_ID,
    MISSING_CARER_MESSAGE,
    CarerService,
)
from conftest import TODAY


@pytest.fixture
def client(service):
    app.dependency_overrides[get_carer_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _add(client, **overrides) -> dict:
    body = dict(CARER_EXAMPLE, **overrides)
    r = client.post("/carer", json=body)
    assert r.status_code == 200
    return r.json()


def test_post_stores_carer(client, repository):
    r = client.post("/carer", json=CARER_EXAMPLE)
    assert r.status_code == 200
    data = r.json()
    assert data["id"] != 0
    for key in ("secondName", "firstName", "patronymic", "age", "phoneNumber"):
        assert data[key] == CARER_EXAMPLE[key]
    assert repository.find_by_id(data["id"]).birth_year == TODAY.year - 30


def test_post_blank_name_is_bad_request(client):
    r = client.post("/carer", json=dict(CARER_EXAMPLE, secondName="", firstName="", patronymic=""))
    assert r.status_code == 400
    assert r.text == INVALID_CARER_DATA_MESSAGE


def test_post_without_body_is_bad_request(client):
    r = client.post("/carer")
    assert r.status_code == 400
    assert r.text == MISSING_CARER_MESSAGE


def test_post_malformed_body_is_bad_request(client):
    r = client.post("/carer", json=dict(CARER_EXAMPLE, age="thirty"))
    assert r.status_code == 400


def test_get_by_id(client):
    created = _add(client)
    r = client.get(f"/carer/{created['id']}")
    assert r.status_code == 200
    assert r.json() == created


def test_get_negative_id_is_bad_request(client):
    r = client.get("/carer/-1")
    assert r.status_code == 400
    assert r.text == INVALID_ID_MESSAGE


def test_get_non_integer_id_is_bad_request(client):
    assert client.get("/carer/abc").status_code == 400


def test_get_unknown_id_is_not_found(client):
    r = client.get("/carer/999")
    assert r.status_code == 404
    assert "999" in r.text


def test_put_updates_carer(client):
    created = _add(client)
    r = client.put("/carer", json=dict(created, phoneNumber="+7(999)0000000"))
    assert r.status_code == 200
    assert r.json()["id"] == created["id"]
    assert client.get(f"/carer/{created['id']}").json()["phoneNumber"] == "+7(999)0000000"


def test_put_without_body_is_bad_request(client):
    assert client.put("/carer").status_code == 400


def test_delete(client):
    created = _add(client)
    r = client.delete(f"/carer/{created['id']}")
    assert r.status_code == 200
    assert r.content == b""
    assert client.get(f"/carer/{created['id']}").status_code == 404


def test_delete_negative_id_is_bad_request(client):
    assert client.delete("/carer/-3").status_code == 400


def test_delete_unknown_id_is_server_error(client):
    r = client.delete("/carer/77")
    assert r.status_code == 500
    assert r.text == "Internal server error"


def test_list_carers(client):
    first = _add(client)
    second = _add(client, firstName="Пётр")
    r = client.get("/carer")
    assert r.status_code == 200
    assert r.json() == [first, second]


def test_find_by_phone_number(client):
    created = _add(client)
    r = client.get("/carer/phone", params={"phoneNumber": "+7(999)1234567"})
    assert r.status_code == 200
    assert r.json() == created


def test_find_by_malformed_phone_number_is_bad_request(client):
    r = client.get("/carer/phone", params={"phoneNumber": "7-999-123-4567"})
    assert r.status_code == 400


def test_find_by_agreement_number(client, repository):
    stored = repository.save(
        Carer(full_name="Сидоров Сидор Сидорович", birth_year=1980, phone_number="+7(999)5555555", agreement_number="A-1")
    )
    r = client.get("/carer/agreement/A-1")
    assert r.status_code == 200
    assert r.json()["id"] == stored.id
    assert r.json()["age"] == TODAY.year - 1980
    assert client.get("/carer/agreement/A-2").status_code == 404


def test_empty_second_name_round_trips(client):
    created = _add(client, secondName="")
    found = client.get(f"/carer/{created['id']}").json()
    assert (found["secondName"], found["firstName"], found["patronymic"]) == ("", "Иван", "Иванович")


@pytest.fixture
def sqlite_client(sqlite_db):
    service = CarerService(SQLiteCarerRepository(), clock=lambda: TODAY)
    app.dependency_overrides[get_carer_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_crud_flow_on_sqlite(sqlite_client):
    created = _add(sqlite_client)
    assert created["id"] > 0

    r = sqlite_client.get(f"/carer/{created['id']}")
    assert r.status_code == 200
    assert r.json() == created

    r = sqlite_client.put("/carer", json=dict(created, age=31))
    assert r.status_code == 200
    assert sqlite_client.get(f"/carer/{created['id']}").json()["age"] == 31

    assert sqlite_client.delete(f"/carer/{created['id']}").status_code == 200
    assert sqlite_client.get(f"/carer/{created['id']}").status_code == 404


@pytest.mark.parametrize("carer_id", [MAX_CARER_ID + 1, 2 ** 70])
def test_id_beyond_64_bits_is_bad_request_on_sqlite(sqlite_client, carer_id):
    r = sqlite_client.get(f"/carer/{carer_id}")
    assert r.status_code == 400
    assert r.text == INVALID_ID_MESSAGE
    assert sqlite_client.delete(f"/carer/{carer_id}").status_code == 400
    assert sqlite_client.put("/carer", json=dict(CARER_EXAMPLE, id=carer_id)).status_code == 400


def test_delete_unknown_id_on_sqlite_is_server_error(sqlite_client):
    r = sqlite_client.delete("/carer/404")
    assert r.status_code == 500
    assert r.text == "Internal server error"
