"""Shared fixtures: fixed clock, in-memory service, temporary SQLite database."""

from datetime import date

import pytest

from animal_shelter_api.app.core.config import settings
from animal_shelter_api.app.core.db import init_db
from animal_shelter_api.app.repositories import InMemoryCarerRepository
from animal_shelter_api.app.schemas.carer import CarerRecord
from animal_shelter_api.app.services.carer_service import CarerService

TODAY = date(2024, 6, 1)


def ivanov(**overrides) -> CarerRecord:
    data = {
        "id": 0,
        "secondName": "Иванов",
        "firstName": "Иван",
        "patronymic": "Иванович",
        "age": 30,
        "phoneNumber": "+7(999)1234567",
    }
    data.update(overrides)
    return CarerRecord(**data)


@pytest.fixture
def repository() -> InMemoryCarerRepository:
    return InMemoryCarerRepository()


@pytest.fixture
def service(repository) -> CarerService:
    return CarerService(repository, clock=lambda: TODAY)


@pytest.fixture
def sqlite_db(tmp_path, monkeypatch):
    path = tmp_path / "shelter.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    init_db()
    return path
