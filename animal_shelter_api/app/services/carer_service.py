"""
Service layer for carers (people looking after shelter animals).

``CarerService`` validates input, converts between ``CarerRecord``
payloads and ``Carer`` models and talks to a ``CarerRepository``.  It
is used by the HTTP endpoints and by the telegram bot, which registers
carers from a dialogue through :meth:`CarerService.add_carer_from_bot`.

Both entry points go through the same validation: the full name and
the phone number must not be blank.  The birth year is computed from
the age with the injected ``clock`` so results are reproducible.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import date
from typing import Callable, List, Optional

from ..core.errors import CarerNotFoundError, InvalidArgumentError
from ..models.carer import Carer
from ..repositories.carer_repository import CarerRepository
from ..schemas.carer import CarerRecord
from .carer_mapper import (
    join_full_name,
    map_to_carer_entity,
    map_to_carer_record,
    split_full_name,
)

logger = logging.getLogger(__name__)

PHONE_NUMBER_PATTERN = re.compile(r"\+\d{1,7}\(\d{3}\)\d{7}")

MISSING_CARER_MESSAGE = "Требуется добавить опекуна"
INVALID_CARER_DATA_MESSAGE = (
    "Требуется указать корректные данные: имя опекуна, телефонный номер опекуна"
)
INVALID_ID_MESSAGE = "Требуется указать корректный id опекуна"
INVALID_PHONE_MESSAGE = "Требуется указать телефонный номер в формате +7(999)1234567"

# Largest id an SQLite INTEGER column can hold.
MAX_CARER_ID = 2 ** 63 - 1


class CarerService:
    """Сервис для работы с опекунами животных."""

    def __init__(
        self,
        repository: CarerRepository,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._repo = repository
        self._clock = clock

    def _current_year(self) -> int:
        return self._clock().year

    @staticmethod
    def _validate_record(record: Optional[CarerRecord]) -> None:
        if record is None:
            logger.error("Input object 'record' is null")
            raise InvalidArgumentError(MISSING_CARER_MESSAGE)
        if record.id is not None and record.id > MAX_CARER_ID:
            logger.error("Input id = %s of carer record is incorrect", record.id)
            raise InvalidArgumentError(INVALID_ID_MESSAGE)
        full_name = join_full_name(record.second_name, record.first_name, record.patronymic).strip()
        phone_number = (record.phone_number or "").strip()
        if not full_name or not phone_number:
            logger.error("Carer's full name or phone number is empty")
            raise InvalidArgumentError(INVALID_CARER_DATA_MESSAGE)

    @staticmethod
    def _validate_id(carer_id: int, action: str) -> None:
        if carer_id < 0 or carer_id > MAX_CARER_ID:
            logger.error("Input id = %s for %s carer is incorrect", carer_id, action)
            raise InvalidArgumentError(INVALID_ID_MESSAGE)

    def _create(self, record: CarerRecord, full_name: Optional[str] = None) -> Carer:
        self._validate_record(record)
        # A new carer always gets a store-assigned id.
        carer = replace(map_to_carer_entity(record, self._current_year()), id=None)
        if full_name is not None:
            carer = replace(carer, full_name=full_name)
        return self._repo.save(carer)

    async def add_carer(self, record: Optional[CarerRecord]) -> CarerRecord:
        """Add a carer and return it with the assigned id.

        Raises ``InvalidArgumentError`` if ``record`` is missing or its
        name or phone number is blank.
        """
        logger.info("Was invoked method for adding carer")
        carer = self._create(record)
        logger.info("Created carer %s", carer.id)
        return map_to_carer_record(carer, self._current_year())

    async def add_carer_from_bot(self, full_name: str, age: int, phone_number: str) -> Carer:
        """Add a carer from raw telegram bot input.

        ``full_name`` is split into its parts the same way stored names
        are split, so the result passes through the same validation and
        mapping as :meth:`add_carer`.  The full name is stored as given.
        """
        logger.info("Was invoked method for adding carer from Telegram bot")
        second_name, first_name, patronymic = split_full_name(full_name)
        record = CarerRecord(
            second_name=second_name,
            first_name=first_name,
            patronymic=patronymic,
            age=age,
            phone_number=phone_number,
        )
        carer = self._create(record, full_name=full_name)
        logger.info("Created carer %s from Telegram bot", carer.id)
        return carer

    async def find_carer(self, carer_id: int) -> CarerRecord:
        """Return the carer with the given id.

        Raises ``InvalidArgumentError`` for an id outside
        ``0..MAX_CARER_ID`` (the store is not queried) and
        ``CarerNotFoundError`` if there is no such carer.
        """
        self._validate_id(carer_id, "getting")
        logger.info("Was invoked method to find carer")
        carer = self._repo.find_by_id(carer_id)
        if carer is None:
            raise CarerNotFoundError(f"Опекун с id = {carer_id} не найден")
        return map_to_carer_record(carer, self._current_year())

    async def find_carer_by_agreement_number(self, agreement_number: str) -> Carer:
        logger.info("Was invoked method to find carer by agreement number")
        carer = self._repo.find_by_agreement_number(agreement_number)
        if carer is None:
            raise CarerNotFoundError(f"Опекун с номером договора {agreement_number} не найден")
        return carer

    async def edit_carer(self, record: Optional[CarerRecord]) -> CarerRecord:
        """Replace a carer with the data from ``record``.

        The whole record is rewritten; there is no partial update.  If
        ``record.id`` does not match a stored carer a new one is created.
        The agreement number of an existing carer is kept by the
        repository within the same write.
        """
        logger.info("Was invoked method to edit carer")
        self._validate_record(record)
        saved = self._repo.save(map_to_carer_entity(record, self._current_year()))
        logger.info("Saved carer %s", saved.id)
        return map_to_carer_record(saved, self._current_year())

    async def delete_carer(self, carer_id: int) -> None:
        """Delete a carer.

        Raises ``InvalidArgumentError`` for an out-of-range id.  Failures of
        the store (including an unknown id) are propagated unchanged.
        """
        self._validate_id(carer_id, "deleting")
        logger.info("Was invoked method to delete carer")
        self._repo.delete_by_id(carer_id)

    async def exists_carer_by_full_name_and_phone_number(
        self, full_name: str, phone_number: str
    ) -> bool:
        return self._repo.exists_by_full_name_and_phone_number(full_name, phone_number)

    async def find_carer_by_phone_number(self, phone_number: str) -> Carer:
        """Return the carer with the given phone number.

        The number must look like ``+7(999)1234567``; anything else
        raises ``InvalidArgumentError``.
        """
        if not PHONE_NUMBER_PATTERN.fullmatch(phone_number or ""):
            logger.error("Phone number %r does not match the expected format", phone_number)
            raise InvalidArgumentError(INVALID_PHONE_MESSAGE)
        logger.info("Was invoked method to find carer by phone number")
        carer = self._repo.find_by_phone_number(phone_number)
        if carer is None:
            raise CarerNotFoundError(f"Опекун с номером телефона {phone_number} не найден")
        return carer

    async def find_all(self) -> List[Carer]:
        return self._repo.find_all()

    def to_record(self, carer: Carer) -> CarerRecord:
        """Convert a stored carer into the API payload."""
        return map_to_carer_record(carer, self._current_year())
