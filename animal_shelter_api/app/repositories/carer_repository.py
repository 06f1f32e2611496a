"""
Carer persistence.

``CarerRepository`` is the contract the service layer depends on.
``SQLiteCarerRepository`` stores carers in the application database
(see ``core.db``), ``InMemoryCarerRepository`` keeps them in a dict
and is handy for tests and local experiments.

All queries use parameterized statements.  Every call opens its own
connection and runs as a single transaction (``core.db.get_cursor``).
"""

import itertools
import sqlite3
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Callable, Dict, List, Optional

from ..core.db import get_connection, get_cursor
from ..core.errors import StorageError
from ..models.carer import Carer


class CarerRepository(ABC):
    """Persists and queries carers."""

    @abstractmethod
    def save(self, carer: Carer) -> Carer:
        """Insert or update a carer.

        A carer whose ``id`` matches a stored row overwrites that row.
        Otherwise a new row is inserted and the returned carer carries
        the store-assigned ``id``.  On overwrite an ``agreement_number``
        of ``None`` keeps the stored one.  Either way it is one write.
        """

    @abstractmethod
    def find_by_id(self, carer_id: int) -> Optional[Carer]:
        """Return the carer with the given id, or None."""

    @abstractmethod
    def find_by_agreement_number(self, agreement_number: str) -> Optional[Carer]:
        """Return the carer holding the agreement, or None."""

    @abstractmethod
    def find_by_phone_number(self, phone_number: str) -> Optional[Carer]:
        """Return the first carer with this phone number, or None."""

    @abstractmethod
    def exists_by_full_name_and_phone_number(self, full_name: str, phone_number: str) -> bool:
        """Return True if some carer has exactly this name and phone."""

    @abstractmethod
    def delete_by_id(self, carer_id: int) -> None:
        """Delete the carer.  Raises ``StorageError`` if no row matches."""

    @abstractmethod
    def find_all(self) -> List[Carer]:
        """Return all carers ordered by id."""


class SQLiteCarerRepository(CarerRepository):
    """Carer repository backed by the ``carers`` table."""

    _COLUMNS = "id, full_name, birth_year, phone_number, agreement_number"

    def __init__(self, connect: Callable[[], sqlite3.Connection] = get_connection) -> None:
        self._connect = connect

    def save(self, carer: Carer) -> Carer:
        with get_cursor(self._connect) as cursor:
            if carer.id:
                cursor.execute(
                    """
                    UPDATE carers
                    SET full_name = ?, birth_year = ?, phone_number = ?,
                        agreement_number = COALESCE(?, agreement_number),
                        updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                    """,
                    (
                        carer.full_name,
                        carer.birth_year,
                        carer.phone_number,
                        carer.agreement_number,
                        carer.id,
                    ),
                )
                if cursor.rowcount:
                    row = cursor.execute(
                        f"SELECT {self._COLUMNS} FROM carers WHERE id = ?",
                        (carer.id,),
                    ).fetchone()
                    return self._row_to_carer(row)
            cursor.execute(
                """
                INSERT INTO carers (full_name, birth_year, phone_number, agreement_number)
                VALUES (?, ?, ?, ?)
                """,
                (carer.full_name, carer.birth_year, carer.phone_number, carer.agreement_number),
            )
            return replace(carer, id=cursor.lastrowid)

    def find_by_id(self, carer_id: int) -> Optional[Carer]:
        with get_cursor(self._connect) as cursor:
            row = cursor.execute(
                f"SELECT {self._COLUMNS} FROM carers WHERE id = ?",
                (carer_id,),
            ).fetchone()
        return self._row_to_carer(row) if row else None

    def find_by_agreement_number(self, agreement_number: str) -> Optional[Carer]:
        with get_cursor(self._connect) as cursor:
            row = cursor.execute(
                f"SELECT {self._COLUMNS} FROM carers WHERE agreement_number = ? ORDER BY id LIMIT 1",
                (agreement_number,),
            ).fetchone()
        return self._row_to_carer(row) if row else None

    def find_by_phone_number(self, phone_number: str) -> Optional[Carer]:
        with get_cursor(self._connect) as cursor:
            row = cursor.execute(
                f"SELECT {self._COLUMNS} FROM carers WHERE phone_number = ? ORDER BY id LIMIT 1",
                (phone_number,),
            ).fetchone()
        return self._row_to_carer(row) if row else None

    def exists_by_full_name_and_phone_number(self, full_name: str, phone_number: str) -> bool:
        with get_cursor(self._connect) as cursor:
            row = cursor.execute(
                "SELECT 1 FROM carers WHERE full_name = ? AND phone_number = ? LIMIT 1",
                (full_name, phone_number),
            ).fetchone()
        return row is not None

    def delete_by_id(self, carer_id: int) -> None:
        with get_cursor(self._connect) as cursor:
            cursor.execute("DELETE FROM carers WHERE id = ?", (carer_id,))
            if cursor.rowcount == 0:
                raise StorageError(f"No carer with id {carer_id} to delete")

    def find_all(self) -> List[Carer]:
        with get_cursor(self._connect) as cursor:
            rows = cursor.execute(f"SELECT {self._COLUMNS} FROM carers ORDER BY id").fetchall()
        return [self._row_to_carer(row) for row in rows]

    @staticmethod
    def _row_to_carer(row: sqlite3.Row) -> Carer:
        return Carer(
            id=row["id"],
            full_name=row["full_name"],
            birth_year=row["birth_year"],
            phone_number=row["phone_number"],
            agreement_number=row["agreement_number"],
        )


class InMemoryCarerRepository(CarerRepository):
    """Stores carers in memory.  Ids are assigned from 1 upwards."""

    def __init__(self) -> None:
        self._by_id: Dict[int, Carer] = {}
        self._ids = itertools.count(1)

    def save(self, carer: Carer) -> Carer:
        existing = self._by_id.get(carer.id) if carer.id else None
        if existing is None:
            carer = replace(carer, id=next(self._ids))
        elif carer.agreement_number is None:
            carer = replace(carer, agreement_number=existing.agreement_number)
        self._by_id[carer.id] = carer
        return carer

    def find_by_id(self, carer_id: int) -> Optional[Carer]:
        return self._by_id.get(carer_id)

    def find_by_agreement_number(self, agreement_number: str) -> Optional[Carer]:
        return next(
            (c for c in self.find_all() if c.agreement_number == agreement_number),
            None,
        )

    def find_by_phone_number(self, phone_number: str) -> Optional[Carer]:
        return next((c for c in self.find_all() if c.phone_number == phone_number), None)

    def exists_by_full_name_and_phone_number(self, full_name: str, phone_number: str) -> bool:
        return any(
            c.full_name == full_name and c.phone_number == phone_number
            for c in self._by_id.values()
        )

    def delete_by_id(self, carer_id: int) -> None:
        if self._by_id.pop(carer_id, None) is None:
            raise StorageError(f"No carer with id {carer_id} to delete")

    def find_all(self) -> List[Carer]:
        return [self._by_id[carer_id] for carer_id in sorted(self._by_id)]
