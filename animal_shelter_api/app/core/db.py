"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a transactional cursor that maps SQLite failures
to ``StorageError`` (``get_cursor``) and applying migrations on
application start (``init_db``).  It uses SQLite as a lightweight
embedded database; to switch to another DBMS you would replace
connection logic and adapt SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, List, Tuple

from .config import settings
from .errors import StorageError


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: carers table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS carers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            full_name TEXT NOT NULL,
            birth_year INTEGER NOT NULL,
            phone_number TEXT NOT NULL,
            agreement_number TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: lookup indexes.  The (full_name, phone_number) index is
    # deliberately not UNIQUE: the duplicate check is advisory only.
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_carers_phone_number ON carers (phone_number);
        CREATE INDEX IF NOT EXISTS idx_carers_agreement_number ON carers (agreement_number);
        CREATE INDEX IF NOT EXISTS idx_carers_name_phone ON carers (full_name, phone_number);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # animal_shelter_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(
    connect: Callable[[], sqlite3.Connection] = get_connection,
) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success, roll back on error and close.

    Everything executed through the cursor is one transaction.  SQLite
    errors are re-raised as ``StorageError``.
    """
    conn = connect()
    try:
        yield conn.cursor()
        conn.commit()
    except sqlite3.Error as exc:
        conn.rollback()
        raise StorageError(f"Database error: {exc}") from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
