"""Data access layer.  Services depend on the abstract repositories only."""

from .carer_repository import (
    CarerRepository,
    InMemoryCarerRepository,
    SQLiteCarerRepository,
)

__all__ = ["CarerRepository", "InMemoryCarerRepository", "SQLiteCarerRepository"]
