"""Persisted carer model."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Carer:
    """A person looking after a shelter animal.

    Attributes:
        id: Store-assigned identifier; ``None`` before the first save
        full_name: "second_name first_name patronymic"
        birth_year: Year of birth derived from the age given at save time
        phone_number: Contact phone, e.g. ``+7(999)1234567``
        agreement_number: Number of the adoption agreement, if signed
    """

    full_name: str
    birth_year: int
    phone_number: str
    id: Optional[int] = None
    agreement_number: Optional[str] = None

    def __repr__(self) -> str:
        return f"Carer(id={self.id}, full_name='{self.full_name}')"
