"""
Conversion between the ``CarerRecord`` payload and the ``Carer`` model.

The functions are pure: the current year is passed in by the caller so
that results do not depend on the wall clock.
"""

from typing import Tuple

from ..models.carer import Carer
from ..schemas.carer import CarerRecord


def join_full_name(second_name: str, first_name: str, patronymic: str) -> str:
    """Join the name parts with single spaces.

    Empty parts keep their separators, so ``split_full_name`` puts every
    part back into its own slot.
    """
    return " ".join(part or "" for part in (second_name, first_name, patronymic))


def split_full_name(full_name: str) -> Tuple[str, str, str]:
    """Split a full name into (second name, first name, patronymic).

    Splits on the first two spaces only, so any further spaces stay in
    the patronymic.  Missing parts are returned as empty strings.
    """
    parts = (full_name or "").split(" ", 2)
    parts += [""] * (3 - len(parts))
    return parts[0], parts[1], parts[2]


def map_to_carer_entity(record: CarerRecord, current_year: int) -> Carer:
    return Carer(
        id=record.id if record.id and record.id > 0 else None,
        full_name=join_full_name(record.second_name, record.first_name, record.patronymic),
        birth_year=current_year - record.age,
        phone_number=record.phone_number or "",
    )


def map_to_carer_record(carer: Carer, current_year: int) -> CarerRecord:
    second_name, first_name, patronymic = split_full_name(carer.full_name)
    return CarerRecord(
        id=carer.id or 0,
        second_name=second_name,
        first_name=first_name,
        patronymic=patronymic,
        age=current_year - carer.birth_year,
        phone_number=carer.phone_number,
    )
