"""
Pydantic schema for carer payloads.

The wire shape splits the name into three parts and carries the age,
while the stored record keeps a joined full name and a birth year.
JSON keys are camelCase (``secondName``, ``phoneNumber``) to stay
compatible with the existing bot and admin clients; Python code uses
the snake_case attribute names.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CarerRecord(BaseModel):
    """Schema for creating, editing and reading a carer."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = Field(0, description="Carer ID; 0 or absent for a new carer")
    second_name: Optional[str] = Field(None, alias="secondName", description="Фамилия")
    first_name: Optional[str] = Field(None, alias="firstName", description="Имя")
    patronymic: Optional[str] = Field(None, description="Отчество")
    age: int = Field(0, description="Age in full years")
    phone_number: Optional[str] = Field(
        None, alias="phoneNumber", description="Phone number, e.g. +7(999)1234567"
    )
