"""
Carer endpoints for API v1.

These routes expose a CRUD API for carers: people who take shelter
animals home.  Validation lives in ``CarerService``; errors it raises
are turned into HTTP responses by the handlers registered in
``app.main`` (400 for invalid input, 404 for unknown carers).
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from animal_shelter_api.app.repositories.carer_repository import SQLiteCarerRepository
from animal_shelter_api.app.schemas.carer import CarerRecord
from animal_shelter_api.app.services.carer_service import CarerService

router = APIRouter()

CARER_EXAMPLE = {
    "id": 0,
    "secondName": "Иванов",
    "firstName": "Иван",
    "patronymic": "Иванович",
    "age": 30,
    "phoneNumber": "+7(999)1234567",
}


def get_carer_service() -> CarerService:
    """Build the carer service on top of the application database."""
    return CarerService(SQLiteCarerRepository())


@router.post(
    "",
    response_model=CarerRecord,
    summary="Добавление данных опекуна",
    responses={500: {"description": "Internal server error"}},
)
async def add_carer(
    record: Optional[CarerRecord] = Body(None, examples=[CARER_EXAMPLE]),
    service: CarerService = Depends(get_carer_service),
) -> CarerRecord:
    """Add a carer and return it with the assigned id."""
    return await service.add_carer(record)


@router.get("", response_model=List[CarerRecord], summary="Список опекунов")
async def list_carers(service: CarerService = Depends(get_carer_service)) -> List[CarerRecord]:
    carers = await service.find_all()
    return [service.to_record(carer) for carer in carers]


@router.get(
    "/phone",
    response_model=CarerRecord,
    summary="Поиск опекуна по номеру телефона",
    responses={400: {"description": "Incorrect phone number"}, 404: {"description": "Carer not found"}},
)
async def find_carer_by_phone_number(
    phone_number: str = Query(..., alias="phoneNumber", description="Номер телефона, +7(999)1234567"),
    service: CarerService = Depends(get_carer_service),
) -> CarerRecord:
    carer = await service.find_carer_by_phone_number(phone_number)
    return service.to_record(carer)


@router.get(
    "/agreement/{agreement_number}",
    response_model=CarerRecord,
    summary="Поиск опекуна по номеру договора",
    responses={404: {"description": "Carer not found"}},
)
async def find_carer_by_agreement_number(
    agreement_number: str,
    service: CarerService = Depends(get_carer_service),
) -> CarerRecord:
    carer = await service.find_carer_by_agreement_number(agreement_number)
    return service.to_record(carer)


@router.get(
    "/{carer_id}",
    response_model=CarerRecord,
    summary="Поиск опекуна по ID",
    responses={
        400: {"description": "Incorrect id"},
        404: {"description": "Carer with current id not found"},
    },
)
async def find_carer(carer_id: int, service: CarerService = Depends(get_carer_service)) -> CarerRecord:
    """Retrieve a single carer by ID."""
    return await service.find_carer(carer_id)


@router.put(
    "",
    response_model=CarerRecord,
    summary="Редактирование данных опекуна",
    responses={500: {"description": "Internal server error"}},
)
async def edit_carer(
    record: Optional[CarerRecord] = Body(None, examples=[CARER_EXAMPLE]),
    service: CarerService = Depends(get_carer_service),
) -> CarerRecord:
    """Rewrite a carer; a record without a known id creates a new carer."""
    return await service.edit_carer(record)


@router.delete(
    "/{carer_id}",
    summary="Удаление опекуна",
    responses={400: {"description": "Incorrect id"}},
)
async def delete_carer(carer_id: int, service: CarerService = Depends(get_carer_service)) -> Response:
    await service.delete_carer(carer_id)
    return Response(status_code=200)
