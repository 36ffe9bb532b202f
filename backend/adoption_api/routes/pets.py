"""
Pet Adoption API — Pet Route Handlers
======================================

What:  CRUD endpoints for pets plus the per-pet application and medical
       record listings.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from adoption_api.dependencies import (
    get_application_service,
    get_medical_record_repository,
    get_pet_repository,
    parse_status_filter,
)
from adoption_api.exceptions import NotFoundError
from adoption_api.repositories.medical_records import MedicalRecordRepository
from adoption_api.repositories.pets import PetRepository
from adoption_api.schemas.application import Application
from adoption_api.schemas.common import DataResponse, ErrorResponse
from adoption_api.schemas.medical_record import MedicalRecord
from adoption_api.schemas.pet import Pet, PetCreate, PetStatus, PetUpdate
from adoption_api.services.application_service import ApplicationService

router = APIRouter(prefix="/api/pets", tags=["Pets"])


@router.get(
    "",
    response_model=DataResponse[List[Pet]],
    responses={400: {"description": "Invalid status filter", "model": ErrorResponse}},
    summary="List pets, optionally filtered by status and/or type",
)
async def list_pets(
    status: Optional[str] = Query(default=None, description="available | pending | adopted | not_available"),
    type: Optional[str] = Query(default=None, description="dog | cat | bird | rabbit | hamster | other"),
    pets: PetRepository = Depends(get_pet_repository),
) -> DataResponse[List[Pet]]:
    """
    With both filters, the store is queried by status and the type filter
    is applied to that result.
    """
    status_filter = parse_status_filter(status, PetStatus)

    if status_filter is not None and type:
        by_status = await pets.list_by_status(status_filter)
        result = [pet for pet in by_status if pet.type.value == type]
    elif status_filter is not None:
        result = await pets.list_by_status(status_filter)
    elif type:
        result = await pets.list_by_type(type)
    else:
        result = await pets.list()

    return DataResponse[List[Pet]](data=result)


@router.get(
    "/{pet_id}/applications",
    response_model=DataResponse[List[Application]],
    responses={404: {"description": "Pet not found", "model": ErrorResponse}},
    summary="List the applications filed for a pet",
)
async def list_pet_applications(
    pet_id: UUID,
    applications: ApplicationService = Depends(get_application_service),
) -> DataResponse[List[Application]]:
    return DataResponse[List[Application]](data=await applications.list_for_pet(pet_id))


@router.get(
    "/{pet_id}/medical-records",
    response_model=DataResponse[List[MedicalRecord]],
    responses={404: {"description": "Pet not found", "model": ErrorResponse}},
    summary="List the medical records of a pet",
)
async def list_pet_medical_records(
    pet_id: UUID,
    pets: PetRepository = Depends(get_pet_repository),
    medical_records: MedicalRecordRepository = Depends(get_medical_record_repository),
) -> DataResponse[List[MedicalRecord]]:
    if await pets.get(pet_id) is None:
        raise NotFoundError("Pet", str(pet_id))
    return DataResponse[List[MedicalRecord]](data=await medical_records.list_by_pet(pet_id))


@router.get(
    "/{pet_id}",
    response_model=DataResponse[Pet],
    responses={404: {"description": "Pet not found", "model": ErrorResponse}},
    summary="Get a pet by ID",
)
async def get_pet(
    pet_id: UUID,
    pets: PetRepository = Depends(get_pet_repository),
) -> DataResponse[Pet]:
    pet = await pets.get(pet_id)
    if pet is None:
        raise NotFoundError("Pet", str(pet_id))
    return DataResponse[Pet](data=pet)


@router.post(
    "",
    status_code=201,
    response_model=DataResponse[Pet],
    responses={400: {"description": "Validation error", "model": ErrorResponse}},
    summary="Create a pet",
)
async def create_pet(
    payload: PetCreate,
    pets: PetRepository = Depends(get_pet_repository),
) -> DataResponse[Pet]:
    return DataResponse[Pet](data=await pets.create(payload))


@router.patch(
    "/{pet_id}",
    response_model=DataResponse[Pet],
    responses={404: {"description": "Pet not found", "model": ErrorResponse}},
    summary="Partially update a pet",
)
async def update_pet(
    pet_id: UUID,
    payload: PetUpdate,
    pets: PetRepository = Depends(get_pet_repository),
) -> DataResponse[Pet]:
    return DataResponse[Pet](data=await pets.update(pet_id, payload.to_changes()))


@router.delete(
    "/{pet_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a pet (its applications and medical records are kept)",
)
async def delete_pet(
    pet_id: UUID,
    pets: PetRepository = Depends(get_pet_repository),
) -> Response:
    await pets.delete(pet_id)
    return Response(status_code=204)
