"""
Pet Adoption API — Medical Record Route Handlers
=================================================
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from adoption_api.dependencies import get_medical_record_repository
from adoption_api.exceptions import NotFoundError
from adoption_api.repositories.medical_records import MedicalRecordRepository
from adoption_api.schemas.common import DataResponse, ErrorResponse
from adoption_api.schemas.medical_record import (
    MedicalRecord,
    MedicalRecordCreate,
    MedicalRecordUpdate,
)

router = APIRouter(prefix="/api/medical-records", tags=["Medical Records"])


@router.get(
    "",
    response_model=DataResponse[List[MedicalRecord]],
    summary="List medical records, optionally for one pet",
)
async def list_medical_records(
    pet_id: Optional[UUID] = Query(default=None),
    medical_records: MedicalRecordRepository = Depends(get_medical_record_repository),
) -> DataResponse[List[MedicalRecord]]:
    if pet_id is not None:
        records = await medical_records.list_by_pet(pet_id)
    else:
        records = await medical_records.list()
    return DataResponse[List[MedicalRecord]](data=records)


@router.get(
    "/{record_id}",
    response_model=DataResponse[MedicalRecord],
    responses={404: {"description": "Medical record not found", "model": ErrorResponse}},
    summary="Get a medical record by ID",
)
async def get_medical_record(
    record_id: UUID,
    medical_records: MedicalRecordRepository = Depends(get_medical_record_repository),
) -> DataResponse[MedicalRecord]:
    record = await medical_records.get(record_id)
    if record is None:
        raise NotFoundError("Medical record", str(record_id))
    return DataResponse[MedicalRecord](data=record)


@router.post(
    "",
    status_code=201,
    response_model=DataResponse[MedicalRecord],
    summary="Create a medical record",
)
async def create_medical_record(
    payload: MedicalRecordCreate,
    medical_records: MedicalRecordRepository = Depends(get_medical_record_repository),
) -> DataResponse[MedicalRecord]:
    return DataResponse[MedicalRecord](data=await medical_records.create(payload))


@router.patch(
    "/{record_id}",
    response_model=DataResponse[MedicalRecord],
    responses={404: {"description": "Medical record not found", "model": ErrorResponse}},
    summary="Partially update a medical record",
)
async def update_medical_record(
    record_id: UUID,
    payload: MedicalRecordUpdate,
    medical_records: MedicalRecordRepository = Depends(get_medical_record_repository),
) -> DataResponse[MedicalRecord]:
    record = await medical_records.update(record_id, payload.to_changes())
    return DataResponse[MedicalRecord](data=record)


@router.delete(
    "/{record_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a medical record",
)
async def delete_medical_record(
    record_id: UUID,
    medical_records: MedicalRecordRepository = Depends(get_medical_record_repository),
) -> Response:
    await medical_records.delete(record_id)
    return Response(status_code=204)
