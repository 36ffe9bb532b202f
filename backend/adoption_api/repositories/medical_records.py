"""
Pet Adoption API — Medical Record Repository
=============================================

What:  CRUD over `medical_records`, plus the pet-scoped listing.
"""

from typing import List
from uuid import UUID

from adoption_api.models.medical_record import MedicalRecordRow
from adoption_api.repositories.base import Repository
from adoption_api.schemas.medical_record import MedicalRecord
from adoption_api.store import eq


class MedicalRecordRepository(Repository[MedicalRecord]):
    model = MedicalRecordRow
    record_type = MedicalRecord
    resource = "Medical record"
    singular = "medical record"
    plural = "medical records"

    async def list_by_pet(self, pet_id: UUID) -> List[MedicalRecord]:
        return await self._list(
            eq("pet_id", pet_id),
            action="Failed to fetch medical records for pet",
        )
