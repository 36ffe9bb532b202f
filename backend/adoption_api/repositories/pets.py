"""
Pet Adoption API — Pet Repository
==================================

What:  CRUD plus status/type filtering over the `pets` table.
Who:   Pet routes, and the ApplicationService (availability check on create,
       `adopted` transition on approve).
"""

from typing import List

from adoption_api.models.pet import PetRecord
from adoption_api.repositories.base import Repository
from adoption_api.schemas.pet import Pet, PetStatus
from adoption_api.store import eq


class PetRepository(Repository[Pet]):
    model = PetRecord
    record_type = Pet
    resource = "Pet"
    singular = "pet"
    plural = "pets"

    async def list_by_status(self, status: PetStatus) -> List[Pet]:
        return await self._list(
            eq("status", PetStatus(status).value),
            action="Failed to fetch pets by status",
        )

    async def list_by_type(self, pet_type: str) -> List[Pet]:
        # Free-form: an unknown type simply matches nothing.
        return await self._list(eq("type", pet_type), action="Failed to fetch pets by type")

