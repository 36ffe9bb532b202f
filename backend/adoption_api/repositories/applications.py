"""
Pet Adoption API — Application Repository
==========================================

What:  Row-level access to the `applications` table. The approval workflow
       built on top of it lives in services/application_service.py.
"""

from typing import List, Optional
from uuid import UUID

from adoption_api.models.application import ApplicationRecord
from adoption_api.repositories.base import Repository
from adoption_api.schemas.application import Application, ApplicationStatus
from adoption_api.store import eq, neq


class ApplicationRepository(Repository[Application]):
    model = ApplicationRecord
    record_type = Application
    resource = "Application"
    singular = "application"
    plural = "applications"

    async def list_by_status(self, status: ApplicationStatus) -> List[Application]:
        return await self._list(
            eq("status", ApplicationStatus(status).value),
            action="Failed to fetch applications by status",
        )

    async def list_by_pet(self, pet_id: UUID) -> List[Application]:
        return await self._list(
            eq("pet_id", pet_id),
            action="Failed to fetch applications for pet",
        )

    async def transition(
        self,
        application_id: UUID,
        from_status: ApplicationStatus,
        to_status: ApplicationStatus,
        action: str = "Failed to update application status",
    ) -> Optional[Application]:
        """
        Conditional status change: only applies while the row is still in
        `from_status`. Returns None when the row is missing or has moved on.
        """
        with self._failure(action):
            row = await self._table.update_by_id(
                application_id,
                {"status": to_status.value},
                conditions=[eq("status", from_status.value)],
            )
        return self._record(row) if row is not None else None

    async def reject_pending_siblings(self, pet_id: UUID, approved_id: UUID) -> List[Application]:
        """Move every other `pending` application for `pet_id` to `rejected`."""
        with self._failure("Failed to reject other applications"):
            rows = await self._table.update_where(
                {"status": ApplicationStatus.REJECTED.value},
                [
                    eq("pet_id", pet_id),
                    eq("status", ApplicationStatus.PENDING.value),
                    neq("id", approved_id),
                ],
            )
        return [self._record(row) for row in rows]
