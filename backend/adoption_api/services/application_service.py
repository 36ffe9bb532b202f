"""
Pet Adoption API — Application Service (Adoption Workflow)
===========================================================

What:  CRUD over adoption applications plus the approval state machine.
Who:   Called by the application and pet route handlers.
How:   Composes ApplicationRepository and PetRepository over one RecordStore.

Approval Flow (POST /api/applications/{id}/approve):
    ┌───────────┐   ┌────────────┐   ┌──────────────┐   ┌──────────────┐
    │ Fetch app │──▶│  pending?  │──▶│ app→approved │──▶│ pet→adopted  │
    │ (locked)  │   │            │   │ (conditional)│   │              │
    └───────────┘   └────────────┘   └──────────────┘   └──────┬───────┘
                                                               ▼
                                                  ┌──────────────────────┐
                                                  │ other pending apps   │
                                                  │ for pet → rejected   │
                                                  │ (optional)           │
                                                  └──────────────────────┘

    Every step after the fetch runs in one store transaction:
    - pet update fails          → rollback (application back to pending),
                                  PetStatusUpdateError
    - sibling rejection fails   → rollback, StoreError
    - another approval won      → the conditional update matches no row,
                                  and the caller gets the same conflict
                                  error as if it had lost the race at step 2

State machine for Application.status:
    pending ──approve──▶ approved        (terminal for approve)
    pending ──sibling approved──▶ rejected  (terminal for approve)
    any ──PATCH──▶ any                   (generic update, e.g. withdrawn)
"""

import logging
from typing import List, Mapping, Optional, Any
from uuid import UUID

from adoption_api.exceptions import (
    AlreadyApprovedError,
    InvalidStatusTransitionError,
    NotFoundError,
    PetStatusUpdateError,
    PetUnavailableError,
    StoreError,
)
from adoption_api.repositories.applications import ApplicationRepository
from adoption_api.repositories.pets import PetRepository
from adoption_api.schemas.application import (
    Application,
    ApplicationCreate,
    ApplicationStatus,
)
from adoption_api.schemas.pet import PetStatus
from adoption_api.store import RecordStore

logger = logging.getLogger(__name__)


class ApplicationService:
    """
    Business logic layer for adoption applications.

    Responsibilities:
        - list/get/create/update/delete applications
        - list_for_pet(): applications of one existing pet
        - approve(): the approval workflow described in the module docstring

    Constructed once per process by the app factory and shared by every
    request; it holds no per-request state.
    """

    def __init__(
        self,
        store: RecordStore,
        applications: Optional[ApplicationRepository] = None,
        pets: Optional[PetRepository] = None,
    ):
        self._store = store
        self._applications = applications or ApplicationRepository(store)
        self._pets = pets or PetRepository(store)

    # ══════════════════════════════════════════════════════════════════════
    # Reads
    # ══════════════════════════════════════════════════════════════════════

    async def list(
        self,
        status: Optional[ApplicationStatus] = None,
        pet_id: Optional[UUID] = None,
    ) -> List[Application]:
        """
        List applications, newest first.

        With both filters, the store query uses `status` and the pet filter
        is applied in memory over that result.
        """
        if status is not None and pet_id is not None:
            by_status = await self._applications.list_by_status(status)
            return [application for application in by_status if application.pet_id == pet_id]
        if status is not None:
            return await self._applications.list_by_status(status)
        if pet_id is not None:
            return await self._applications.list_by_pet(pet_id)
        return await self._applications.list()

    async def get(self, application_id: UUID) -> Optional[Application]:
        """Returns None when the application does not exist."""
        return await self._applications.get(application_id)

    async def list_for_pet(self, pet_id: UUID) -> List[Application]:
        """
        Raises:
            NotFoundError: the pet does not exist
        """
        pet = await self._pets.get(pet_id)
        if pet is None:
            raise NotFoundError("Pet", str(pet_id))
        return await self._applications.list_by_pet(pet_id)

    # ══════════════════════════════════════════════════════════════════════
    # Writes
    # ══════════════════════════════════════════════════════════════════════

    async def create(self, payload: ApplicationCreate) -> Application:
        """
        File a new application against an `available` pet.

        Raises:
            NotFoundError: the referenced pet does not exist (→ 404)
            PetUnavailableError: the pet's status is not `available` (→ 400)
            StoreError: the insert failed (→ 500)
        """
        pet = await self._pets.get(payload.pet_id)
        if pet is None:
            raise NotFoundError("Pet", str(payload.pet_id))

        if pet.status != PetStatus.AVAILABLE:
            raise PetUnavailableError(
                current_status=PetStatus(pet.status).value,
                context={"pet_id": str(pet.id)},
            )

        application = await self._applications.create(payload)
        logger.info(
            "Application %s filed for pet %s (status=%s)",
            application.id,
            application.pet_id,
            application.status.value,
        )
        return application

    async def update(self, application_id: UUID, changes: Mapping[str, Any]) -> Application:
        """Partial update; NotFoundError when no row matches."""
        return await self._applications.update(application_id, changes)

    async def delete(self, application_id: UUID) -> None:
        await self._applications.delete(application_id)

    # ══════════════════════════════════════════════════════════════════════
    # Approval Workflow
    # ══════════════════════════════════════════════════════════════════════

    @staticmethod
    def _ensure_approvable(application: Application) -> None:
        status = ApplicationStatus(application.status)
        if status == ApplicationStatus.APPROVED:
            raise AlreadyApprovedError(context={"application_id": str(application.id)})
        if status != ApplicationStatus.PENDING:
            raise InvalidStatusTransitionError(
                current_status=status.value,
                context={"application_id": str(application.id)},
            )

    async def approve(
        self,
        application_id: UUID,
        reject_other_applications: bool = True,
    ) -> Application:
        """
        Approve a pending application and mark its pet as adopted.

        Args:
            application_id: the application to approve
            reject_other_applications: also move every other `pending`
                application for the same pet to `rejected`

        Returns:
            The approved application as stored.

        Raises:
            NotFoundError: no such application (→ 404)
            AlreadyApprovedError: status is already `approved` (→ 400)
            InvalidStatusTransitionError: status is neither pending nor
                approved, message names it (→ 400)
            PetStatusUpdateError: the pet could not be set to `adopted`;
                nothing was changed (→ 500)
            StoreError: any other store failure; nothing was changed (→ 500)
        """
        async with self._store.transaction() as tx:
            applications = self._applications.bind(tx)
            pets = self._pets.bind(tx)

            # ── Step 1: Fetch (row-locked where the store supports it) ────
            application = await applications.get(application_id, for_update=True)
            if application is None:
                raise NotFoundError("Application", str(application_id))

            # ── Step 2: Only pending applications can be approved ─────────
            self._ensure_approvable(application)

            # ── Step 3: pending → approved, only if still pending ─────────
            approved = await applications.transition(
                application_id,
                from_status=ApplicationStatus.PENDING,
                to_status=ApplicationStatus.APPROVED,
                action="Failed to approve application",
            )
            if approved is None:
                # Another request changed the row between steps 1 and 3.
                current = await applications.get(application_id)
                if current is None:
                    raise NotFoundError("Application", str(application_id))
                self._ensure_approvable(current)
                raise StoreError(
                    message="Failed to approve application: No data returned",
                    detail="No data returned",
                )

            # ── Step 4: Pet → adopted; failure rolls step 3 back ──────────
            try:
                await pets.update(application.pet_id, {"status": PetStatus.ADOPTED.value})
            except (NotFoundError, StoreError) as exc:
                cause = exc.detail if isinstance(exc, StoreError) else exc.message
                logger.warning(
                    "Approval of %s rolled back: pet %s update failed: %s",
                    application_id,
                    application.pet_id,
                    cause,
                )
                raise PetStatusUpdateError(
                    cause=cause,
                    context={
                        "application_id": str(application_id),
                        "pet_id": str(application.pet_id),
                    },
                ) from exc

            # ── Step 5: Reject the pet's other pending applications ───────
            if reject_other_applications:
                rejected = await applications.reject_pending_siblings(
                    application.pet_id, application_id
                )
                if rejected:
                    logger.info(
                        "Rejected %d other pending application(s) for pet %s: %s",
                        len(rejected),
                        application.pet_id,
                        ", ".join(str(sibling.id) for sibling in rejected),
                    )

        logger.info("Application %s approved; pet %s adopted", application_id, application.pet_id)
        return approved
