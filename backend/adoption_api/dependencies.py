"""
Pet Adoption API — Service Wiring & Route Dependencies
=======================================================

What:  Builds the service objects once per process and hands them to route
       handlers through FastAPI's Depends().
How:   `build_services()` is called by the app factory, which stores the
       result on `app.state.services`; the `get_*` providers read it back
       from the request. Tests build an app around their own RecordStore.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type, TypeVar

from fastapi import Request

from adoption_api.exceptions import ValidationError
from adoption_api.repositories.medical_records import MedicalRecordRepository
from adoption_api.repositories.pets import PetRepository
from adoption_api.services.application_service import ApplicationService
from adoption_api.store import RecordStore

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class Services:
    store: RecordStore
    pets: PetRepository
    medical_records: MedicalRecordRepository
    applications: ApplicationService


def build_services(store: RecordStore) -> Services:
    pets = PetRepository(store)
    return Services(
        store=store,
        pets=pets,
        medical_records=MedicalRecordRepository(store),
        applications=ApplicationService(store, pets=pets),
    )


# ── Providers ─────────────────────────────────────────────────────────────

def get_services(request: Request) -> Services:
    return request.app.state.services


def get_pet_repository(request: Request) -> PetRepository:
    return get_services(request).pets


def get_medical_record_repository(request: Request) -> MedicalRecordRepository:
    return get_services(request).medical_records


def get_application_service(request: Request) -> ApplicationService:
    return get_services(request).applications


# ── Query Parameter Helpers ───────────────────────────────────────────────

def parse_status_filter(value: Optional[str], enum_type: Type[E]) -> Optional[E]:
    """
    Validate a `?status=` filter against `enum_type`.

    An empty value means "no filter". Unknown values raise
    ValidationError("Invalid status. Must be one of: ...").
    """
    if not value:
        return None
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(
            message=f"Invalid status. Must be one of: {allowed}",
            field="status",
        ) from None
