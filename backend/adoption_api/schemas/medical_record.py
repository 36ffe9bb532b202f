"""
Pet Adoption API — Medical Record Schemas
==========================================
"""

import datetime as dt
import uuid
from decimal import Decimal
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from adoption_api.schemas.common import CreatePayload, PartialUpdate


class MedicalRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    pet_id: uuid.UUID
    date: dt.date
    procedure: str
    vet_name: str
    notes: Optional[str] = None
    cost: Optional[Decimal] = None
    created_at: dt.datetime
    updated_at: dt.datetime


class MedicalRecordCreate(CreatePayload):
    pet_id: uuid.UUID
    date: dt.date
    procedure: str = Field(min_length=1, max_length=255)
    vet_name: str = Field(min_length=1, max_length=255)
    notes: Optional[str] = None
    cost: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class MedicalRecordUpdate(PartialUpdate):
    required_fields: ClassVar[FrozenSet[str]] = frozenset(
        {"pet_id", "date", "procedure", "vet_name"}
    )

    pet_id: Optional[uuid.UUID] = None
    date: Optional[dt.date] = None
    procedure: Optional[str] = Field(default=None, min_length=1, max_length=255)
    vet_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    notes: Optional[str] = None
    cost: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
