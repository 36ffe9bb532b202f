"""
Pet Adoption API — Pet Schemas
===============================

What:  Pet record shape plus the create and partial-update payloads.
Who:   PetRepository returns `Pet`; routes accept `PetCreate` / `PetUpdate`.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field

from adoption_api.schemas.common import CreatePayload, PartialUpdate


class PetType(str, Enum):
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    HAMSTER = "hamster"
    OTHER = "other"


class PetStatus(str, Enum):
    """
    available:      accepts new applications
    pending:        set by staff while an adoption is being arranged
    adopted:        set by an approved application
    not_available:  withdrawn from adoption
    """

    AVAILABLE = "available"
    PENDING = "pending"
    ADOPTED = "adopted"
    NOT_AVAILABLE = "not_available"


class Pet(BaseModel):
    """A stored pet, including the id and timestamps assigned by the store."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    type: PetType
    breed: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    status: PetStatus
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PetCreate(CreatePayload):
    name: str = Field(min_length=1, max_length=255)
    type: PetType
    breed: Optional[str] = Field(default=None, max_length=255)
    age: Optional[int] = Field(default=None, ge=0, le=100)
    gender: Optional[str] = Field(default=None, max_length=50)
    size: Optional[str] = Field(default=None, max_length=50)
    color: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    status: PetStatus = PetStatus.AVAILABLE
    image_url: Optional[str] = None


class PetUpdate(PartialUpdate):
    required_fields: ClassVar[FrozenSet[str]] = frozenset({"name", "type", "status"})

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[PetType] = None
    breed: Optional[str] = Field(default=None, max_length=255)
    age: Optional[int] = Field(default=None, ge=0, le=100)
    gender: Optional[str] = Field(default=None, max_length=50)
    size: Optional[str] = Field(default=None, max_length=50)
    color: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = None
    status: Optional[PetStatus] = None
    image_url: Optional[str] = None
