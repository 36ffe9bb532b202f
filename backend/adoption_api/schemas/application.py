"""
Pet Adoption API — Application Schemas
=======================================

What:  Adoption application record shape, create/update payloads and the
       approve request body.

Validation rules (mirrored in error messages):
    - pet_id must be a UUID
    - applicant_name: 1-255 characters
    - applicant_email: valid address (email-validator caps length at 254)
    - applicant_phone: at most 50 characters
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from adoption_api.schemas.common import CreatePayload, PartialUpdate


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class Application(BaseModel):
    """A stored adoption application."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    pet_id: uuid.UUID
    applicant_name: str
    applicant_email: str
    applicant_phone: Optional[str] = None
    applicant_address: Optional[str] = None
    application_text: Optional[str] = None
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime


class ApplicationCreate(CreatePayload):
    pet_id: uuid.UUID
    applicant_name: str = Field(min_length=1, max_length=255)
    applicant_email: EmailStr
    applicant_phone: Optional[str] = Field(default=None, max_length=50)
    applicant_address: Optional[str] = None
    application_text: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.PENDING


class ApplicationUpdate(PartialUpdate):
    """
    PATCH payload. `status` may be set to any value here, which is how
    applications reach `withdrawn` (no dedicated transition exists).
    """

    required_fields: ClassVar[FrozenSet[str]] = frozenset(
        {"applicant_name", "applicant_email", "status"}
    )

    applicant_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    applicant_email: Optional[EmailStr] = None
    applicant_phone: Optional[str] = Field(default=None, max_length=50)
    applicant_address: Optional[str] = None
    application_text: Optional[str] = None
    status: Optional[ApplicationStatus] = None


class ApproveRequest(BaseModel):
    """
    Body of POST /api/applications/{id}/approve. The whole body is optional.

    Example:
        {"rejectOtherApplications": false}
    """

    model_config = ConfigDict(populate_by_name=True)

    reject_other_applications: bool = Field(default=True, alias="rejectOtherApplications")
