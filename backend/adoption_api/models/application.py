"""
Pet Adoption API — Application Table
=====================================

What:  ORM mapping of the `applications` table (adoption applications).
Who:   Read and written only through the ApplicationService.

Lifecycle (status column):
    pending ──approve──▶ approved
       │
       ├──sibling approved / update──▶ rejected
       └──update──▶ withdrawn

    `pet_id` references pets.id logically. There is no foreign
    key constraint: deleting a pet retains its applications (retention policy).
"""

import uuid
from typing import Optional

from sqlalchemy import Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from adoption_api.database import Base
from adoption_api.models.base import RecordColumns


class ApplicationRecord(RecordColumns, Base):
    __tablename__ = "applications"

    pet_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

    applicant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    applicant_email: Mapped[str] = mapped_column(String(255), nullable=False)
    applicant_phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    applicant_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    application_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        server_default=text("'pending'"),
    )

    # (pet_id, status) serves the sibling-rejection update and the
    # per-pet listing.
    __table_args__ = (
        Index("idx_applications_pet_id_status", "pet_id", "status"),
        Index("idx_applications_status_created_at", "status", "created_at"),
    )
