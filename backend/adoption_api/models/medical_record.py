"""
Pet Adoption API — Medical Record Table
========================================

What:  ORM mapping of the `medical_records` table. Pure CRUD, scoped by pet.
"""

import uuid
import datetime as dt
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from adoption_api.database import Base
from adoption_api.models.base import RecordColumns


class MedicalRecordRow(RecordColumns, Base):
    __tablename__ = "medical_records"

    pet_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    procedure: Mapped[str] = mapped_column(String(255), nullable=False)
    vet_name: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cost: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)

    __table_args__ = (
        Index("idx_medical_records_pet_id", "pet_id"),
    )
