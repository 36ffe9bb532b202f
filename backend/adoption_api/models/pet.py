"""
Pet Adoption API — Pet Table
=============================

What:  ORM mapping of the `pets` table.
Who:   Read and written only through the PetRepository (via the store gateway).

Column notes:
    - type:   dog | cat | bird | rabbit | hamster | other
    - status: available | pending | adopted | not_available
      Only `available` pets accept new applications; an approval moves the
      pet to `adopted`.
    - Descriptive attributes (breed, age, ...) are optional and free-form.

Index on (status, created_at DESC):
    The two list queries are "all pets, newest first" and
    "pets with status X, newest first".
"""

from typing import Optional

from sqlalchemy import Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from adoption_api.database import Base
from adoption_api.models.base import RecordColumns


class PetRecord(RecordColumns, Base):
    __tablename__ = "pets"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)

    breed: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    size: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="available",
        server_default=text("'available'"),
    )

    __table_args__ = (
        Index("idx_pets_status_created_at", "status", "created_at"),
        Index("idx_pets_type", "type"),
    )
