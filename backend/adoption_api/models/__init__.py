"""
Pet Adoption API — ORM Table Definitions
=========================================

Importing this package registers every table with `Base.metadata`
(required by Alembic autogenerate and by the test fixtures).
"""

from adoption_api.models.application import ApplicationRecord
from adoption_api.models.medical_record import MedicalRecordRow
from adoption_api.models.pet import PetRecord

__all__ = ["ApplicationRecord", "MedicalRecordRow", "PetRecord"]
