"""
Pet Adoption API — Repositories
================================

What:  Per-table CRUD on top of the record store gateway. Each repository
       turns gateway rows into schema records and gateway failures into
       "Failed to <action> <resource>: <store text>" StoreErrors.

Repository Inventory:
    - PetRepository:            pets, filtered by status / type
    - ApplicationRepository:    applications, filtered by status / pet
    - MedicalRecordRepository:  medical records, filtered by pet
"""

from adoption_api.repositories.applications import ApplicationRepository
from adoption_api.repositories.medical_records import MedicalRecordRepository
from adoption_api.repositories.pets import PetRepository

__all__ = ["ApplicationRepository", "MedicalRecordRepository", "PetRepository"]
