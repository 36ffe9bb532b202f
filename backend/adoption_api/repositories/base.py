"""
Pet Adoption API — Repository Base
===================================

What:  The CRUD operations every table shares: list (newest first),
       get-by-id, create, partial update, delete.
How:   Subclasses declare the ORM model, the record schema, and the names
       used in error messages. Everything else is inherited.

Absent vs. error:
    get()     → None when the row does not exist
    update()  → NotFoundError when no row matches
    delete()  → no error when the row is already gone
    list()    → [] when nothing matches
"""

import logging
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, Iterator, List, Mapping, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel

from adoption_api.database import Base
from adoption_api.exceptions import NotFoundError, StoreError
from adoption_api.schemas.common import CreatePayload
from adoption_api.store import Condition, RecordStore

RecordT = TypeVar("RecordT", bound=BaseModel)
RepoT = TypeVar("RepoT", bound="Repository")

logger = logging.getLogger(__name__)


class Repository(Generic[RecordT]):
    model: ClassVar[Type[Base]]
    record_type: ClassVar[Type[BaseModel]]
    # "Pet" → "Pet not found"; "pet"/"pets" → "Failed to fetch pets: ..."
    resource: ClassVar[str]
    singular: ClassVar[str]
    plural: ClassVar[str]

    def __init__(self, store: RecordStore):
        self._store = store
        self._table = store.table(self.model)

    def bind(self: RepoT, store: RecordStore) -> RepoT:
        """Same repository, issuing its calls through `store` (e.g. a transaction)."""
        return type(self)(store)

    @contextmanager
    def _failure(self, action: str) -> Iterator[None]:
        try:
            yield
        except StoreError as exc:
            raise StoreError(
                message=f"{action}: {exc.detail}",
                detail=exc.detail,
                context=exc.context,
            ) from exc

    def _record(self, row: Mapping[str, Any]) -> RecordT:
        return self.record_type.model_validate(row)

    # ── Reads ─────────────────────────────────────────────────────────────

    async def _list(self, *conditions: Condition, action: Optional[str] = None) -> List[RecordT]:
        with self._failure(action or f"Failed to fetch {self.plural}"):
            rows = await self._table.find_many(conditions)
        return [self._record(row) for row in rows]

    async def list(self) -> List[RecordT]:
        """Every row, most recently created first."""
        return await self._list()

    async def get(self, record_id: UUID, for_update: bool = False) -> Optional[RecordT]:
        with self._failure(f"Failed to fetch {self.singular}"):
            row = await self._table.find_by_id(record_id, for_update=for_update)
        return self._record(row) if row is not None else None

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, payload: CreatePayload) -> RecordT:
        with self._failure(f"Failed to create {self.singular}"):
            row = await self._table.insert(payload.to_values())
        record = self._record(row)
        logger.info("Created %s %s", self.singular, record.id)
        return record

    async def update(self, record_id: UUID, changes: Mapping[str, Any]) -> RecordT:
        """
        Apply only the supplied fields.

        An empty change set returns the current row unchanged.

        Raises:
            NotFoundError: no row has this id
            StoreError: the store rejected the update
        """
        if not changes:
            current = await self.get(record_id)
            if current is None:
                raise NotFoundError(self.resource, str(record_id))
            return current

        with self._failure(f"Failed to update {self.singular}"):
            row = await self._table.update_by_id(record_id, changes)
        if row is None:
            raise NotFoundError(self.resource, str(record_id))
        return self._record(row)

    async def delete(self, record_id: UUID) -> None:
        with self._failure(f"Failed to delete {self.singular}"):
            deleted = await self._table.delete_by_id(record_id)
        if deleted:
            logger.info("Deleted %s %s", self.singular, record_id)
