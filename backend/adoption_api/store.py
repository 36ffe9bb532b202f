"""
Pet Adoption API — Record Store Gateway
========================================

What:  The narrow, table-scoped interface to the relational record store.
How:   `RecordStore` wraps an AsyncEngine; `store.table(Model)` returns a
       `TableGateway` exposing direct methods (find_by_id, find_many,
       insert, update_by_id, update_where, delete_by_id) over SQLAlchemy Core.
Who:   Used by the repositories and the application service. Nothing above
       this module imports SQLAlchemy query constructs.

Filter vocabulary:
    eq("status", "pending")        → status = 'pending'
    neq("id", some_id)             → id != some_id
    Ordering("created_at", True)   → ORDER BY created_at DESC  (the default)

Transactions:
    Outside a transaction every call runs in its own short transaction
    (autocommit per call, like a hosted REST store). Inside

        async with store.transaction() as tx:
            await tx.table(PetRecord).update_by_id(...)
            ...

    all calls made through `tx` share one connection and are committed
    together when the block exits, or rolled back if it raises.

Error policy:
    Every SQLAlchemyError is wrapped in StoreError with the driver's message
    as `detail`. "No row" is never an error here: find_by_id/update_by_id
    return None and the caller decides what that means.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import (
    Any,
    AsyncIterator,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
)
from uuid import UUID

from sqlalchemy import Table, delete, insert, select, text, update
from sqlalchemy.exc import DBAPIError, DisconnectionError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_random_exponential,
)

from adoption_api.config import Settings, settings as default_settings
from adoption_api.database import Base
from adoption_api.exceptions import StoreError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


# ══════════════════════════════════════════════════════════════════════════
# Filter Vocabulary
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Condition:
    """A single column comparison. `negate=True` turns equality into inequality."""

    column: str
    value: Any
    negate: bool = False


def eq(column: str, value: Any) -> Condition:
    return Condition(column=column, value=value)


def neq(column: str, value: Any) -> Condition:
    return Condition(column=column, value=value, negate=True)


@dataclass(frozen=True)
class Ordering:
    column: str = "created_at"
    descending: bool = True


NEWEST_FIRST = Ordering("created_at", descending=True)


def _is_transient(exc: BaseException) -> bool:
    """Connection-level failures worth retrying on a read."""
    if isinstance(exc, DisconnectionError):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    return isinstance(exc, OperationalError) and "locked" not in str(exc).lower()


def _error_text(exc: SQLAlchemyError) -> str:
    # DBAPIError wraps the driver exception; its own str() appends the SQL.
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


# ══════════════════════════════════════════════════════════════════════════
# Record Store
# ══════════════════════════════════════════════════════════════════════════

class RecordStore:
    """
    Entry point to the record store.

    A RecordStore is either *unbound* (one per process, created by the app
    factory around the engine) or *bound* to a single AsyncConnection for the
    duration of a `transaction()` block.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        connection: Optional[AsyncConnection] = None,
        config: Optional[Settings] = None,
    ):
        self._engine = engine
        self._connection = connection
        self._config = config or default_settings

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def in_transaction(self) -> bool:
        return self._connection is not None

    def table(self, model: Type[Base]) -> "TableGateway":
        """Return the gateway for the table mapped by `model`."""
        return TableGateway(self, model.__table__)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["RecordStore"]:
        """
        Open a transaction and yield a store bound to it.

        Nested calls on an already-bound store reuse the outer transaction.
        """
        if self._connection is not None:
            yield self
            return

        async with self._engine.connect() as conn:
            try:
                await conn.begin()
            except SQLAlchemyError as exc:
                raise StoreError(
                    message=f"Failed to open transaction: {_error_text(exc)}",
                    detail=_error_text(exc),
                ) from exc

            try:
                yield RecordStore(self._engine, connection=conn, config=self._config)
            except BaseException:
                try:
                    await conn.rollback()
                except SQLAlchemyError:
                    logger.error("Rollback failed; the connection will be discarded", exc_info=True)
                raise

            try:
                await conn.commit()
            except SQLAlchemyError as exc:
                raise StoreError(
                    message=f"Failed to commit transaction: {_error_text(exc)}",
                    detail=_error_text(exc),
                ) from exc

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        """Yield the bound connection, or a fresh one in its own transaction."""
        if self._connection is not None:
            yield self._connection
        else:
            async with self._engine.begin() as conn:
                yield conn

    def read_retrying(self) -> AsyncRetrying:
        """Tenacity policy for idempotent reads outside a transaction."""
        attempts = 1 if self.in_transaction else self._config.retry_max_attempts
        return AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_random_exponential(
                multiplier=self._config.retry_min_wait,
                max=self._config.retry_max_wait,
            ),
            retry=retry_if_exception(_is_transient),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    async def ping(self) -> None:
        """Round-trip `SELECT 1`; raises StoreError when the store is unreachable."""
        try:
            async with self.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise StoreError(
                message=f"Record store unreachable: {_error_text(exc)}",
                detail=_error_text(exc),
            ) from exc

    async def dispose(self) -> None:
        """Close every pooled connection (application shutdown)."""
        await self._engine.dispose()


# ══════════════════════════════════════════════════════════════════════════
# Table Gateway
# ══════════════════════════════════════════════════════════════════════════

class TableGateway:
    """
    Filtered CRUD over one table. Rows come back as plain dicts keyed by
    column name.
    """

    def __init__(self, store: RecordStore, table: Table):
        self._store = store
        self._table = table

    @property
    def name(self) -> str:
        return self._table.name

    # ── Statement Helpers ─────────────────────────────────────────────────

    def _where(self, statement, conditions: Sequence[Condition]):
        for condition in conditions:
            column = self._table.c[condition.column]
            if condition.negate:
                statement = statement.where(column != condition.value)
            else:
                statement = statement.where(column == condition.value)
        return statement

    def _order(self, statement, ordering: Optional[Ordering]):
        if ordering is None:
            return statement
        column = self._table.c[ordering.column]
        return statement.order_by(column.desc() if ordering.descending else column.asc())

    def _store_error(self, action: str, exc: SQLAlchemyError) -> StoreError:
        detail = _error_text(exc)
        logger.error("Store %s on %s failed: %s", action, self.name, detail)
        return StoreError(
            message=f"{action} failed on {self.name}: {detail}",
            detail=detail,
            context={"table": self.name, "action": action},
        )

    # ── Reads ─────────────────────────────────────────────────────────────

    async def find_by_id(self, record_id: UUID, for_update: bool = False) -> Optional[Row]:
        """
        Fetch one row by primary key, or None when no row matches.

        `for_update` takes a row lock (SELECT ... FOR UPDATE) on stores that
        support it; it only has an effect inside a transaction.
        """
        statement = select(self._table).where(self._table.c.id == record_id)
        if for_update and self._store.in_transaction:
            statement = statement.with_for_update()

        try:
            async for attempt in self._store.read_retrying():
                with attempt:
                    async with self._store.connect() as conn:
                        result = await conn.execute(statement)
                        row = result.mappings().one_or_none()
        except SQLAlchemyError as exc:
            raise self._store_error("select", exc) from exc

        return dict(row) if row is not None else None

    async def find_many(
        self,
        conditions: Sequence[Condition] = (),
        order: Optional[Ordering] = NEWEST_FIRST,
    ) -> List[Row]:
        """Fetch every row matching all `conditions`. Never returns None."""
        statement = self._order(self._where(select(self._table), conditions), order)

        try:
            async for attempt in self._store.read_retrying():
                with attempt:
                    async with self._store.connect() as conn:
                        result = await conn.execute(statement)
                        rows = result.mappings().all()
        except SQLAlchemyError as exc:
            raise self._store_error("select", exc) from exc

        return [dict(row) for row in rows]

    # ── Writes ────────────────────────────────────────────────────────────

    async def insert(self, values: Mapping[str, Any]) -> Row:
        """Insert one row and return it as stored (id and timestamps assigned)."""
        statement = insert(self._table).values(**values).returning(*self._table.c)

        try:
            async with self._store.connect() as conn:
                result = await conn.execute(statement)
                row = result.mappings().one_or_none()
        except SQLAlchemyError as exc:
            raise self._store_error("insert", exc) from exc

        if row is None:
            raise StoreError(
                message=f"insert failed on {self.name}: no row returned",
                detail="no row returned",
                context={"table": self.name, "action": "insert"},
            )
        return dict(row)

    async def update_by_id(
        self,
        record_id: UUID,
        values: Mapping[str, Any],
        conditions: Sequence[Condition] = (),
    ) -> Optional[Row]:
        """
        Apply a partial update to one row and return the updated row.

        Extra `conditions` make the update conditional (e.g. only while
        status = 'pending'). Returns None when no row matched.
        """
        rows = await self.update_where(values, [eq("id", record_id), *conditions])
        return rows[0] if rows else None

    async def update_where(
        self,
        values: Mapping[str, Any],
        conditions: Sequence[Condition],
    ) -> List[Row]:
        """Bulk partial update; returns every row that was changed."""
        statement = self._where(update(self._table), conditions)
        statement = statement.values(**values).returning(*self._table.c)

        try:
            async with self._store.connect() as conn:
                result = await conn.execute(statement)
                rows = result.mappings().all()
        except SQLAlchemyError as exc:
            raise self._store_error("update", exc) from exc

        return [dict(row) for row in rows]

    async def delete_by_id(self, record_id: UUID) -> int:
        """Delete one row by primary key. Deleting a missing row is not an error."""
        statement = delete(self._table).where(self._table.c.id == record_id)

        try:
            async with self._store.connect() as conn:
                result = await conn.execute(statement)
        except SQLAlchemyError as exc:
            raise self._store_error("delete", exc) from exc

        return result.rowcount or 0
