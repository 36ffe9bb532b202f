"""
Pet Adoption API — Record Store Gateway Tests
==============================================

What we test:
    ✅ insert returns the stored row with id and timestamps
    ✅ find_by_id returns None for a missing row
    ✅ find_many filters with eq/neq and orders newest first
    ✅ update_by_id is conditional on extra conditions
    ✅ update_where returns every changed row
    ✅ delete_by_id reports the number of deleted rows
    ✅ transaction() commits on success and rolls back on error
    ✅ SQLAlchemy failures surface as StoreError
    ✅ transient read failures are retried outside transactions only
"""

from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from adoption_api.exceptions import StoreError
from adoption_api.models import ApplicationRecord, PetRecord
from adoption_api.store import Ordering, _is_transient, eq, neq


def _pet_values(**overrides):
    values = {"name": "Rex", "type": "dog", "status": "available"}
    values.update(overrides)
    return values


class TestTableGatewayReads:

    @pytest.mark.asyncio
    async def test_insert_assigns_id_and_timestamps(self, store):
        row = await store.table(PetRecord).insert(_pet_values())

        assert row["id"] is not None
        assert row["created_at"] is not None
        assert row["updated_at"] is not None
        assert row["name"] == "Rex"

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, store):
        assert await store.table(PetRecord).find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_many_filters_and_orders_newest_first(self, store):
        pets = store.table(PetRecord)
        first = await pets.insert(_pet_values(name="First"))
        await pets.insert(_pet_values(name="Cat", type="cat"))
        third = await pets.insert(_pet_values(name="Third"))

        dogs = await pets.find_many([eq("type", "dog")])

        assert [row["id"] for row in dogs] == [third["id"], first["id"]]

    @pytest.mark.asyncio
    async def test_find_many_ascending_order(self, store):
        pets = store.table(PetRecord)
        first = await pets.insert(_pet_values(name="First"))
        second = await pets.insert(_pet_values(name="Second"))

        rows = await pets.find_many(order=Ordering("created_at", descending=False))

        assert [row["id"] for row in rows] == [first["id"], second["id"]]

    @pytest.mark.asyncio
    async def test_find_many_neq_excludes_row(self, store):
        pets = store.table(PetRecord)
        keep = await pets.insert(_pet_values(name="Keep"))
        skip = await pets.insert(_pet_values(name="Skip"))

        rows = await pets.find_many([neq("id", skip["id"])])

        assert [row["id"] for row in rows] == [keep["id"]]

    @pytest.mark.asyncio
    async def test_find_many_no_match_returns_empty_list(self, store):
        assert await store.table(PetRecord).find_many([eq("status", "adopted")]) == []


class TestTableGatewayWrites:

    @pytest.mark.asyncio
    async def test_update_by_id_applies_partial_values(self, store):
        pets = store.table(PetRecord)
        row = await pets.insert(_pet_values())

        updated = await pets.update_by_id(row["id"], {"status": "adopted"})

        assert updated["status"] == "adopted"
        assert updated["name"] == "Rex"

    @pytest.mark.asyncio
    async def test_conditional_update_skips_rows_that_moved_on(self, store):
        pets = store.table(PetRecord)
        row = await pets.insert(_pet_values(status="pending"))

        result = await pets.update_by_id(
            row["id"], {"status": "adopted"}, conditions=[eq("status", "available")]
        )

        assert result is None
        assert (await pets.find_by_id(row["id"]))["status"] == "pending"

    @pytest.mark.asyncio
    async def test_update_by_id_missing_returns_none(self, store):
        assert await store.table(PetRecord).update_by_id(uuid4(), {"name": "Ghost"}) is None

    @pytest.mark.asyncio
    async def test_update_where_returns_changed_rows(self, store):
        applications = store.table(ApplicationRecord)
        pet_id = uuid4()
        for name in ("A", "B"):
            await applications.insert(
                {
                    "pet_id": pet_id,
                    "applicant_name": name,
                    "applicant_email": f"{name.lower()}@example.com",
                    "status": "pending",
                }
            )

        rows = await applications.update_where(
            {"status": "rejected"}, [eq("pet_id", pet_id), eq("status", "pending")]
        )

        assert len(rows) == 2
        assert {row["status"] for row in rows} == {"rejected"}

    @pytest.mark.asyncio
    async def test_delete_by_id_reports_count(self, store):
        pets = store.table(PetRecord)
        row = await pets.insert(_pet_values())

        assert await pets.delete_by_id(row["id"]) == 1
        assert await pets.delete_by_id(row["id"]) == 0

    @pytest.mark.asyncio
    async def test_constraint_violation_raises_store_error(self, store):
        with pytest.raises(StoreError) as exc_info:
            await store.table(PetRecord).insert({"type": "dog"})

        assert exc_info.value.message.startswith("insert failed on pets:")
        assert exc_info.value.detail
        assert exc_info.value.status_code == 500


class TestTransactions:

    @pytest.mark.asyncio
    async def test_commit_on_success(self, store):
        async with store.transaction() as tx:
            row = await tx.table(PetRecord).insert(_pet_values())

        assert await store.table(PetRecord).find_by_id(row["id"]) is not None

    @pytest.mark.asyncio
    async def test_rollback_on_exception(self, store):
        pets = store.table(PetRecord)
        row = await pets.insert(_pet_values())

        with pytest.raises(RuntimeError):
            async with store.transaction() as tx:
                await tx.table(PetRecord).update_by_id(row["id"], {"status": "adopted"})
                raise RuntimeError("boom")

        assert (await pets.find_by_id(row["id"]))["status"] == "available"

    @pytest.mark.asyncio
    async def test_nested_transaction_reuses_outer(self, store):
        async with store.transaction() as outer:
            async with outer.transaction() as inner:
                assert inner is outer
                assert inner.in_transaction

    @pytest.mark.asyncio
    async def test_ping(self, store):
        await store.ping()


class TestReadRetries:

    def test_connection_failures_are_transient(self):
        refused = OperationalError("SELECT 1", {}, Exception("connection refused"))
        locked = OperationalError("SELECT 1", {}, Exception("database is locked"))

        assert _is_transient(refused)
        assert not _is_transient(locked)
        assert not _is_transient(ValueError("not a store error"))

    @pytest.mark.asyncio
    async def test_transient_failure_retried_outside_transaction(self, store):
        attempts = 0
        async for attempt in store.read_retrying():
            with attempt:
                attempts += 1
                if attempts < 2:
                    raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        assert attempts == 2

    @pytest.mark.asyncio
    async def test_no_retry_inside_transaction(self, store):
        attempts = 0
        async with store.transaction() as tx:
            with pytest.raises(OperationalError):
                async for attempt in tx.read_retrying():
                    with attempt:
                        attempts += 1
                        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        assert attempts == 1
