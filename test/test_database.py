from datetime import datetime

import pytest
from sqlalchemy import text

from directory_server.core.database import EmployeeStore
from directory_server.core.errors import ConflictError, NotFoundError, StoreError
from directory_server.schemas.schema import EmployeeRecord


@pytest.mark.asyncio
async def test_init_db_is_idempotent(store):
    await store.init_db()
    assert await store.list_all() == []


@pytest.mark.asyncio
async def test_create_returns_record(store):
    employee = await store.create("John Doe", "john.doe@example.com", "Developer")

    assert isinstance(employee, EmployeeRecord)
    assert employee.id > 0
    assert employee.name == "John Doe"
    assert employee.created_at is not None
    assert employee.updated_at is not None


@pytest.mark.asyncio
async def test_create_duplicate_email_conflicts(store):
    await store.create("John Doe", "john.doe@example.com", "Developer")

    with pytest.raises(ConflictError) as excinfo:
        await store.create("Jane Doe", "john.doe@example.com", "Designer")

    assert excinfo.value.message == "Email already exists"
    assert len(await store.list_all()) == 1


@pytest.mark.asyncio
async def test_ids_are_generated_in_order(store):
    first = await store.create("A", "a@example.com", "Dev")
    second = await store.create("B", "b@example.com", "Dev")

    assert second.id > first.id
    assert [e.id for e in await store.list_all()] == [second.id, first.id]


@pytest.mark.asyncio
async def test_get_missing_returns_none(store):
    assert await store.get(12345) is None


@pytest.mark.asyncio
async def test_update_replaces_fields(store):
    employee = await store.create("John Doe", "john.doe@example.com", "Developer")

    updated = await store.update(employee.id, "John Smith", "john.smith@example.com", "Lead")

    assert updated.id == employee.id
    assert (updated.name, updated.email, updated.position) == ("John Smith", "john.smith@example.com", "Lead")
    assert updated.created_at == employee.created_at
    assert updated.updated_at >= employee.updated_at


@pytest.mark.asyncio
async def test_update_missing_raises_not_found(store):
    with pytest.raises(NotFoundError):
        await store.update(999, "John", "john@example.com", "Dev")


@pytest.mark.asyncio
async def test_update_to_taken_email_conflicts(store):
    await store.create("John Doe", "john.doe@example.com", "Developer")
    other = await store.create("Jane Doe", "jane.doe@example.com", "Designer")

    with pytest.raises(ConflictError):
        await store.update(other.id, "Jane Doe", "john.doe@example.com", "Designer")

    assert (await store.get(other.id)).email == "jane.doe@example.com"


@pytest.mark.asyncio
async def test_delete(store):
    employee = await store.create("John Doe", "john.doe@example.com", "Developer")

    assert await store.delete(employee.id) is True
    assert await store.delete(employee.id) is False
    assert await store.get(employee.id) is None


@pytest.mark.asyncio
async def test_driver_errors_become_generic_store_errors(store):
    async with store.engine.begin() as conn:
        await conn.execute(text("DROP TABLE employees"))

    with pytest.raises(StoreError) as excinfo:
        await store.list_all()
    assert excinfo.value.message == "Failed to fetch employees"
    assert "no such table" not in str(excinfo.value)

    with pytest.raises(StoreError) as excinfo:
        await store.create("John Doe", "john.doe@example.com", "Developer")
    assert excinfo.value.message == "Failed to create employee"

    with pytest.raises(StoreError) as excinfo:
        await store.delete(1)
    assert excinfo.value.message == "Failed to delete employee"


@pytest.mark.asyncio
async def test_separate_stores_are_isolated(tmp_path):
    first = EmployeeStore(f"sqlite+aiosqlite:///{tmp_path / 'first.db'}")
    second = EmployeeStore(f"sqlite+aiosqlite:///{tmp_path / 'second.db'}")
    try:
        await first.init_db()
        await second.init_db()

        await first.create("John Doe", "john.doe@example.com", "Developer")

        assert len(await first.list_all()) == 1
        assert await second.list_all() == []
    finally:
        await first.close()
        await second.close()


@pytest.mark.asyncio
async def test_update_refreshes_updated_at_only(store):
    employee = await store.create("John Doe", "john.doe@example.com", "Developer")
    async with store.engine.begin() as conn:
        await conn.execute(
            text("UPDATE employees SET created_at='2000-01-01 00:00:00', "
                 "updated_at='2000-01-01 00:00:00' WHERE id=:id"),
            {"id": employee.id}
        )

    updated = await store.update(employee.id, "John Doe", "john.doe@example.com", "Lead")

    assert updated.created_at == datetime(2000, 1, 1)
    assert updated.updated_at > datetime(2000, 1, 1)
