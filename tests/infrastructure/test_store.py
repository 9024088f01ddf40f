"""Table Store — find/create/destroy/DDL semantics on SQLite.

Invariants:
    - find_all returns None (never raises) for unknown columns, a missing table
      or a refused connection
    - find_or_create resolves a key violation to the existing row
    - destroy reports the number of deleted rows
    - drop_table on a missing table raises TableNotFoundError
"""

from contextlib import asynccontextmanager

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError, ProgrammingError

from launchpad.core.errors import (
    ConstraintViolationError, DatabaseError, TableNotFoundError,
)
from launchpad.infrastructure.store import is_missing_table_error


async def test_find_all_empty_table(store):
    assert await store.users.find_all() == []
    assert await store.users.find_all({"email": "not@found.com"}) == []


async def test_find_or_create_then_find_all(store):
    created = await store.users.find_or_create({"email": "foo@bar.com"})
    await store.users.find_or_create({"email": "bar@foo.com"})

    assert len(created) == 1
    assert created[0].id is not None
    assert created[0].email == "foo@bar.com"
    assert len(await store.users.find_all()) == 2
    found = await store.users.find_all({"email": "foo@bar.com"})
    assert [u.id for u in found] == [created[0].id]


async def test_find_all_unknown_column_returns_none(store):
    assert await store.users.find_all({"blah": 1}) is None
    assert await store.trips.find_all({"blah": 1}) is None


async def test_duplicate_user_insert_returns_existing(store):
    first = await store.users.find_or_create({"email": "foo@bar.com"})
    second = await store.users.find_or_create({"email": "foo@bar.com"})

    assert second[0].id == first[0].id
    assert len(await store.users.find_all()) == 1


async def test_duplicate_trip_insert_returns_existing(store):
    await store.trips.find_or_create({"launch_id": 1, "user_id": 2})
    again = await store.trips.find_or_create({"launch_id": 1, "user_id": 2})

    assert (again[0].user_id, again[0].launch_id) == (2, 1)
    assert len(await store.trips.find_all({"launch_id": 1})) == 1


async def test_key_violation_without_existing_row_raises(store, monkeypatch):
    await store.users.find_or_create({"email": "foo@bar.com"})
    monkeypatch.setattr(store.users, "find_all", AsyncMock(return_value=[]))

    with pytest.raises(ConstraintViolationError):
        await store.users.find_or_create({"email": "foo@bar.com"})


async def test_find_or_create_rejects_unknown_columns(store):
    with pytest.raises(DatabaseError):
        await store.trips.find_or_create({"launch_id": 1, "blah": 2})


async def test_destroy_counts_deleted_rows(store):
    await store.trips.find_or_create({"launch_id": 1, "user_id": 1})
    await store.trips.find_or_create({"launch_id": 2, "user_id": 1})

    assert await store.trips.destroy({"user_id": 1, "launch_id": 1}) == 1
    assert await store.trips.destroy({"user_id": 1, "launch_id": 1}) == 0
    assert [t.launch_id for t in await store.trips.find_all()] == [2]


async def test_destroy_requires_filter(store):
    with pytest.raises(ValueError):
        await store.trips.destroy({})


async def test_drop_missing_table_raises_table_not_found(store):
    await store.trips.drop_table()
    with pytest.raises(TableNotFoundError):
        await store.trips.drop_table()


async def test_create_existing_table_raises_database_error(store):
    with pytest.raises(DatabaseError) as exc_info:
        await store.users.create_table()
    assert not isinstance(exc_info.value, TableNotFoundError)


async def test_find_all_on_dropped_table_returns_none(store):
    await store.users.drop_table()
    assert await store.users.find_all() is None


async def test_drop_then_create_round_trip(store):
    await store.users.find_or_create({"email": "foo@bar.com"})
    await store.users.drop_table()
    await store.users.create_table()
    assert await store.users.find_all() == []


class _PgError(Exception):
    def __init__(self, pgcode):
        super().__init__("relation does not exist")
        self.pgcode = pgcode


def test_missing_table_detected_from_postgres_sqlstate():
    exc = ProgrammingError("DROP TABLE users", {}, _PgError("42P01"))
    assert is_missing_table_error(exc)


def test_other_postgres_errors_are_not_missing_table():
    exc = ProgrammingError("DROP TABLE users", {}, _PgError("42501"))
    assert not is_missing_table_error(exc)


def test_missing_table_detected_from_sqlite_message():
    exc = OperationalError("DROP TABLE users", {}, Exception("no such table: users"))
    assert is_missing_table_error(exc)


@asynccontextmanager
async def _refused_session():
    raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 1)")
    yield


async def test_find_all_returns_none_when_connection_refused(store, db_manager, monkeypatch):
    monkeypatch.setattr(db_manager, "session", _refused_session)

    assert await store.trips.find_all({"user_id": 1}) is None
    assert await store.users.find_all() is None


async def test_missing_tables_lists_dropped_tables(store):
    assert await store.missing_tables() == []
    await store.users.drop_table()
    assert await store.users.exists() is False
    assert await store.missing_tables() == ["users"]
