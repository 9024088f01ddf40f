"""Table Store — per-entity find/create/destroy/DDL operations over the async engine.

Invariants:
    - Every call opens its own short-lived session (concurrent calls never share a transaction)
    - find_all never raises: unknown columns, store failures and refused
      connections all return None
    - find_or_create relies on the database key constraints as the only source of
      truth for "already exists"; a key violation re-reads and returns the winner
    - drop_table on a missing table raises TableNotFoundError, every other DDL
      failure raises DatabaseError

Design Decisions:
    - Filters are plain column->value mappings validated against the table's
      columns, so callers never build SQL
    - No application-level locking around insert: the unique/composite keys
      serialize racing inserts at the row level
"""

import logging
from typing import Any, Callable, Generic, TypeVar

from sqlalchemy import delete, inspect, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from launchpad.core.errors import (
    ConstraintViolationError, DatabaseError, TableNotFoundError,
)
from launchpad.db.base import Base
from launchpad.infrastructure.database import DatabaseSessionManager
from launchpad.models.trip import Trip
from launchpad.models.user import User

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for undefined_table
UNDEFINED_TABLE = "42P01"

ModelT = TypeVar("ModelT", bound=Base)


def is_missing_table_error(exc: SQLAlchemyError) -> bool:
    """True when the driver reports that the referenced table does not exist."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == UNDEFINED_TABLE:
        return True
    message = str(orig if orig is not None else exc).lower()
    return "no such table" in message


class Table(Generic[ModelT]):
    """Store operations for a single ORM model."""

    model: type[ModelT]

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _unknown_columns(self, where: dict[str, Any]) -> set[str]:
        return set(where) - set(self.model.__table__.columns.keys())

    async def find_all(self, where: dict[str, Any] | None = None) -> list[ModelT] | None:
        """Rows matching every column->value pair (all rows when where is empty)."""
        where = where or {}
        unknown = self._unknown_columns(where)
        if unknown:
            logger.warning(
                f"find_all on {self.name} with unknown columns {sorted(unknown)}",
                extra={"operation": "find_all"},
            )
            return None
        try:
            async with self.db.session() as s:
                result = await s.execute(select(self.model).filter_by(**where))
                return list(result.scalars().all())
        except DatabaseError as e:
            logger.error(
                f"find_all on {self.name} failed: {e.message}",
                extra={"operation": "find_all", "error_code": e.code},
            )
            return None
        except Exception as e:
            # raw driver errors, e.g. OSError on connect
            logger.error(
                f"find_all on {self.name} failed: {type(e).__name__}: {e}",
                extra={"operation": "find_all", "error_code": "DATABASE_ERROR"},
            )
            return None

    async def find_or_create(self, where: dict[str, Any]) -> list[ModelT]:
        """Insert a row built from where; on a key violation return the existing row."""
        unknown = self._unknown_columns(where)
        if unknown:
            raise DatabaseError(
                f"unknown columns {sorted(unknown)} for {self.name}", "insert",
            )
        record = self.model(**where)
        conflict: IntegrityError | None = None
        async with self.db.session() as s:
            s.add(record)
            try:
                await s.commit()
            except IntegrityError as e:
                await s.rollback()
                conflict = e
        if conflict is None:
            return [record]

        logger.info(
            f"Insert into {self.name} hit a key constraint, re-reading {where}",
            extra={"operation": "find_or_create"},
        )
        existing = await self.find_all(where)
        if existing:
            return [existing[0]]
        raise ConstraintViolationError(self.name, where) from conflict

    async def destroy(self, where: dict[str, Any]) -> int:
        """Delete rows matching where. Returns the number of rows removed."""
        if not where:
            raise ValueError(f"destroy on {self.name} requires a filter")
        unknown = self._unknown_columns(where)
        if unknown:
            raise DatabaseError(
                f"unknown columns {sorted(unknown)} for {self.name}", "delete",
            )
        async with self.db.session() as s:
            result = await s.execute(delete(self.model).filter_by(**where))
            await s.commit()
            return result.rowcount or 0

    async def create_table(self) -> None:
        await self._ddl("create table", lambda conn: self.model.__table__.create(conn))

    async def drop_table(self) -> None:
        await self._ddl("drop table", lambda conn: self.model.__table__.drop(conn))

    async def exists(self) -> bool:
        return await self.db.run_ddl(lambda conn: inspect(conn).has_table(self.name))

    async def _ddl(self, operation: str, fn: Callable[[Connection], None]) -> None:
        try:
            await self.db.run_ddl(fn)
        except SQLAlchemyError as e:
            if is_missing_table_error(e):
                raise TableNotFoundError(self.name, operation) from e
            logger.error(
                f"{operation} {self.name} failed: {e}",
                extra={"operation": operation},
            )
            raise DatabaseError(type(e).__name__, operation) from e


class UserTable(Table[User]):
    model = User


class TripTable(Table[Trip]):
    model = Trip


class Store:
    """The users and trips tables over one session manager."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db
        self.users = UserTable(db)
        self.trips = TripTable(db)

    async def missing_tables(self) -> list[str]:
        """Names of store tables not present in the database, users first."""
        return [t.name for t in (self.users, self.trips) if not await t.exists()]
