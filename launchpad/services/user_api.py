"""User API — business rules for resolving users and booking, listing and cancelling trips.

Invariants:
    - The RequestContext is an argument of every call; UserAPI holds no per-request state
    - User and trip resolution never raise on store failures: they collapse to None
    - book_trip and cancel_trip raise AuthenticationRequiredError when no user id
      can be determined; read paths return empty/False instead
    - book_trips preserves input order and silently omits failed bookings
    - cancel_trip answers True (deleted), False (nothing matched) or None (unknown)

Design Decisions:
    - Find-then-create without locks: Store.find_or_create resolves racing
      inserts through the database key constraints
    - Lookups return a tagged Outcome internally so logs can tell "absent" from
      "store failed" even though callers only see None
    - book_trips fan-out gated by a semaphore (max_concurrency = 0 means unbounded)
"""

import asyncio
import logging
from typing import Iterable

from launchpad.core.context import RequestContext
from launchpad.core.domain_types import LaunchId, Outcome, OutcomeKind, UserId
from launchpad.core.errors import (
    AuthenticationRequiredError, DatabaseError, LaunchpadError,
    TableNotFoundError,
)
from launchpad.core.validate_email import is_valid_email
from launchpad.infrastructure.store import Store
from launchpad.models.trip import Trip
from launchpad.models.user import User

logger = logging.getLogger(__name__)


def _as_store_error(exc: Exception, operation: str) -> LaunchpadError:
    if isinstance(exc, LaunchpadError):
        return exc
    return DatabaseError(str(exc), operation)


class UserAPI:
    """Data-access core between the request context and the Store."""

    def __init__(self, store: Store, max_concurrency: int = 10):
        self.store = store
        self.max_concurrency = max_concurrency

    # ─── Store lifecycle ─────────────────────────────────────────

    async def init(self) -> bool:
        """Drop users then trips, then recreate both. Destructive; tests/bootstrap only."""
        for table in (self.store.users, self.store.trips):
            try:
                await table.drop_table()
            except TableNotFoundError:
                logger.info(f"Table {table.name} did not exist, nothing to drop")
            except Exception as e:
                logger.error(f"Dropping {table.name} failed: {e}")
                return False

        for table in (self.store.users, self.store.trips):
            try:
                await table.create_table()
            except Exception as e:
                logger.error(f"Creating {table.name} failed: {e}")
                return False
        return True

    # ─── Users ───────────────────────────────────────────────────

    async def find_or_create_user(
        self, ctx: RequestContext, email: str | None = None,
    ) -> User | None:
        """Resolve the context user (or the given email) to a stored user, creating it if needed.

        The context user's email wins over the argument. Invalid emails and
        store failures both return None.
        """
        outcome = await self.resolve_user(ctx, email)
        return outcome.value_or_none()

    async def resolve_user(
        self, ctx: RequestContext, email: str | None = None,
    ) -> Outcome[User]:
        effective_email = ctx.user_email if ctx.user else email
        if not is_valid_email(effective_email):
            logger.info("User lookup skipped: missing or invalid email")
            return Outcome.not_found()

        try:
            users = await self.store.users.find_all({"email": effective_email})
            if users is None:
                return self._log_outcome(Outcome.store_error(DatabaseError(
                    "user lookup returned no result set", "find_all",
                )), "find_or_create_user", user_id=ctx.user_id)
            if users:
                return Outcome.found(users[0])

            created = await self.store.users.find_or_create({"email": effective_email})
        except Exception as e:
            return self._log_outcome(
                Outcome.store_error(_as_store_error(e, "find_or_create_user")),
                "find_or_create_user", user_id=ctx.user_id,
            )
        if not created:
            return Outcome.not_found()
        logger.info(f"Created user {created[0].id}", extra={"user_id": created[0].id})
        return Outcome.found(created[0])

    # ─── Trips ───────────────────────────────────────────────────

    async def book_trip(self, ctx: RequestContext, launch_id: LaunchId) -> Trip | None:
        """Idempotently book launch_id for the context user. None when the store fails."""
        user_id = ctx.user_id
        if user_id is None:
            raise AuthenticationRequiredError("book_trip")
        outcome = await self._find_or_create_trip(UserId(user_id), launch_id)
        return outcome.value_or_none()

    async def book_trips(
        self, ctx: RequestContext, launch_ids: Iterable[LaunchId],
    ) -> list[Trip]:
        """Book every launch concurrently; return the trips that succeeded, in input order."""
        if ctx.user_id is None:
            return []
        launch_ids = list(launch_ids)
        semaphore = (
            asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None
        )

        async def book_one(launch_id: LaunchId) -> Trip | None:
            if semaphore is None:
                return await self.book_trip(ctx, launch_id)
            async with semaphore:
                return await self.book_trip(ctx, launch_id)

        results = await asyncio.gather(
            *(book_one(launch_id) for launch_id in launch_ids),
            return_exceptions=True,
        )

        booked: list[Trip] = []
        for launch_id, result in zip(launch_ids, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(
                    f"Booking launch {launch_id} failed: {result}",
                    extra={"user_id": ctx.user_id, "launch_id": launch_id},
                )
                continue
            if result is None:
                continue
            booked.append(result)
        return booked

    async def cancel_trip(
        self, ctx: RequestContext, launch_id: LaunchId, user_id: UserId | None = None,
    ) -> bool | None:
        """Delete the (user, launch) trip. The context user wins over the user_id argument."""
        effective_user_id = ctx.user_id if ctx.user_id is not None else user_id
        if effective_user_id is None:
            raise AuthenticationRequiredError("cancel_trip")
        try:
            deleted = await self.store.trips.destroy(
                {"user_id": effective_user_id, "launch_id": launch_id},
            )
        except Exception as e:
            logger.error(
                f"Cancelling launch {launch_id} failed: {e}",
                extra={
                    "user_id": effective_user_id, "launch_id": launch_id,
                    "operation": "cancel_trip",
                },
            )
            return None
        return bool(deleted)

    async def get_launch_ids_by_user(self, ctx: RequestContext) -> list[int]:
        if ctx.user_id is None:
            return []
        trips = await self.store.trips.find_all({"user_id": ctx.user_id})
        if not trips:
            return []
        return [trip.launch_id for trip in trips if trip.launch_id is not None]

    async def is_booked_on_launch(self, ctx: RequestContext, launch_id: LaunchId) -> bool:
        if ctx.user_id is None:
            return False
        found = await self.store.trips.find_all(
            {"user_id": ctx.user_id, "launch_id": launch_id},
        )
        return bool(found)

    async def _find_or_create_trip(
        self, user_id: UserId, launch_id: LaunchId,
    ) -> Outcome[Trip]:
        keys = {"user_id": user_id, "launch_id": launch_id}
        try:
            trips = await self.store.trips.find_all(keys)
            if trips is None:
                return self._log_outcome(Outcome.store_error(DatabaseError(
                    "trip lookup returned no result set", "find_all",
                )), "book_trip", user_id=user_id, launch_id=launch_id)
            if trips:
                return Outcome.found(trips[0])
            created = await self.store.trips.find_or_create(keys)
        except Exception as e:
            return self._log_outcome(
                Outcome.store_error(_as_store_error(e, "book_trip")),
                "book_trip", user_id=user_id, launch_id=launch_id,
            )
        return Outcome.found(created[0]) if created else Outcome.not_found()

    @staticmethod
    def _log_outcome(outcome: Outcome, operation: str, **extra) -> Outcome:
        if outcome.kind is OutcomeKind.STORE_ERROR:
            logger.warning(
                f"{operation} collapsed a store error to None: {outcome.error.message}",
                extra={**extra, "operation": operation, "error_code": outcome.error.code},
            )
        return outcome
