"""Trip Routes — book, list, check and cancel trips for the context user.

Invariants:
    - POST reports success only when every requested launch ended up booked;
      failed launches are named in the message, never raised
    - DELETE maps the core's three answers: True -> success, False -> not
      found (success false), None -> 503 (outcome unknown)
    - Anonymous callers get empty/False reads and a 401 on DELETE
"""

import logging

from fastapi import APIRouter, Depends, Path

from launchpad.api.dependencies import get_request_context, get_user_api
from launchpad.core.context import RequestContext
from launchpad.core.domain_types import LaunchId
from launchpad.core.errors import DatabaseError, ErrorContext
from launchpad.schemas.trip import (
    BookingStatusResponse, BookTripsRequest, LaunchIdsResponse, TripUpdateResponse,
)
from launchpad.services.user_api import UserAPI

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/trips", tags=["trips"])


@router.get("", response_model=LaunchIdsResponse)
async def list_trips(
    ctx: RequestContext = Depends(get_request_context),
    user_api: UserAPI = Depends(get_user_api),
):
    """Launch ids booked by the current user."""
    return LaunchIdsResponse(launch_ids=await user_api.get_launch_ids_by_user(ctx))


@router.get("/{launch_id}", response_model=BookingStatusResponse)
async def booking_status(
    launch_id: int = Path(..., gt=0),
    ctx: RequestContext = Depends(get_request_context),
    user_api: UserAPI = Depends(get_user_api),
):
    is_booked = await user_api.is_booked_on_launch(ctx, LaunchId(launch_id))
    return BookingStatusResponse(launch_id=launch_id, is_booked=is_booked)


@router.post("", response_model=TripUpdateResponse)
async def book_trips(
    body: BookTripsRequest,
    ctx: RequestContext = Depends(get_request_context),
    user_api: UserAPI = Depends(get_user_api),
):
    """Book every requested launch; partial success is reported, not raised."""
    trips = await user_api.book_trips(ctx, [LaunchId(i) for i in body.launch_ids])
    booked = [trip.launch_id for trip in trips]
    missing = [i for i in body.launch_ids if i not in booked]
    if missing:
        message = f"the following launches couldn't be booked: {missing}"
    else:
        message = "trips booked successfully"
    return TripUpdateResponse(success=not missing, message=message, launch_ids=booked)


@router.delete("/{launch_id}", response_model=TripUpdateResponse)
async def cancel_trip(
    launch_id: int = Path(..., gt=0),
    ctx: RequestContext = Depends(get_request_context),
    user_api: UserAPI = Depends(get_user_api),
):
    cancelled = await user_api.cancel_trip(ctx, LaunchId(launch_id))
    if cancelled is None:
        raise DatabaseError(
            "trip cancellation outcome unknown", "delete",
            ErrorContext(user_id=ctx.user_id, launch_id=launch_id),
        )
    if not cancelled:
        return TripUpdateResponse(success=False, message="failed to cancel trip")
    logger.info(
        f"Trip for launch {launch_id} cancelled",
        extra={"user_id": ctx.user_id, "launch_id": launch_id},
    )
    return TripUpdateResponse(success=True, message="trip cancelled", launch_ids=[launch_id])
