"""Trip Schemas — booking requests and trip update responses.

Invariants:
    - BookTripsRequest.launch_ids: 1-100 positive ids, duplicates removed, order kept
    - TripUpdateResponse.success is True only when every requested launch was handled
"""

from pydantic import BaseModel, Field, field_validator


class BookTripsRequest(BaseModel):
    launch_ids: list[int] = Field(..., min_length=1, max_length=100)

    @field_validator("launch_ids")
    @classmethod
    def positive_unique_ids(cls, v: list[int]) -> list[int]:
        if any(launch_id <= 0 for launch_id in v):
            raise ValueError("launch ids must be positive")
        return list(dict.fromkeys(v))


class TripUpdateResponse(BaseModel):
    success: bool
    message: str
    launch_ids: list[int] = []


class LaunchIdsResponse(BaseModel):
    launch_ids: list[int]


class BookingStatusResponse(BaseModel):
    launch_id: int
    is_booked: bool
