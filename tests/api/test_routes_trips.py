"""Trip Routes — booking, listing, status and cancellation over HTTP.

Invariants:
    - POST reports success only when every launch was booked
    - DELETE: True → success, False → success false, None → 503, anonymous → 401
    - Anonymous reads return empty/False
"""

from unittest.mock import AsyncMock

from launchpad.core.errors import DatabaseError


async def test_book_list_and_check_trips(client, auth_headers):
    res = await client.post(
        "/api/v1/trips", json={"launch_ids": [5, 7]}, headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "message": "trips booked successfully",
        "launch_ids": [5, 7],
    }

    listed = await client.get("/api/v1/trips", headers=auth_headers)
    assert sorted(listed.json()["launch_ids"]) == [5, 7]

    status = await client.get("/api/v1/trips/5", headers=auth_headers)
    assert status.json() == {"launch_id": 5, "is_booked": True}


async def test_partial_booking_reports_failed_launches(client, auth_headers, store, monkeypatch):
    original = store.trips.find_or_create

    async def flaky(where):
        if where["launch_id"] == 7:
            raise DatabaseError("down", "insert")
        return await original(where)

    monkeypatch.setattr(store.trips, "find_or_create", flaky)

    res = await client.post(
        "/api/v1/trips", json={"launch_ids": [5, 7]}, headers=auth_headers,
    )

    body = res.json()
    assert body["success"] is False
    assert body["launch_ids"] == [5]
    assert "[7]" in body["message"]


async def test_anonymous_booking_books_nothing(client):
    res = await client.post("/api/v1/trips", json={"launch_ids": [1]})

    assert res.status_code == 200
    assert res.json()["success"] is False
    assert res.json()["launch_ids"] == []


async def test_booking_requires_launch_ids(client, auth_headers):
    res = await client.post("/api/v1/trips", json={"launch_ids": []}, headers=auth_headers)
    assert res.status_code == 400


async def test_booking_rejects_non_positive_ids(client, auth_headers):
    res = await client.post("/api/v1/trips", json={"launch_ids": [0]}, headers=auth_headers)
    assert res.status_code == 400


async def test_anonymous_reads_are_empty(client):
    assert (await client.get("/api/v1/trips")).json() == {"launch_ids": []}
    assert (await client.get("/api/v1/trips/1")).json() == {
        "launch_id": 1, "is_booked": False,
    }


async def test_cancel_trip(client, auth_headers):
    await client.post("/api/v1/trips", json={"launch_ids": [5]}, headers=auth_headers)

    res = await client.delete("/api/v1/trips/5", headers=auth_headers)
    assert res.json() == {"success": True, "message": "trip cancelled", "launch_ids": [5]}

    again = await client.delete("/api/v1/trips/5", headers=auth_headers)
    assert again.json()["success"] is False
    assert again.json()["message"] == "failed to cancel trip"


async def test_cancel_requires_authentication(client):
    res = await client.delete("/api/v1/trips/5")
    assert res.status_code == 401


async def test_cancel_unknown_outcome_is_503(client, auth_headers, store, monkeypatch):
    monkeypatch.setattr(
        store.trips, "destroy", AsyncMock(side_effect=DatabaseError("down", "delete")),
    )

    res = await client.delete("/api/v1/trips/5", headers=auth_headers)

    assert res.status_code == 503
    assert res.json()["error"]["context"]["launch_id"] == 5
