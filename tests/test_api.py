"""Tests API / API tests."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from fillup_ledger.models.fillup import Fillup

VEHICLE = {"name": "Daily", "make": "Honda", "model": "Civic", "year": 2019}


async def _create_vehicle(client, **overrides) -> int:
    resp = await client.post("/api/vehicles/", json={**VEHICLE, **overrides})
    assert resp.status_code == 201
    return resp.json()["id"]


async def _create_fillup(client, vehicle_id, odometer, fuel, day, **extra):
    payload = {
        "vehicle_id": vehicle_id,
        "date": f"2024-05-{day:02d}T08:00:00Z",
        "odometer": odometer,
        "fuel_volume": fuel,
        "price_per_unit": 3.5,
        "total_cost": 35.0,
        **extra,
    }
    return await client.post("/api/fillups/", json=payload)


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/api/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "running"
    assert "X-Request-ID" in resp.headers


@pytest.mark.asyncio
async def test_vehicle_crud(client):
    vehicle_id = await _create_vehicle(client, fuel_unit="LITERS", distance_unit="KILOMETERS")

    resp = await client.get(f"/api/vehicles/{vehicle_id}")
    assert resp.status_code == 200
    assert resp.json()["fuel_unit"] == "LITERS"

    resp = await client.put(f"/api/vehicles/{vehicle_id}", json={"name": "Weekend"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Weekend"
    assert resp.json()["make"] == "Honda"

    resp = await client.get("/api/vehicles/")
    assert [v["id"] for v in resp.json()] == [vehicle_id]

    resp = await client.delete(f"/api/vehicles/{vehicle_id}")
    assert resp.status_code == 204
    assert (await client.get(f"/api/vehicles/{vehicle_id}")).status_code == 404


@pytest.mark.asyncio
async def test_vehicle_validation(client):
    resp = await client.post("/api/vehicles/", json={**VEHICLE, "year": 1800})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_fillups_carry_mpg(client):
    vehicle_id = await _create_vehicle(client)

    first = await _create_fillup(client, vehicle_id, 10000, 10.0, 1)
    assert first.status_code == 201
    assert first.json()["mpg"] is None

    partial = await _create_fillup(client, vehicle_id, 10150, 5.0, 3, is_partial=True)
    assert partial.json()["mpg"] is None
    assert partial.json()["is_partial"] is True

    full = await _create_fillup(client, vehicle_id, 10300, 10.0, 5)
    assert full.json()["mpg"] == 20.0

    resp = await client.get(f"/api/fillups/{full.json()['id']}")
    assert resp.json()["mpg"] == 20.0
    assert resp.json()["date"] == "2024-05-05T08:00:00Z"

    resp = await client.get(f"/api/vehicles/{vehicle_id}/fillups")
    assert all(f["date"].endswith("Z") for f in resp.json())
    assert [f["odometer"] for f in resp.json()] == [10300, 10150, 10000]
    assert [f["mpg"] for f in resp.json()] == [20.0, None, None]


@pytest.mark.asyncio
async def test_stats(client):
    vehicle_id = await _create_vehicle(client)
    resp = await client.get(f"/api/vehicles/{vehicle_id}/stats")
    assert resp.status_code == 200
    empty = resp.json()
    assert empty["total_fillups"] == 0
    assert empty["total_distance"] == 0
    assert empty["average_mpg"] is None
    assert empty["best_mpg"] is None
    assert empty["worst_mpg"] is None
    assert empty["average_price_per_unit"] is None

    await _create_fillup(client, vehicle_id, 10000, 10.0, 1)
    await _create_fillup(client, vehicle_id, 10200, 10.0, 2)
    await _create_fillup(client, vehicle_id, 10450, 10.0, 3)

    stats = (await client.get(f"/api/vehicles/{vehicle_id}/stats")).json()
    assert stats["vehicle_name"] == "Daily"
    assert stats["total_fillups"] == 3
    assert stats["total_distance"] == 450
    assert stats["total_fuel_used"] == 30.0
    assert stats["total_spent"] == 105.0
    assert stats["best_mpg"] == 25.0
    assert stats["worst_mpg"] == 20.0
    assert stats["average_mpg"] == 22.5
    assert stats["average_price_per_unit"] == 3.5


@pytest.mark.asyncio
async def test_stats_unknown_vehicle(client):
    resp = await client.get("/api/vehicles/999/stats")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_fillup_unknown_vehicle(client):
    resp = await _create_fillup(client, 999, 10000, 10.0, 1)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_fillup_rejects_non_positive_fuel(client):
    vehicle_id = await _create_vehicle(client)
    resp = await _create_fillup(client, vehicle_id, 10000, 0, 1)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_fillup_odometer_conflicts(client):
    vehicle_id = await _create_vehicle(client)
    await _create_fillup(client, vehicle_id, 10000, 10.0, 1)
    await _create_fillup(client, vehicle_id, 10300, 10.0, 10)

    tie = await _create_fillup(client, vehicle_id, 10300, 10.0, 12)
    assert tie.status_code == 400
    assert "already recorded" in tie.json()["detail"]

    backwards = await _create_fillup(client, vehicle_id, 10200, 10.0, 12)
    assert backwards.status_code == 400

    # Saisie tardive entre deux pleins / Back-filled entry between two fill-ups
    backfill = await _create_fillup(client, vehicle_id, 10150, 4.0, 5, is_partial=True)
    assert backfill.status_code == 201

    resp = await client.get(f"/api/vehicles/{vehicle_id}/fillups")
    by_odometer = {f["odometer"]: f["mpg"] for f in resp.json()}
    # 300 / (4 + 10)
    assert by_odometer[10300] == 21.43


@pytest.mark.asyncio
async def test_update_fillup_recomputes_mpg(client):
    vehicle_id = await _create_vehicle(client)
    await _create_fillup(client, vehicle_id, 10000, 10.0, 1)
    partial = await _create_fillup(client, vehicle_id, 10150, 5.0, 3, is_partial=True)
    full = await _create_fillup(client, vehicle_id, 10300, 10.0, 5)
    assert full.json()["mpg"] == 20.0

    resp = await client.put(f"/api/fillups/{partial.json()['id']}", json={"is_partial": False})
    assert resp.status_code == 200
    assert resp.json()["mpg"] == 30.0

    resp = await client.get(f"/api/fillups/{full.json()['id']}")
    assert resp.json()["mpg"] == 15.0

    resp = await client.put(f"/api/fillups/{full.json()['id']}", json={"odometer": 10150})
    assert resp.status_code == 400

    resp = await client.put(f"/api/fillups/{full.json()['id']}", json={"is_missed": True, "odometer": None})
    assert resp.status_code == 200
    assert resp.json()["mpg"] is None
    assert resp.json()["odometer"] == 10300


@pytest.mark.asyncio
async def test_delete_fillup(client):
    vehicle_id = await _create_vehicle(client)
    first = await _create_fillup(client, vehicle_id, 10000, 10.0, 1)
    second = await _create_fillup(client, vehicle_id, 10300, 10.0, 5)

    resp = await client.delete(f"/api/fillups/{first.json()['id']}")
    assert resp.status_code == 204
    assert (await client.get(f"/api/fillups/{first.json()['id']}")).status_code == 404
    assert (await client.get(f"/api/fillups/{second.json()['id']}")).json()["mpg"] is None


@pytest.mark.asyncio
async def test_recent_fillups_are_capped(client):
    vehicle_id = await _create_vehicle(client)
    for day in range(1, 6):
        await _create_fillup(client, vehicle_id, 10000 + day * 100, 10.0, day)

    resp = await client.get(f"/api/vehicles/{vehicle_id}/fillups/recent", params={"limit": 2})
    assert [f["odometer"] for f in resp.json()] == [10500, 10400]

    resp = await client.get(f"/api/vehicles/{vehicle_id}/fillups/recent", params={"limit": 500})
    assert len(resp.json()) == 5


@pytest.mark.asyncio
async def test_delete_vehicle_removes_fillups(client):
    vehicle_id = await _create_vehicle(client)
    fillup = await _create_fillup(client, vehicle_id, 10000, 10.0, 1)

    assert (await client.delete(f"/api/vehicles/{vehicle_id}")).status_code == 204
    assert (await client.get(f"/api/fillups/{fillup.json()['id']}")).status_code == 404
    assert (await client.get(f"/api/vehicles/{vehicle_id}/fillups")).status_code == 404


@pytest.mark.asyncio
async def test_stored_fillup_with_invalid_fuel_is_a_bad_request(client, session_factory):
    vehicle_id = await _create_vehicle(client)
    # Ligne ecrite hors API / Row written outside the API
    async with session_factory() as session:
        fillup = Fillup(
            vehicle_id=vehicle_id,
            date=datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc),
            odometer=10000,
            fuel_volume=Decimal("0"),
            price_per_unit=Decimal("3.500"),
            total_cost=Decimal("35.00"),
        )
        session.add(fillup)
        await session.commit()
        fillup_id = fillup.id

    resp = await client.get(f"/api/fillups/{fillup_id}")
    assert resp.status_code == 400
    assert "fuel volume must be positive" in resp.json()["detail"]
