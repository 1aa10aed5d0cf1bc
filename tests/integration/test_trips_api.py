"""Integration tests for trip endpoints."""

import uuid
from decimal import Decimal
from typing import Any

import httpx
import pytest

from backend.app.api.auth import DEV_USER_ID

pytestmark = pytest.mark.integration


async def create_trip(
    client: httpx.AsyncClient,
    name: str = "Summer in Paris",
    start: str = "2026-06-10",
    end: str = "2026-06-20",
    budget: str = "1000",
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    response = await client.post(
        "/trips",
        json={"name": name, "start_date": start, "end_date": end, "budget": budget},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_trip_returns_empty_upcoming_trip(api_client: httpx.AsyncClient) -> None:
    trip = await create_trip(api_client)

    assert trip["name"] == "Summer in Paris"
    assert trip["start_date"] == "2026-06-10"
    assert trip["end_date"] == "2026-06-20"
    assert Decimal(trip["budget"]) == Decimal("1000")
    assert trip["status"] == "UPCOMING"
    assert trip["sections"] == []
    assert trip["user_id"] == str(DEV_USER_ID)


@pytest.mark.asyncio
async def test_create_single_day_trip(api_client: httpx.AsyncClient) -> None:
    trip = await create_trip(api_client, start="2026-06-01", end="2026-06-01")

    assert trip["status"] == "ONGOING"


@pytest.mark.asyncio
async def test_create_trip_rejects_reversed_dates(api_client: httpx.AsyncClient) -> None:
    response = await api_client.post(
        "/trips",
        json={"name": "Backwards", "start_date": "2026-06-20", "end_date": "2026-06-10"},
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error_kind"] == "RANGE_ORDER_INVALID"

    listing = await api_client.get("/trips")
    assert listing.json()["trips"] == []


@pytest.mark.asyncio
async def test_list_trips_filters_by_derived_status(api_client: httpx.AsyncClient) -> None:
    await create_trip(api_client, name="Past", start="2026-05-01", end="2026-05-05")
    await create_trip(api_client, name="Now", start="2026-05-28", end="2026-06-03")
    await create_trip(api_client, name="Later", start="2026-07-01", end="2026-07-10")

    everything = await api_client.get("/trips")
    ongoing = await api_client.get("/trips", params={"status": "ONGOING"})
    completed = await api_client.get("/trips", params={"status": "COMPLETED"})

    assert {trip["name"] for trip in everything.json()["trips"]} == {"Past", "Now", "Later"}
    assert [trip["name"] for trip in ongoing.json()["trips"]] == ["Now"]
    assert [trip["name"] for trip in completed.json()["trips"]] == ["Past"]


@pytest.mark.asyncio
async def test_trips_are_scoped_to_their_owner(api_client: httpx.AsyncClient) -> None:
    trip = await create_trip(api_client)
    other = {"Authorization": f"Bearer {uuid.uuid4()}"}

    response = await api_client.get(f"/trips/{trip['trip_id']}", headers=other)
    listing = await api_client.get("/trips", headers=other)

    assert response.status_code == 404
    assert response.json()["detail"] == "Trip not found."
    assert listing.json()["trips"] == []


@pytest.mark.asyncio
async def test_update_trip_fields(api_client: httpx.AsyncClient) -> None:
    trip = await create_trip(api_client)

    response = await api_client.put(
        f"/trips/{trip['trip_id']}", json={"name": "Paris and Lyon", "budget": "1500"}
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["name"] == "Paris and Lyon"
    assert Decimal(updated["budget"]) == Decimal("1500")
    assert updated["start_date"] == "2026-06-10"
    assert updated["end_date"] == "2026-06-20"


@pytest.mark.asyncio
async def test_update_trip_rejects_dates_that_drop_a_section(
    api_client: httpx.AsyncClient,
) -> None:
    trip = await create_trip(api_client)
    section = await api_client.post(
        f"/trips/{trip['trip_id']}/sections",
        json={"start_date": "2026-06-15", "end_date": "2026-06-18"},
    )
    assert section.status_code == 201

    response = await api_client.put(f"/trips/{trip['trip_id']}", json={"end_date": "2026-06-16"})

    assert response.status_code == 400
    assert response.json()["detail"]["error_kind"] == "OUT_OF_PARENT_BOUNDS"

    unchanged = (await api_client.get(f"/trips/{trip['trip_id']}")).json()
    assert unchanged["end_date"] == "2026-06-20"


@pytest.mark.asyncio
async def test_update_trip_rejects_reversed_dates(api_client: httpx.AsyncClient) -> None:
    trip = await create_trip(api_client)

    response = await api_client.put(
        f"/trips/{trip['trip_id']}", json={"start_date": "2026-06-25"}
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error_kind"] == "RANGE_ORDER_INVALID"


@pytest.mark.asyncio
async def test_delete_trip(api_client: httpx.AsyncClient) -> None:
    trip = await create_trip(api_client)
    await api_client.post(
        f"/trips/{trip['trip_id']}/sections",
        json={"start_date": "2026-06-10", "end_date": "2026-06-12"},
    )

    response = await api_client.delete(f"/trips/{trip['trip_id']}")

    assert response.status_code == 204
    assert (await api_client.get(f"/trips/{trip['trip_id']}")).status_code == 404


@pytest.mark.asyncio
async def test_missing_trip_returns_404(api_client: httpx.AsyncClient) -> None:
    missing = uuid.uuid4()

    assert (await api_client.get(f"/trips/{missing}")).status_code == 404
    assert (await api_client.delete(f"/trips/{missing}")).status_code == 404
    assert (await api_client.get(f"/trips/{missing}/budget")).status_code == 404
