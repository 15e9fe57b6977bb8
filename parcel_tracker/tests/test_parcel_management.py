"""
Integration tests for the parcel API.

Tests parcel registration, lookup, lifecycle and deletion over HTTP.
"""

import pytest

from parcel_tracker.tests.factories import random_client


async def register(client, client_id: int = 1000, address: str = "test") -> dict:
    response = await client.post("/v1/parcels", json={"client": client_id, "address": address})
    assert response.status_code == 201
    return response.json()


# TEST 1: Register Parcel
@pytest.mark.asyncio
async def test_register_parcel_success(client):
    data = await register(client)

    assert data["number"] > 0
    assert data["client"] == 1000
    assert data["status"] == "registered"
    assert data["address"] == "test"
    assert data["created_at"].endswith("Z")


# TEST 2: Get Parcel
@pytest.mark.asyncio
async def test_get_parcel(client):
    created = await register(client)

    response = await client.get(f"/v1/parcels/{created['number']}")

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_get_missing_parcel_returns_404(client):
    response = await client.get("/v1/parcels/999")

    assert response.status_code == 404
    assert response.json()["error_code"] == "ERR_NOT_FOUND_001"


# TEST 3: List Client Parcels
@pytest.mark.asyncio
async def test_list_client_parcels(client):
    client_id = random_client()
    created = [await register(client, client_id, f"address {i}") for i in range(3)]
    await register(client, client_id + 1)

    response = await client.get(f"/v1/clients/{client_id}/parcels")

    assert response.status_code == 200
    by_number = {p["number"]: p for p in response.json()}
    assert by_number == {p["number"]: p for p in created}


@pytest.mark.asyncio
async def test_list_client_without_parcels(client):
    response = await client.get(f"/v1/clients/{random_client()}/parcels")

    assert response.status_code == 200
    assert response.json() == []


# TEST 4: Status Flow
@pytest.mark.asyncio
async def test_next_status(client):
    created = await register(client)
    url = f"/v1/parcels/{created['number']}/next-status"

    statuses = []
    for _ in range(3):
        response = await client.post(url)
        assert response.status_code == 200
        statuses.append(response.json()["status"])

    assert statuses == ["sent", "delivered", "delivered"]


# TEST 5: Address Change
@pytest.mark.asyncio
async def test_change_address(client):
    created = await register(client)

    response = await client.patch(
        f"/v1/parcels/{created['number']}/address",
        json={"address": "new test address"}
    )

    assert response.status_code == 200
    assert response.json()["address"] == "new test address"
    assert response.json()["status"] == "registered"


@pytest.mark.asyncio
async def test_change_address_after_sent_conflict(client):
    created = await register(client)
    await client.post(f"/v1/parcels/{created['number']}/next-status")

    response = await client.patch(
        f"/v1/parcels/{created['number']}/address",
        json={"address": "new test address"}
    )

    assert response.status_code == 409
    assert response.json()["error_code"] == "ERR_PARCEL_STATE_001"
    assert response.json()["details"]["status"] == "sent"


# TEST 6: Delete
@pytest.mark.asyncio
async def test_delete_parcel(client):
    created = await register(client)

    response = await client.delete(f"/v1/parcels/{created['number']}")
    assert response.status_code == 204

    response = await client.get(f"/v1/parcels/{created['number']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_sent_parcel_conflict(client):
    created = await register(client)
    await client.post(f"/v1/parcels/{created['number']}/next-status")

    response = await client.delete(f"/v1/parcels/{created['number']}")

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert "X-Correlation-ID" in response.headers
