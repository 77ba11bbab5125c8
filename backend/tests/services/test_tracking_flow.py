"""Tracking Flow — end-to-end create → locate → query through the HTTP API.

Invariants:
    - Coordinates come back exactly as sent (string precision preserved)
    - Repeated near-duplicate fixes never overwrite the first stored fix
"""


JOB = {"job": "B00001234", "shipment": "ABCD12345678", "status": "ADDED"}
FIRST_FIX = {
    "shipment": "ABCD12345678", "latitude": "49.0041951", "longitude": "-122.7322901",
}
NEAR_FIX = {
    "shipment": "ABCD12345678", "latitude": "49.0041960", "longitude": "-122.7322910",
}


async def test_create_update_query(client):
    created = await client.post("/api/v1/job-webhook", json=JOB)
    assert created.status_code == 201

    updated = await client.post("/api/v1/location-webhook", json=FIRST_FIX)
    assert updated.status_code == 200

    body = (await client.get("/api/v1/location/B00001234")).json()
    assert body["status"] == "ADDED"
    assert body["latitude"] == "49.0041951"
    assert body["longitude"] == "-122.7322901"


async def test_near_duplicate_fixes_do_not_drift(client):
    await client.post("/api/v1/job-webhook", json=JOB)
    await client.post("/api/v1/location-webhook", json=FIRST_FIX)

    for _ in range(2):
        res = await client.post("/api/v1/location-webhook", json=NEAR_FIX)
        assert res.status_code == 200
        assert res.json()["data"]["location"]["latitude"] == "49.0041951"

    body = (await client.get("/api/v1/location/B00001234")).json()
    assert body["latitude"] == "49.0041951"
    assert body["longitude"] == "-122.7322901"


async def test_delivery_closes_the_shipment(client):
    await client.post("/api/v1/job-webhook", json=JOB)
    delivered = await client.post(
        "/api/v1/location-webhook", json={**NEAR_FIX, "status": "DELIVERED"},
    )
    assert delivered.status_code == 200

    body = (await client.get("/api/v1/location/B00001234")).json()
    assert body["status"] == "DELIVERED"
    assert body["latitude"] == "49.0041960"

    late = await client.post("/api/v1/location-webhook", json=FIRST_FIX)
    assert late.status_code == 409
