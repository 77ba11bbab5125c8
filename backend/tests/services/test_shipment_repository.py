"""Shipment Repository — tests for the SQLAlchemy storage adapter.

Tests cover:
    - insert assigns timestamps and returns a record snapshot
    - unique job index surfaces as DuplicateKeyError and leaves the session usable
    - find_one accepts exactly one known criterion
    - update_one validates fields, refreshes updated_at, returns None on a miss
"""

import pytest

from shiptrack.core.domain_types import Location, ShipmentRecord, ShipmentStatus
from shiptrack.core.errors import DuplicateKeyError


async def test_insert_returns_record_with_timestamps(repository):
    record = await repository.insert("B00001234", "ABCD12345678", ShipmentStatus.ADDED)
    assert isinstance(record, ShipmentRecord)
    assert record.status is ShipmentStatus.ADDED
    assert record.location is None
    assert record.created_at is not None
    assert record.updated_at is not None


async def test_duplicate_job_raises_duplicate_key(repository):
    await repository.insert("B00001234", "ABCD12345678", ShipmentStatus.ADDED)
    with pytest.raises(DuplicateKeyError):
        await repository.insert("B00001234", "WXYZ12345678", ShipmentStatus.ADDED)

    # Session rolled back and still usable
    found = await repository.find_one({"job_id": "B00001234"})
    assert found.shipment_id == "ABCD12345678"


async def test_shipment_id_is_not_unique_at_storage_layer(repository):
    await repository.insert("B00001234", "ABCD12345678", ShipmentStatus.ADDED)
    await repository.insert("B00005678", "ABCD12345678", ShipmentStatus.ADDED)
    found = await repository.find_one({"shipment_id": "ABCD12345678"})
    assert found.job_id == "B00001234"


async def test_find_one_by_each_key(repository):
    await repository.insert("B00001234", "ABCD12345678", ShipmentStatus.ADDED)
    by_job = await repository.find_one({"job_id": "B00001234"})
    by_shipment = await repository.find_one({"shipment_id": "ABCD12345678"})
    assert by_job == by_shipment


async def test_find_one_missing_returns_none(repository):
    assert await repository.find_one({"job_id": "B00000000"}) is None


@pytest.mark.parametrize("criteria", [
    {},
    {"status": "ADDED"},
    {"job_id": "B00001234", "shipment_id": "ABCD12345678"},
])
async def test_find_one_rejects_bad_criteria(repository, criteria):
    with pytest.raises(ValueError):
        await repository.find_one(criteria)


async def test_update_one_sets_fields(repository):
    created = await repository.insert("B00001234", "ABCD12345678", ShipmentStatus.ADDED)
    updated = await repository.update_one(
        {"shipment_id": "ABCD12345678"},
        {
            "latitude": "49.0041951",
            "longitude": "-122.7322901",
            "status": ShipmentStatus.IN_TRANSIT,
        },
    )
    assert updated.location == Location("49.0041951", "-122.7322901")
    assert updated.status is ShipmentStatus.IN_TRANSIT
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at


async def test_update_one_missing_returns_none(repository):
    result = await repository.update_one(
        {"shipment_id": "ABCD12345678"},
        {"latitude": "1.0", "longitude": "2.0"},
    )
    assert result is None


async def test_update_one_runs_field_validation(repository):
    await repository.insert("B00001234", "ABCD12345678", ShipmentStatus.ADDED)
    with pytest.raises(ValueError):
        await repository.update_one(
            {"shipment_id": "ABCD12345678"},
            {"latitude": "123.0", "longitude": "2.0"},
        )


async def test_update_one_rejects_immutable_fields(repository):
    await repository.insert("B00001234", "ABCD12345678", ShipmentStatus.ADDED)
    with pytest.raises(ValueError, match="not updatable"):
        await repository.update_one(
            {"shipment_id": "ABCD12345678"}, {"job_id": "B00009999"},
        )
