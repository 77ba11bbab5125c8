"""Consistency Checks — storage-backed uniqueness and state rules run before any write.

Invariants:
    - Read-only: only repository.find_one is called
    - Job-exists is checked before shipment binding, so a duplicate job is
      reported first when both rules fail
    - Two separate lookups, never one compound query: each failure names its own identifier
    - Failures raise typed errors; callers propagate them unchanged
"""

from shiptrack.core.domain_types import ShipmentRecord
from shiptrack.core.enforce_status import check_location_mutable
from shiptrack.core.errors import (
    ErrorContext, ShipmentConflictError, ShipmentNotFoundError,
)
from shiptrack.core.repository_protocols import ShipmentRepository


async def check_job_creation(
    repository: ShipmentRepository, job_id: str, shipment_id: str,
) -> None:
    """Raise ShipmentConflictError if the job exists or the shipment is bound elsewhere."""
    existing_job = await repository.find_one({"job_id": job_id})
    if existing_job:
        raise ShipmentConflictError(
            f"Job {job_id} already exists",
            ErrorContext(job_id=job_id, shipment_id=shipment_id),
        )

    existing_shipment = await repository.find_one({"shipment_id": shipment_id})
    if existing_shipment and existing_shipment.job_id != job_id:
        raise ShipmentConflictError(
            f"Shipment {shipment_id} is already associated with job "
            f"{existing_shipment.job_id}",
            ErrorContext(job_id=job_id, shipment_id=shipment_id),
        )


async def check_location_update(
    repository: ShipmentRepository, shipment_id: str,
) -> ShipmentRecord:
    """Return the current shipment, or raise if it is missing or terminal."""
    shipment = await repository.find_one({"shipment_id": shipment_id})
    if shipment is None:
        raise ShipmentNotFoundError(shipment_id)

    check_location_mutable(shipment.status, shipment_id)
    return shipment
