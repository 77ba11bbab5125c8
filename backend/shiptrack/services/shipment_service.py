"""Shipment Service — orchestrates validation rules, consistency checks and storage writes.

Invariants:
    - Every mutation is preceded by its consistency check (read-then-write)
    - A race past the create pre-check surfaces as the same Conflict kind
    - Insignificant fixes without a status are skipped: no write, current record returned
    - A supplied status always forces a write of coordinates and status together
    - Terminal shipments never change to a different status
    - Stateless: the only collaborator is the injected repository

Design Decisions:
    - No retries: a storage failure surfaces as InternalError and the client
      retries the whole webhook
"""

import logging

from shiptrack.core.domain_types import Location, ShipmentRecord, ShipmentStatus
from shiptrack.core.enforce_status import check_status_change
from shiptrack.core.errors import (
    DuplicateKeyError, ErrorContext, InternalError, ShipmentConflictError,
)
from shiptrack.core.repository_protocols import ShipmentRepository
from shiptrack.core.significance import is_significant
from shiptrack.services.consistency_checks import (
    check_job_creation, check_location_update,
)

logger = logging.getLogger(__name__)


class ShipmentService:
    """Create jobs, record locations, answer job queries."""

    def __init__(self, repository: ShipmentRepository):
        self.repository = repository

    async def create_job(
        self, job_id: str, shipment_id: str, status: ShipmentStatus,
    ) -> ShipmentRecord:
        await check_job_creation(self.repository, job_id, shipment_id)

        try:
            shipment = await self.repository.insert(job_id, shipment_id, status)
        except DuplicateKeyError:
            raise ShipmentConflictError(
                "Job or shipment already exists",
                ErrorContext(job_id=job_id, shipment_id=shipment_id),
            ) from None

        logger.info(
            f"Job {job_id} created successfully",
            extra={"job_id": job_id, "shipment_id": shipment_id},
        )
        return shipment

    async def update_location(
        self,
        shipment_id: str,
        latitude: str,
        longitude: str,
        status: ShipmentStatus | None = None,
    ) -> ShipmentRecord:
        shipment = await check_location_update(self.repository, shipment_id)
        new_location = Location(latitude=latitude, longitude=longitude)

        if not is_significant(shipment.location, new_location) and status is None:
            logger.info(
                f"Location update for shipment {shipment_id} skipped - "
                "no significant change",
                extra={"shipment_id": shipment_id},
            )
            return shipment

        fields: dict[str, object] = {
            "latitude": latitude,
            "longitude": longitude,
        }
        if status is not None:
            check_status_change(shipment.status, status, shipment_id)
            fields["status"] = status
            logger.info(
                f"Updating shipment {shipment_id} status from "
                f"{shipment.status.value} to {ShipmentStatus(status).value}",
                extra={"shipment_id": shipment_id, "status": ShipmentStatus(status).value},
            )

        updated = await self.repository.update_one(
            {"shipment_id": shipment_id}, fields,
        )
        if updated is None:
            raise InternalError(
                f"Failed to update location for shipment {shipment_id}",
                context=ErrorContext(shipment_id=shipment_id),
            )

        logger.info(
            f"Location updated for shipment {shipment_id}",
            extra={"shipment_id": shipment_id},
        )
        return updated

    async def get_job_location(self, job_id: str) -> ShipmentRecord | None:
        return await self.repository.find_one({"job_id": job_id})
