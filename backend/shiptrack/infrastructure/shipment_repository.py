"""Shipment Repository — SQLAlchemy implementation of core.repository_protocols.ShipmentRepository.

Invariants:
    - Returns ShipmentRecord snapshots, never ORM instances
    - insert translates a unique-index violation into DuplicateKeyError after rollback
    - update_one assigns through the ORM so @validates hooks run on every field
    - update_one is one transaction: the row is locked, mutated, committed
    - Lookups accept exactly one criterion from LOOKUP_KEYS
"""

import logging
from collections.abc import Mapping

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shiptrack.core.domain_types import ShipmentRecord, ShipmentStatus
from shiptrack.core.errors import DuplicateKeyError
from shiptrack.core.repository_protocols import LOOKUP_KEYS
from shiptrack.models.shipment import Shipment

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS: frozenset[str] = frozenset({"status", "latitude", "longitude"})


class SqlShipmentRepository:
    """Shipment persistence over a request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(
        self, job_id: str, shipment_id: str, status: ShipmentStatus,
    ) -> ShipmentRecord:
        shipment = Shipment(
            job_id=job_id, shipment_id=shipment_id, status=status,
        )
        self.db.add(shipment)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                f"Unique index rejected job {job_id}: {e.orig}",
                extra={"job_id": job_id, "shipment_id": shipment_id},
            )
            raise DuplicateKeyError(f"Job {job_id} already exists") from e
        await self.db.refresh(shipment)
        return shipment.to_record()

    async def find_one(
        self, criteria: Mapping[str, str],
    ) -> ShipmentRecord | None:
        result = await self.db.execute(_select_one(criteria))
        shipment = result.scalars().first()
        return shipment.to_record() if shipment else None

    async def update_one(
        self, criteria: Mapping[str, str], fields: Mapping[str, object],
    ) -> ShipmentRecord | None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields not updatable: {sorted(unknown)}")

        result = await self.db.execute(
            _select_one(criteria).with_for_update(),
        )
        shipment = result.scalars().first()
        if shipment is None:
            return None

        for name, value in fields.items():
            setattr(shipment, name, value)
        await self.db.commit()
        await self.db.refresh(shipment)
        return shipment.to_record()


def _select_one(criteria: Mapping[str, str]) -> Select:
    if len(criteria) != 1 or not set(criteria) <= LOOKUP_KEYS:
        raise ValueError(
            f"Lookup needs exactly one of {sorted(LOOKUP_KEYS)}, got {sorted(criteria)}",
        )
    return (
        select(Shipment)
        .filter_by(**criteria)
        .order_by(Shipment.created_at)
        .limit(1)
    )
