"""Route Dependencies — wires request-scoped sessions into the shipment service."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shiptrack.infrastructure.database import get_db
from shiptrack.infrastructure.shipment_repository import SqlShipmentRepository
from shiptrack.services.shipment_service import ShipmentService


async def get_shipment_service(
    db: AsyncSession = Depends(get_db),
) -> ShipmentService:
    return ShipmentService(SqlShipmentRepository(db))
