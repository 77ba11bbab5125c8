"""Location Webhook — records the latest GPS fix for a shipment.

Invariants:
    - Payload validated before the DB dependency is resolved
    - 200 for both written and skipped (insignificant) updates
    - 404 only for ShipmentNotFoundError, 409 for conflicts, by error class
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from shiptrack.api.dependencies import get_shipment_service
from shiptrack.schemas.shipment import LocationUpdatedResponse
from shiptrack.schemas.webhook import (
    LocationWebhookPayload, validate_location_payload,
)
from shiptrack.services.shipment_service import ShipmentService

router = APIRouter(prefix="/api/v1", tags=["webhooks"])


def location_payload(payload: Any = Body(None)) -> LocationWebhookPayload:
    return validate_location_payload(payload, strip_unknown=True)


@router.post("/location-webhook", response_model=LocationUpdatedResponse)
async def location_webhook(
    data: LocationWebhookPayload = Depends(location_payload),
    service: ShipmentService = Depends(get_shipment_service),
):
    """Record a location update, optionally with a status change."""
    shipment = await service.update_location(
        data.shipment, data.latitude, data.longitude, data.status,
    )
    return LocationUpdatedResponse.from_record(shipment)
